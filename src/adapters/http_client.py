"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers por defecto y límites del pool de conexiones.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings, load_settings


def default_headers(settings: AppSettings) -> dict[str, str]:
    return {
        "User-Agent": settings.user_agent,
        "Accept": "*/*",
        "Connection": "keep-alive",
        "Content-Type": "application/json",
    }


def build_async_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con los defaults del cliente Gamma.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las llamadas se comporten igual.
    - No hace I/O: la conectividad se comprueba en la primera petición.
    """

    settings = settings if settings is not None else load_settings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        limits=httpx.Limits(
            max_connections=settings.max_connections,
            max_keepalive_connections=settings.max_keepalive_connections,
        ),
        follow_redirects=True,
        headers=default_headers(settings),
        transport=transport,
    )
