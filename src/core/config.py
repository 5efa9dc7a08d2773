"""Configuración del cliente.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que el transporte HTTP y la CLI lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.errors import ConfigurationError

DEFAULT_BASE_URL = "https://gamma-api.polymarket.com"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "gamma-client"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "gamma-client"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "gamma-client"
    return Path.home() / ".config" / "gamma-client"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str]) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# gamma-client user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central del cliente.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="GAMMA_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        min_length=1,
        description="Host base de la Gamma API (URL absoluta).",
    )
    user_agent: str = Field(
        default="gamma-client/0.1",
        min_length=1,
        description="User-Agent enviado en cada petición.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout de socket del transporte (segundos).",
    )
    max_connections: int = Field(
        default=100,
        ge=1,
        description="Conexiones simultáneas máximas del pool.",
    )
    max_keepalive_connections: int = Field(
        default=20,
        ge=0,
        description="Conexiones keep-alive reutilizables en el pool.",
    )


def load_settings() -> AppSettings:
    """Carga `AppSettings` desde entorno/.env.

    Un valor inválido (p.ej. `GAMMA_HTTP_TIMEOUT_SECONDS=abc`) es un error de
    configuración del cliente, no un `ValidationError` suelto.
    """

    try:
        return AppSettings()
    except ValidationError as exc:
        fields = ", ".join(".".join(str(part) for part in err["loc"]) for err in exc.errors())
        raise ConfigurationError(f"invalid settings ({fields}): {exc.errors()[0]['msg']}") from exc
