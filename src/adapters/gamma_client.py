"""Cliente tipado de la Gamma API (Polymarket).

Un único pipeline (`GammaClient.execute`) construye, envía y clasifica cada
petición; los accessors públicos solo declaran path, query y tipo de respuesta.

Convención de la API a tener en cuenta:
- Un 2xx con cuerpo `null` se normaliza a `StatusError` 404. La API responde
  así cuando no encuentra el recurso, pero la normalización mezcla dos
  comportamientos del servidor (404 explícito vs. "éxito sin nada") en un
  mismo error visible para el llamador.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from functools import lru_cache
from typing import Any, Optional
from urllib.parse import quote

import httpx
from pydantic import AnyUrl, TypeAdapter, ValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings, load_settings
from core.domain.models import (
    TAG_ID_MAX,
    ListTeamsRequest,
    RelatedTagsByIdRequest,
    RelatedTagsBySlugRequest,
    SportsMarketTypesResponse,
    SportsMetadata,
    Tag,
    TagRelationship,
    TagsRequest,
    Team,
    format_query_value,
)
from core.errors import (
    NOT_FOUND_MESSAGE,
    ConfigurationError,
    DecodeError,
    StatusError,
    TransportError,
)

logger = logging.getLogger(__name__)

_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


def parse_host(host: str) -> AnyUrl:
    """Valida y normaliza una URL absoluta (`https://x.com` -> `https://x.com/`)."""

    try:
        return _URL_ADAPTER.validate_python(host)
    except ValidationError as exc:
        raise ConfigurationError(f"invalid host URL {host!r}: {exc.errors()[0]['msg']}", host=host) from exc


@lru_cache(maxsize=None)
def _optional_adapter(response_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(Optional[response_type])


def _request_path(request: httpx.Request) -> str:
    return request.url.raw_path.split(b"?", 1)[0].decode("ascii")


def _slug_segment(slug: str) -> str:
    return quote(slug, safe="")


async def _read_text(response: httpx.Response) -> str:
    try:
        await response.aread()
        return response.text
    except (httpx.HTTPError, LookupError):
        return ""


class GammaClient:
    """Cliente asíncrono de solo lectura para la Gamma API.

    El host y los headers por defecto se fijan en la construcción; ninguna
    llamada muta estado compartido, así que una instancia puede usarse desde
    cualquier número de tareas concurrentes sin locks.

    Example:
        async with GammaClient() as client:
            tag = await client.tag_by_slug("politics", include_template=True)
    """

    __slots__ = ("_host", "_http")

    def __init__(
        self,
        host: str | None = None,
        *,
        settings: AppSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = settings if settings is not None else load_settings()
        self._host = parse_host(host if host is not None else settings.base_url)
        self._http = build_async_client(settings, transport=transport)

    @property
    def host(self) -> AnyUrl:
        return self._host

    async def aclose(self) -> None:
        """Cierra el pool de conexiones (compartido por todas las copias)."""

        await self._http.aclose()

    async def __aenter__(self) -> GammaClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"GammaClient(host={str(self._host)!r})"

    def _get(self, resource: str, params: list[tuple[str, str]] | None = None) -> httpx.Request:
        return self._http.build_request("GET", f"{self._host}{resource}", params=params or None)

    async def execute(
        self,
        request: httpx.Request,
        response_type: Any,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Envía `request` y devuelve el cuerpo deserializado como `response_type`.

        - `headers`, si se pasa, reemplaza por completo los headers de la
          petición (no se mezclan con los por defecto). `Host` se recalcula a
          partir de la URL porque HTTP/1.1 lo exige.
        - Errores de red -> `TransportError`; no-2xx -> `StatusError` con el
          cuerpo tal cual; cuerpo que no valida -> `DecodeError`; cuerpo
          `null` -> `StatusError` 404.
        """

        method = request.method
        path = _request_path(request)

        if headers is not None:
            request.headers = httpx.Headers(headers)
            request.headers.setdefault("Host", request.url.netloc.decode("ascii"))

        logger.debug("Gamma API request %s %s", method, path, extra={"method": method, "path": path})
        try:
            response = await self._http.send(request, stream=True)
        except httpx.RequestError as exc:
            logger.warning(
                "Gamma API transport failure %s %s: %s",
                method,
                path,
                exc,
                extra={"method": method, "path": path},
            )
            raise TransportError(method, path, exc) from exc

        try:
            return await self._handle_response(response, response_type, method, path)
        finally:
            await response.aclose()

    async def _handle_response(
        self,
        response: httpx.Response,
        response_type: Any,
        method: str,
        path: str,
    ) -> Any:
        status_code = response.status_code
        extra = {"method": method, "path": path, "status_code": status_code}
        logger.debug("Gamma API response %s %s -> %s", method, path, status_code, extra=extra)

        if not response.is_success:
            message = await _read_text(response)
            logger.warning(
                "Gamma API request failed %s %s -> %s: %s",
                method,
                path,
                status_code,
                message,
                extra=extra,
            )
            raise StatusError(status_code, method, path, message)

        try:
            body = await response.aread()
        except httpx.RequestError as exc:
            raise TransportError(method, path, exc) from exc

        try:
            value = _optional_adapter(response_type).validate_json(body)
        except ValidationError as exc:
            raise DecodeError(method, path, exc) from exc

        if value is None:
            logger.warning("Gamma API resource not found %s %s", method, path, extra=extra)
            raise StatusError(404, method, path, NOT_FOUND_MESSAGE)
        return value

    async def teams(self, request: ListTeamsRequest) -> list[Team]:
        return await self.execute(self._get("teams", request.query_params()), list[Team])

    async def sports(self) -> list[SportsMetadata]:
        return await self.execute(self._get("sports"), list[SportsMetadata])

    async def sports_market_types(self) -> SportsMarketTypesResponse:
        return await self.execute(self._get("sports/market-types"), SportsMarketTypesResponse)

    async def tags(self, request: TagsRequest) -> list[Tag]:
        return await self.execute(self._get("tags", request.query_params()), list[Tag])

    async def tag_by_id(self, id: int, include_template: bool | None = None) -> Tag:
        if not 0 <= id <= TAG_ID_MAX:
            raise ValueError(f"tag id must be in [0, {TAG_ID_MAX}], got {id}")
        params = _include_template_params(include_template)
        return await self.execute(self._get(f"tags/{int(id)}", params), Tag)

    async def tag_by_slug(self, slug: str, include_template: bool | None = None) -> Tag:
        params = _include_template_params(include_template)
        return await self.execute(self._get(f"tags/slug/{_slug_segment(slug)}", params), Tag)

    async def tag_relationships_by_id(self, request: RelatedTagsByIdRequest) -> list[TagRelationship]:
        resource = f"tags/{request.id}/related-tags"
        return await self.execute(self._get(resource, request.query_params()), list[TagRelationship])

    async def tag_relationships_by_slug(
        self, request: RelatedTagsBySlugRequest
    ) -> list[TagRelationship]:
        resource = f"tags/slug/{_slug_segment(request.slug)}/related-tags"
        return await self.execute(self._get(resource, request.query_params()), list[TagRelationship])

    async def related_tags_by_id(self, request: RelatedTagsByIdRequest) -> list[Tag]:
        resource = f"tags/{request.id}/related-tags/tags"
        return await self.execute(self._get(resource, request.query_params()), list[Tag])

    async def related_tags_by_slug(self, request: RelatedTagsBySlugRequest) -> list[Tag]:
        resource = f"tags/slug/{_slug_segment(request.slug)}/related-tags/tags"
        return await self.execute(self._get(resource, request.query_params()), list[Tag])


def _include_template_params(include_template: bool | None) -> list[tuple[str, str]]:
    if include_template is None:
        return []
    return [("include_template", format_query_value(include_template))]
