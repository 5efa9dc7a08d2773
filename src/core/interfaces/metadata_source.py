"""Contrato de una fuente de metadatos Gamma.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite sustituir el cliente HTTP por un fake en tests o por otra fuente
  (p.ej. un snapshot local) sin tocar a los consumidores.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import (
    ListTeamsRequest,
    RelatedTagsByIdRequest,
    RelatedTagsBySlugRequest,
    SportsMarketTypesResponse,
    SportsMetadata,
    Tag,
    TagRelationship,
    TagsRequest,
    Team,
)


@runtime_checkable
class GammaMetadataSource(Protocol):
    """Operaciones de lectura sobre equipos, deportes y tags.

    Reglas de diseño:
    - Todo es asíncrono porque típicamente hará I/O (HTTP).
    - Un recurso inexistente es un error, nunca un valor vacío.
    """

    async def teams(self, request: ListTeamsRequest) -> list[Team]: ...

    async def sports(self) -> list[SportsMetadata]: ...

    async def sports_market_types(self) -> SportsMarketTypesResponse: ...

    async def tags(self, request: TagsRequest) -> list[Tag]: ...

    async def tag_by_id(self, id: int, include_template: bool | None = None) -> Tag: ...

    async def tag_by_slug(self, slug: str, include_template: bool | None = None) -> Tag: ...

    async def tag_relationships_by_id(
        self, request: RelatedTagsByIdRequest
    ) -> list[TagRelationship]: ...

    async def tag_relationships_by_slug(
        self, request: RelatedTagsBySlugRequest
    ) -> list[TagRelationship]: ...

    async def related_tags_by_id(self, request: RelatedTagsByIdRequest) -> list[Tag]: ...

    async def related_tags_by_slug(self, request: RelatedTagsBySlugRequest) -> list[Tag]: ...
