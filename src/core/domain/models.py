"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- La Gamma API es un contrato de datos externo; Pydantic lo valida en el borde
  y nos da valores tipados en vez de `dict` sueltos.
- Las peticiones (filtros) también son modelos: se aplanan a query params de
  forma uniforme, omitiendo los campos ausentes.

Nota:
- Estos modelos describen *qué* expone la API, no *cómo* se obtiene.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict


def format_query_value(value: Any) -> str:
    """Representación en query string (`true`/`false` para booleanos)."""

    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class GammaModel(BaseModel):
    """Base de los recursos devueltos por la API (camelCase en el wire)."""

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
        coerce_numbers_to_str=True,
    )


class Team(GammaModel):
    id: int = Field(..., description="Identificador numérico del equipo.")
    name: str | None = None
    league: str | None = None
    record: str | None = None
    logo: str | None = None
    abbreviation: str | None = None
    alias: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SportsMetadata(GammaModel):
    """Metadatos de un deporte (imagen, fuente de resolución, tags asociados)."""

    sport: str = Field(..., min_length=1)
    image: str | None = None
    resolution: str | None = None
    ordering: str | None = None
    tags: str | None = Field(
        default=None,
        description="Ids de tags separados por comas, tal como los envía la API.",
    )
    series: str | None = None

    def tag_ids(self) -> list[str]:
        if not self.tags:
            return []
        return [item.strip() for item in self.tags.split(",") if item.strip()]


class SportsMarketTypesResponse(GammaModel):
    market_types: list[str] = Field(default_factory=list)


class Tag(GammaModel):
    id: str = Field(..., min_length=1)
    label: str | None = None
    slug: str | None = None
    force_show: bool | None = None
    force_hide: bool | None = None
    is_carousel: bool | None = None
    published_at: datetime | None = None
    created_by: int | None = None
    updated_by: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TagRelationship(GammaModel):
    """Arista entre dos tags (no el tag relacionado resuelto)."""

    id: str = Field(..., min_length=1)
    tag_id: int | None = Field(default=None, alias="tagID")
    related_tag_id: int | None = Field(default=None, alias="relatedTagID")
    rank: int | None = None


TAG_ID_MAX = 2**32 - 1


class RelatedTagsStatus(str, Enum):
    """Filtro de estado de los mercados asociados a una relación."""

    ACTIVE = "active"
    CLOSED = "closed"
    ALL = "all"


class QueryModel(BaseModel):
    """Filtro tipado que se aplana a query params.

    Reglas:
    - Campos `None` se omiten.
    - Listas se envían como claves repetidas.
    - Los campos de `path_fields` van en el path, no en la query.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    path_fields: ClassVar[frozenset[str]] = frozenset()

    def query_params(self) -> list[tuple[str, str]]:
        dumped = self.model_dump(mode="json", exclude_none=True, exclude=set(self.path_fields))
        params: list[tuple[str, str]] = []
        for name, value in dumped.items():
            items = value if isinstance(value, list) else [value]
            params.extend((name, format_query_value(item)) for item in items)
        return params


class ListTeamsRequest(QueryModel):
    limit: int | None = Field(default=None, ge=0)
    offset: int | None = Field(default=None, ge=0)
    order: str | None = None
    ascending: bool | None = None
    league: list[str] | None = None
    name: list[str] | None = None
    abbreviation: list[str] | None = None


class TagsRequest(QueryModel):
    limit: int | None = Field(default=None, ge=0)
    offset: int | None = Field(default=None, ge=0)
    order: str | None = None
    ascending: bool | None = None
    include_template: bool | None = None
    is_carousel: bool | None = None


class RelatedTagsByIdRequest(QueryModel):
    path_fields: ClassVar[frozenset[str]] = frozenset({"id"})

    id: int = Field(..., ge=0, le=TAG_ID_MAX)
    omit_empty: bool | None = None
    status: RelatedTagsStatus | None = None


class RelatedTagsBySlugRequest(QueryModel):
    path_fields: ClassVar[frozenset[str]] = frozenset({"slug"})

    slug: str = Field(..., min_length=1)
    omit_empty: bool | None = None
    status: RelatedTagsStatus | None = None
