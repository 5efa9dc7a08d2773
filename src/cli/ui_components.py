"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas en múltiples comandos.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from rich.table import Table

from core.domain.models import SportsMarketTypesResponse, SportsMetadata, Tag, TagRelationship, Team


def _cell(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)


def dump_models(value: BaseModel | list[BaseModel]) -> Any:
    """Serializa modelos al formato del wire (camelCase) para `--json`."""

    if isinstance(value, list):
        return [item.model_dump(mode="json", by_alias=True) for item in value]
    return value.model_dump(mode="json", by_alias=True)


def build_teams_table(teams: list[Team]) -> Table:
    table = Table(title="Teams")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("League", style="magenta")
    table.add_column("Abbr.", style="green")
    table.add_column("Record", style="dim")
    for team in teams:
        table.add_row(
            _cell(team.id),
            _cell(team.name),
            _cell(team.league),
            _cell(team.abbreviation),
            _cell(team.record),
        )
    return table


def build_sports_table(sports: list[SportsMetadata]) -> Table:
    table = Table(title="Sports")
    table.add_column("Sport", style="cyan", no_wrap=True)
    table.add_column("Tags", style="white")
    table.add_column("Series", style="magenta")
    table.add_column("Resolution", style="dim")
    for sport in sports:
        table.add_row(
            sport.sport,
            ", ".join(sport.tag_ids()) or "-",
            _cell(sport.series),
            _cell(sport.resolution),
        )
    return table


def build_market_types_table(response: SportsMarketTypesResponse) -> Table:
    table = Table(title="Sports market types")
    table.add_column("Market type", style="cyan")
    for market_type in response.market_types:
        table.add_row(market_type)
    return table


def build_tags_table(tags: list[Tag], *, title: str = "Tags") -> Table:
    """Tabla de tags; se usa también para un único tag y para tags relacionados."""

    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Slug", style="white")
    table.add_column("Label", style="magenta")
    table.add_column("Carousel", style="green")
    for tag in tags:
        table.add_row(tag.id, _cell(tag.slug), _cell(tag.label), _cell(tag.is_carousel))
    return table


def build_relationships_table(relationships: list[TagRelationship]) -> Table:
    table = Table(title="Tag relationships")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Tag", style="white")
    table.add_column("Related tag", style="magenta")
    table.add_column("Rank", style="green")
    for rel in relationships:
        table.add_row(rel.id, _cell(rel.tag_id), _cell(rel.related_tag_id), _cell(rel.rank))
    return table
