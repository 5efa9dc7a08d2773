"""CLI principal (`gamma`).

Cada comando mapea 1:1 a un accessor de `GammaClient`; la CLI es el único
sitio donde se capturan los `ClientError` (mensaje en rojo + exit code 1).
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from adapters.gamma_client import GammaClient
from cli.doctor import app as doctor_app
from cli.ui_components import (
    build_market_types_table,
    build_relationships_table,
    build_sports_table,
    build_tags_table,
    build_teams_table,
    dump_models,
)
from core.domain.models import (
    TAG_ID_MAX,
    ListTeamsRequest,
    RelatedTagsByIdRequest,
    RelatedTagsBySlugRequest,
    RelatedTagsStatus,
    TagsRequest,
)
from core.errors import ClientError

app = typer.Typer(no_args_is_help=True, help="Read-only client for the Polymarket Gamma metadata API.")
app.add_typer(doctor_app, name="doctor")

_console = Console()


def build_client() -> GammaClient:
    return GammaClient()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _run(call: Callable[[GammaClient], Awaitable[Any]]) -> Any:
    async def _go() -> Any:
        async with build_client() as client:
            return await call(client)

    try:
        return asyncio.run(_go())
    except ClientError as exc:
        _console.print(f"[red]{exc.kind.value} error:[/red] {escape(str(exc))}", highlight=False)
        raise typer.Exit(code=1) from exc


def _emit(value: Any, as_json: bool, table_builder: Callable[[Any], Any]) -> None:
    if as_json:
        _console.print_json(data=dump_models(value))
    else:
        _console.print(table_builder(value))


def _tristate(on: bool, off: bool, flags: str) -> Optional[bool]:
    if on and off:
        raise typer.BadParameter(f"{flags} are mutually exclusive")
    if on:
        return True
    if off:
        return False
    return None


def _parse_tag_id(identifier: str) -> int:
    try:
        tag_id = int(identifier)
    except ValueError as exc:
        raise typer.BadParameter(f"expected a numeric tag id, got {identifier!r} (use --slug)") from exc
    if not 0 <= tag_id <= TAG_ID_MAX:
        raise typer.BadParameter(f"tag id must be in [0, {TAG_ID_MAX}], got {tag_id}")
    return tag_id


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log each request to stderr."),
) -> None:
    _configure_logging(verbose)


@app.command()
def teams(
    limit: Optional[int] = typer.Option(None, "--limit", min=0),
    offset: Optional[int] = typer.Option(None, "--offset", min=0),
    order: Optional[str] = typer.Option(None, "--order", help="Field to sort by."),
    ascending: bool = typer.Option(False, "--ascending"),
    descending: bool = typer.Option(False, "--descending"),
    league: Optional[List[str]] = typer.Option(None, "--league"),
    name: Optional[List[str]] = typer.Option(None, "--name"),
    abbreviation: Optional[List[str]] = typer.Option(None, "--abbreviation"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of a table."),
) -> None:
    """List teams."""

    request = ListTeamsRequest(
        limit=limit,
        offset=offset,
        order=order,
        ascending=_tristate(ascending, descending, "--ascending/--descending"),
        league=league or None,
        name=name or None,
        abbreviation=abbreviation or None,
    )
    result = _run(lambda client: client.teams(request))
    _emit(result, as_json, build_teams_table)


@app.command()
def sports(
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of a table."),
) -> None:
    """List sports metadata."""

    result = _run(lambda client: client.sports())
    _emit(result, as_json, build_sports_table)


@app.command(name="market-types")
def market_types(
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of a table."),
) -> None:
    """List valid sports market types."""

    result = _run(lambda client: client.sports_market_types())
    _emit(result, as_json, build_market_types_table)


@app.command()
def tags(
    limit: Optional[int] = typer.Option(None, "--limit", min=0),
    offset: Optional[int] = typer.Option(None, "--offset", min=0),
    order: Optional[str] = typer.Option(None, "--order", help="Field to sort by."),
    ascending: bool = typer.Option(False, "--ascending"),
    descending: bool = typer.Option(False, "--descending"),
    include_template: bool = typer.Option(False, "--include-template"),
    exclude_template: bool = typer.Option(False, "--exclude-template"),
    is_carousel: bool = typer.Option(False, "--carousel", help="Only carousel tags."),
    not_carousel: bool = typer.Option(False, "--no-carousel", help="Only non-carousel tags."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of a table."),
) -> None:
    """List tags."""

    request = TagsRequest(
        limit=limit,
        offset=offset,
        order=order,
        ascending=_tristate(ascending, descending, "--ascending/--descending"),
        include_template=_tristate(include_template, exclude_template, "--include-template/--exclude-template"),
        is_carousel=_tristate(is_carousel, not_carousel, "--carousel/--no-carousel"),
    )
    result = _run(lambda client: client.tags(request))
    _emit(result, as_json, build_tags_table)


@app.command()
def tag(
    identifier: str = typer.Argument(..., help="Numeric tag id, or a slug with --slug."),
    slug: bool = typer.Option(False, "--slug", help="Treat IDENTIFIER as a slug."),
    include_template: bool = typer.Option(False, "--include-template"),
    exclude_template: bool = typer.Option(False, "--exclude-template"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of a table."),
) -> None:
    """Get a single tag by id or slug."""

    include = _tristate(include_template, exclude_template, "--include-template/--exclude-template")
    if slug:
        result = _run(lambda client: client.tag_by_slug(identifier, include_template=include))
    else:
        tag_id = _parse_tag_id(identifier)
        result = _run(lambda client: client.tag_by_id(tag_id, include_template=include))
    _emit(result, as_json, lambda value: build_tags_table([value], title="Tag"))


def _related_request(
    identifier: str,
    slug: bool,
    omit_empty: Optional[bool],
    status: Optional[RelatedTagsStatus],
) -> RelatedTagsByIdRequest | RelatedTagsBySlugRequest:
    if slug:
        return RelatedTagsBySlugRequest(slug=identifier, omit_empty=omit_empty, status=status)
    return RelatedTagsByIdRequest(
        id=_parse_tag_id(identifier), omit_empty=omit_empty, status=status
    )


@app.command()
def relationships(
    identifier: str = typer.Argument(..., help="Numeric tag id, or a slug with --slug."),
    slug: bool = typer.Option(False, "--slug", help="Treat IDENTIFIER as a slug."),
    omit_empty: bool = typer.Option(False, "--omit-empty"),
    keep_empty: bool = typer.Option(False, "--keep-empty"),
    status: Optional[RelatedTagsStatus] = typer.Option(None, "--status", case_sensitive=False),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of a table."),
) -> None:
    """List relationship edges of a tag."""

    request = _related_request(
        identifier, slug, _tristate(omit_empty, keep_empty, "--omit-empty/--keep-empty"), status
    )
    if isinstance(request, RelatedTagsBySlugRequest):
        result = _run(lambda client: client.tag_relationships_by_slug(request))
    else:
        result = _run(lambda client: client.tag_relationships_by_id(request))
    _emit(result, as_json, build_relationships_table)


@app.command()
def related(
    identifier: str = typer.Argument(..., help="Numeric tag id, or a slug with --slug."),
    slug: bool = typer.Option(False, "--slug", help="Treat IDENTIFIER as a slug."),
    omit_empty: bool = typer.Option(False, "--omit-empty"),
    keep_empty: bool = typer.Option(False, "--keep-empty"),
    status: Optional[RelatedTagsStatus] = typer.Option(None, "--status", case_sensitive=False),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of a table."),
) -> None:
    """List the tags related to a tag (resolved tags, not edges)."""

    request = _related_request(
        identifier, slug, _tristate(omit_empty, keep_empty, "--omit-empty/--keep-empty"), status
    )
    if isinstance(request, RelatedTagsBySlugRequest):
        result = _run(lambda client: client.related_tags_by_slug(request))
    else:
        result = _run(lambda client: client.related_tags_by_id(request))
    _emit(result, as_json, lambda value: build_tags_table(value, title="Related tags"))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
