"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from adapters.gamma_client import GammaClient, parse_host
from core.config import AppSettings, load_settings, write_user_env_vars
from core.errors import ClientError, ConfigurationError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with GammaClient(settings=settings) as client:
            response = await client.sports_market_types()
        return True, f"{len(response.market_types)} market types"
    except ClientError as exc:
        return False, f"{exc.kind.value}: {exc}"


@app.command()
def run() -> None:
    """Show the effective configuration and check connectivity to the Gamma API."""

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        _console.print(f"[red]configuration error:[/red] {escape(str(exc))}", highlight=False)
        raise typer.Exit(code=1) from exc

    table = Table(title="Gamma Client Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    try:
        host = str(parse_host(settings.base_url))
        table.add_row("Base URL", "OK", host)
    except ConfigurationError as exc:
        table.add_row("Base URL", "FAIL", str(exc))
        _console.print(table)
        raise typer.Exit(code=1) from exc
    table.add_row("User-Agent", "OK", settings.user_agent)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_http(settings))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http:
        raise typer.Exit(code=1)


@app.command(name="set-host")
def set_host(url: str = typer.Argument(..., help="Absolute base URL of the Gamma API.")) -> None:
    """Store a base URL override in the user config .env."""

    try:
        host = parse_host(url)
    except ConfigurationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    env_path = write_user_env_vars({"GAMMA_BASE_URL": str(host)})
    _console.print(f"[green]Saved base URL to:[/green] {env_path}")
