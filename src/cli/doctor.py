"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from cli.state import CliState
from core.config import AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(
    url: str,
    settings: AppSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[bool, str]:
    """Any HTTP answer (even 404) means the backend is reachable."""

    try:
        async with build_async_client(settings, transport=transport) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or type(exc).__name__


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    state: CliState = ctx.find_root().obj
    settings = state.settings

    table = Table(title="dojo-admin Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    base_url = (settings.api_base_url or "").strip()
    if base_url:
        table.add_row("API base URL", "OK", base_url)
    else:
        table.add_row("API base URL", "MISSING", "Set DOJO_ADMIN_API_BASE_URL or run `dojo-admin doctor setup`")
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    session = state.store.load()
    if session is not None:
        table.add_row("Session", "OK", f"{session.email or 'unknown user'} ({state.store.path})")
    else:
        table.add_row("Session", "NONE", "Run `dojo-admin login`")

    ok_http = False
    if base_url:
        ok_http, detail_http = asyncio.run(_check_http(base_url, settings, state.transport))
        table.add_row("API connectivity", "OK" if ok_http else "FAIL", detail_http)
    else:
        table.add_row("API connectivity", "SKIPPED", "No base URL")

    _console.print(table)

    if not base_url or not ok_http:
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores the API base URL in the user config .env)."""

    base_url = typer.prompt("API base URL", default="http://localhost:3000", show_default=True).strip()
    if not base_url.startswith(("http://", "https://")):
        raise typer.BadParameter("base URL must start with http:// or https://")

    env_path = write_user_env_vars({"DOJO_ADMIN_API_BASE_URL": base_url.rstrip("/")})
    _console.print(f"[green]Saved API config to:[/green] {env_path}")
