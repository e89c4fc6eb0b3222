"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from datocms_cma.client import Client
from datocms_cma.core.config import ClientSettings, get_user_env_file, write_user_env_vars
from datocms_cma.core.errors import ApiError, DatoCMSError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_public_info(settings: ClientSettings) -> tuple[bool, str]:
    try:
        async with Client(settings) as client:
            info = await client.public_info.find()
        return True, f"Project: {info.name or info.id}"
    except (DatoCMSError, httpx.HTTPError) as exc:
        return False, str(exc)


async def _check_token(settings: ClientSettings) -> tuple[bool, str]:
    try:
        async with Client(settings) as client:
            site = await client.site.find()
        return True, f"Site '{site.name}' (locales: {', '.join(site.locales) or '-'})"
    except ApiError as exc:
        if exc.status_code in (401, 403):
            return False, f"Token rejected (HTTP {exc.status_code})"
        return False, str(exc)
    except (DatoCMSError, httpx.HTTPError) as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = ClientSettings()

    table = Table(title="datocms-cma Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("Environment", "OK", settings.environment or "primary")
    table.add_row("User config", "OK", str(get_user_env_file()))

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_public_info(settings))
    table.add_row("API connectivity", "OK" if ok_http else "FAIL", detail_http)

    if settings.api_token:
        ok_token, detail_token = asyncio.run(_check_token(settings))
        table.add_row("API token", "OK" if ok_token else "FAIL", detail_token)
    else:
        ok_token = False
        table.add_row("API token", "MISSING", "Set DATOCMS_API_TOKEN or run `doctor setup`")

    _console.print(table)

    if not ok_token:
        _console.print(
            "\n[yellow]Note:[/yellow] Most commands need a CMA token with access to the project."
        )


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    api_token = typer.prompt("API token", hide_input=True, confirmation_prompt=False).strip()
    environment = typer.prompt(
        "Sandbox environment (empty = primary)",
        default="",
        show_default=False,
    ).strip()

    if not api_token:
        raise typer.BadParameter("api token is required")

    env_path = write_user_env_vars(
        {
            "DATOCMS_API_TOKEN": api_token,
            "DATOCMS_ENVIRONMENT": environment or None,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
