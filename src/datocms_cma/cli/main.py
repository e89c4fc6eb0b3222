"""CLI `datocms-cma` (Typer + Rich).

Cada comando es un proxy fino sobre `Client`: abre el cliente, ejecuta una
operación y presenta el resultado como tabla/panel o como JSON (`--json`).
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Awaitable, Callable, Iterable, Optional, Sequence, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler

from datocms_cma.adapters.json_exporter import dump_resources, export_resources_json
from datocms_cma.cli.doctor import app as doctor_app
from datocms_cma.cli.ui_components import (
    build_error_panel,
    build_resource_panel,
    build_resources_table,
)
from datocms_cma.client import Client
from datocms_cma.core.config import ClientSettings
from datocms_cma.core.domain.models import Resource
from datocms_cma.core.errors import ApiError, DatoCMSError

T = TypeVar("T")

app = typer.Typer(no_args_is_help=True, help="DatoCMS Content Management API from the terminal.")
site_app = typer.Typer(no_args_is_help=True, help="Project settings (singleton).")
environments_app = typer.Typer(no_args_is_help=True, help="Primary and sandbox environments.")
maintenance_app = typer.Typer(no_args_is_help=True, help="Maintenance mode flag.")
menu_items_app = typer.Typer(no_args_is_help=True, help="Content navigation menu.")
schema_menu_items_app = typer.Typer(no_args_is_help=True, help="Schema navigation menu.")
plugins_app = typer.Typer(no_args_is_help=True, help="Installed plugins.")
webhooks_app = typer.Typer(no_args_is_help=True, help="Webhooks.")
build_triggers_app = typer.Typer(no_args_is_help=True, help="Build triggers.")
white_label_app = typer.Typer(no_args_is_help=True, help="White-label settings (Enterprise).")

app.add_typer(site_app, name="site")
app.add_typer(environments_app, name="environments")
app.add_typer(maintenance_app, name="maintenance")
app.add_typer(menu_items_app, name="menu-items")
app.add_typer(schema_menu_items_app, name="schema-menu-items")
app.add_typer(plugins_app, name="plugins")
app.add_typer(webhooks_app, name="webhooks")
app.add_typer(build_triggers_app, name="build-triggers")
app.add_typer(white_label_app, name="white-label")
app.add_typer(doctor_app, name="doctor")

_console = Console()

# Sustituible en tests (p.ej. para inyectar un transport falso).
client_factory: Callable[..., Client] = Client


@dataclass
class CliState:
    as_json: bool = False
    environment: str | None = None


def _configure_logging(verbose: bool) -> None:
    level: int | str = logging.DEBUG if verbose else ClientSettings().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of tables."),
    environment: Optional[str] = typer.Option(
        None,
        "--environment",
        "-e",
        help="Sandbox environment to target (defaults to DATOCMS_ENVIRONMENT / primary).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every HTTP request."),
) -> None:
    _configure_logging(verbose)
    ctx.obj = CliState(as_json=as_json, environment=environment)


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj if isinstance(ctx.obj, CliState) else CliState()


def _execute(ctx: typer.Context, operation: Callable[[Client], Awaitable[T]]) -> T:
    state = _state(ctx)
    overrides: dict[str, Any] = {}
    if state.environment:
        overrides["environment"] = state.environment

    async def _go() -> T:
        async with client_factory(**overrides) as client:
            return await operation(client)

    try:
        return asyncio.run(_go())
    except ApiError as exc:
        _console.print(build_error_panel(exc))
        raise typer.Exit(code=1) from exc
    except DatoCMSError as exc:
        _console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc


def _show(ctx: typer.Context, resource: Resource, title: str | None = None) -> None:
    if _state(ctx).as_json:
        typer.echo(dump_resources(resource), nl=False)
        return
    _console.print(build_resource_panel(resource, title))


def _show_many(
    ctx: typer.Context,
    resources: Iterable[Resource],
    *,
    title: str,
    columns: Sequence[str],
    output: Path | None = None,
) -> None:
    resources = list(resources)
    if output is not None:
        path = export_resources_json(resources=resources, output_path=output)
        _console.print(f"[green]Saved {len(resources)} records to:[/green] {path}")
        return
    if _state(ctx).as_json:
        typer.echo(dump_resources(resources), nl=False)
        return
    _console.print(build_resources_table(title, resources, columns))


_OUTPUT_OPTION = typer.Option(None, "--output", "-o", help="Write the records as JSON to this path.")


# Site


@site_app.command("show")
def site_show(ctx: typer.Context) -> None:
    """Show project settings (locales, timezone, SEO...)."""

    site = _execute(ctx, lambda c: c.site.find())
    _show(ctx, site, "Site")


# Environments


@environments_app.command("list")
def environments_list(ctx: typer.Context, output: Optional[Path] = _OUTPUT_OPTION) -> None:
    """List primary and sandbox environments."""

    envs = _execute(ctx, lambda c: c.environments.list())
    _show_many(
        ctx,
        envs,
        title="Environments",
        columns=["meta.status", "meta.primary", "meta.created_at"],
        output=output,
    )


@environments_app.command("fork")
def environments_fork(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="Environment to fork from."),
    new_id: str = typer.Argument(..., help="Id of the new sandbox environment."),
    fast: bool = typer.Option(False, "--fast", help="Fast fork (source becomes read-only meanwhile)."),
    force: bool = typer.Option(False, "--force", help="With --fast, ignore active editing sessions."),
    no_wait: bool = typer.Option(False, "--no-wait", help="Return immediately, do not wait for the job."),
) -> None:
    """Fork an environment into a new sandbox (takes 1-15 minutes)."""

    env = _execute(
        ctx,
        lambda c: c.environments.fork(
            source,
            new_id,
            immediate_return=no_wait,
            fast=fast,
            force=force,
        ),
    )
    _show(ctx, env, "Environment")


@environments_app.command("promote")
def environments_promote(ctx: typer.Context, environment_id: str) -> None:
    """Promote a sandbox to primary environment."""

    env = _execute(ctx, lambda c: c.environments.promote(environment_id))
    _show(ctx, env, "Environment")


@environments_app.command("rename")
def environments_rename(ctx: typer.Context, environment_id: str, new_id: str) -> None:
    """Rename an environment."""

    env = _execute(ctx, lambda c: c.environments.rename(environment_id, new_id))
    _show(ctx, env, "Environment")


@environments_app.command("destroy")
def environments_destroy(
    ctx: typer.Context,
    environment_id: str,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
) -> None:
    """Delete a sandbox environment."""

    if not yes:
        typer.confirm(f"Delete environment '{environment_id}'?", abort=True)
    env = _execute(ctx, lambda c: c.environments.destroy(environment_id))
    _show(ctx, env, "Deleted environment")


# Maintenance mode


@maintenance_app.command("status")
def maintenance_status(ctx: typer.Context) -> None:
    mode = _execute(ctx, lambda c: c.maintenance_mode.find())
    _show(ctx, mode, "Maintenance mode")


@maintenance_app.command("on")
def maintenance_on(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", help="Activate even with active editing sessions."),
) -> None:
    mode = _execute(ctx, lambda c: c.maintenance_mode.activate(force=force))
    _show(ctx, mode, "Maintenance mode")


@maintenance_app.command("off")
def maintenance_off(ctx: typer.Context) -> None:
    mode = _execute(ctx, lambda c: c.maintenance_mode.deactivate())
    _show(ctx, mode, "Maintenance mode")


# Menus


@menu_items_app.command("list")
def menu_items_list(ctx: typer.Context, output: Optional[Path] = _OUTPUT_OPTION) -> None:
    items = _execute(ctx, lambda c: c.menu_items.list())
    _show_many(
        ctx,
        sorted(items, key=lambda i: i.position or 0),
        title="Menu items",
        columns=["label", "position", "parent", "item_type"],
        output=output,
    )


@schema_menu_items_app.command("list")
def schema_menu_items_list(ctx: typer.Context, output: Optional[Path] = _OUTPUT_OPTION) -> None:
    items = _execute(ctx, lambda c: c.schema_menu_items.list())
    _show_many(
        ctx,
        sorted(items, key=lambda i: i.position or 0),
        title="Schema menu items",
        columns=["label", "kind", "position", "parent", "item_type"],
        output=output,
    )


# Plugins


@plugins_app.command("list")
def plugins_list(ctx: typer.Context, output: Optional[Path] = _OUTPUT_OPTION) -> None:
    plugins = _execute(ctx, lambda c: c.plugins.list())
    _show_many(
        ctx,
        plugins,
        title="Plugins",
        columns=["name", "package_name", "package_version", "url"],
        output=output,
    )


@plugins_app.command("fields")
def plugins_fields(ctx: typer.Context, plugin_id: str) -> None:
    """List the fields that use a plugin."""

    fields = _execute(ctx, lambda c: c.plugins.fields(plugin_id))
    _show_many(ctx, fields, title="Fields", columns=["label", "api_key", "field_type"])


# Webhooks


@webhooks_app.command("list")
def webhooks_list(ctx: typer.Context, output: Optional[Path] = _OUTPUT_OPTION) -> None:
    hooks = _execute(ctx, lambda c: c.webhooks.list())
    _show_many(ctx, hooks, title="Webhooks", columns=["name", "url", "enabled"], output=output)


@webhooks_app.command("show")
def webhooks_show(ctx: typer.Context, webhook_id: str) -> None:
    hook = _execute(ctx, lambda c: c.webhooks.find(webhook_id))
    _show(ctx, hook, "Webhook")


# Build triggers


@build_triggers_app.command("list")
def build_triggers_list(ctx: typer.Context, output: Optional[Path] = _OUTPUT_OPTION) -> None:
    triggers = _execute(ctx, lambda c: c.build_triggers.list())
    _show_many(
        ctx,
        triggers,
        title="Build triggers",
        columns=["name", "adapter", "build_status", "frontend_url"],
        output=output,
    )


@build_triggers_app.command("trigger")
def build_triggers_trigger(ctx: typer.Context, build_trigger_id: str) -> None:
    """Start a deploy."""

    _execute(ctx, lambda c: c.build_triggers.trigger(build_trigger_id))
    _console.print(f"[green]Build triggered:[/green] {build_trigger_id}")


@build_triggers_app.command("reindex")
def build_triggers_reindex(ctx: typer.Context, build_trigger_id: str) -> None:
    """Re-crawl the frontend for site search."""

    _execute(ctx, lambda c: c.build_triggers.reindex(build_trigger_id))
    _console.print(f"[green]Reindex started:[/green] {build_trigger_id}")


# Public info / white label


@app.command("public-info")
def public_info(ctx: typer.Context) -> None:
    """Show public branding info (no API token needed)."""

    info = _execute(ctx, lambda c: c.public_info.find())
    _show(ctx, info, "Public info")


@white_label_app.command("show")
def white_label_show(ctx: typer.Context) -> None:
    settings = _execute(ctx, lambda c: c.white_label_settings.find())
    _show(ctx, settings, "White-label settings")


def run() -> None:
    app()
