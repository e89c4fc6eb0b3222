"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from datocms_cma.core.domain.models import Resource
from datocms_cma.core.errors import ApiError


def _cell(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, dict) and "id" in value:
        return str(value["id"])
    if isinstance(value, (list, tuple)):
        return ", ".join(_cell(v) for v in value) or "-"
    return str(value)


def _lookup(data: dict[str, Any], dotted: str) -> Any:
    value: Any = data
    for part in dotted.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def build_resources_table(
    title: str,
    resources: Iterable[Resource],
    columns: Sequence[str],
) -> Table:
    """Tabla con una fila por recurso; `id` siempre es la primera columna."""

    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    for column in columns:
        table.add_column(column.split(".")[-1].replace("_", " ").title(), style="white")

    for resource in resources:
        dump = resource.model_dump(mode="json")
        table.add_row(Text(resource.id), *(Text(_cell(_lookup(dump, c))) for c in columns))
    return table


def build_resource_panel(resource: Resource, title: str | None = None) -> Panel:
    """Panel clave/valor para un único recurso (singletons, `show`)."""

    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold cyan", no_wrap=True)
    table.add_column(style="white")
    for key, value in resource.model_dump(mode="json", exclude_none=True).items():
        if key in ("id", "type"):
            continue
        table.add_row(key, Text(_cell(value)))

    header = Text(title or resource.type, style="bold green")
    header.append(f"  #{resource.id}", style="dim")
    return Panel(table, title=header, border_style="green")


def build_error_panel(error: ApiError) -> Panel:
    """Panel para presentar un `ApiError` con sus códigos."""

    body = Text()
    body.append(f"{error.method} {error.url}\n", style="dim")
    body.append(f"HTTP {error.status_code}\n", style="bold")
    for entity in error.errors:
        body.append(f"- {entity.code}", style="bold red")
        if entity.details:
            body.append(f" {entity.details}")
        body.append("\n")
    return Panel(body, title=Text("API error", style="bold red"), border_style="red")
