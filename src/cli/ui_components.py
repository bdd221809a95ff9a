"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import AttributeInfo, DatasetInfo, FilterInfo, MartInfo
from core.domain.response import Response

_MAX_OPTIONS_SHOWN = 5


def print_banner(console: Console, server_url: str) -> None:
    """Imprime el banner con el servidor activo."""

    title = Text("martclient", style="bold cyan")
    subtitle = Text(f"BioMart • {server_url}", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"


def build_marts_table(marts: Sequence[MartInfo]) -> Table:
    table = Table(title=f"Marts ({len(marts)})")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Display name", style="white")
    table.add_column("Database", style="magenta")
    table.add_column("Host", style="dim")
    table.add_column("Visible", style="green")
    table.add_column("Default", style="green")
    for mart in marts:
        table.add_row(
            mart.name,
            mart.display_name,
            mart.database,
            f"{mart.host}:{mart.port}",
            _yes_no(mart.visible),
            _yes_no(mart.default),
        )
    return table


def build_datasets_table(datasets: Sequence[DatasetInfo]) -> Table:
    table = Table(title=f"Datasets ({len(datasets)})")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Display name", style="white")
    table.add_column("Version", style="magenta")
    table.add_column("Visible", style="green")
    for dataset in datasets:
        table.add_row(dataset.name, dataset.display_name, dataset.version, _yes_no(dataset.visible))
    return table


def build_filters_table(filters: Sequence[FilterInfo]) -> Table:
    table = Table(title=f"Filters ({len(filters)})")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Display name", style="white")
    table.add_column("Kind", style="magenta")
    table.add_column("Options", style="dim")
    for item in filters:
        options = ", ".join(item.options[:_MAX_OPTIONS_SHOWN])
        if len(item.options) > _MAX_OPTIONS_SHOWN:
            options += f" (+{len(item.options) - _MAX_OPTIONS_SHOWN})"
        table.add_row(item.name, item.display_name, item.kind.value, options)
    return table


def build_attributes_table(attributes: Sequence[AttributeInfo]) -> Table:
    table = Table(title=f"Attributes ({len(attributes)})")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Display name", style="white")
    table.add_column("Page", style="magenta")
    table.add_column("Description", style="dim")
    for item in attributes:
        table.add_row(item.name, item.display_name, item.page, item.description)
    return table


def build_response_table(response: Response, *, limit: int | None = None) -> Table:
    """Tabla para los resultados de una consulta (cabecera si existe)."""

    records = response.records()
    shown = records if limit is None else records[:limit]
    title = f"Results ({len(records)} rows)"
    if len(shown) < len(records):
        title += f", showing {len(shown)}"

    table = Table(title=title)
    header = response.header()
    width = len(header) if header else max((len(row) for row in records), default=0)
    for index in range(width):
        table.add_column(header[index] if header else f"#{index + 1}", style="white")
    for row in shown:
        table.add_row(*row[:width])
    return table
