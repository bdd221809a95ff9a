"""CLI principal (Typer + Rich).

Por qué la CLI es delgada:
- Solo traduce flags a llamadas del `QueryBuilder`/`MartClient` y pinta tablas.
- Los errores se clasifican en el Core; aquí solo se muestran y se convierten
  en exit code 1.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn, Optional

import httpx
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from adapters.http_client import open_mart_client
from adapters.json_exporter import export_response_json
from cli import doctor
from cli.ui_components import (
    build_attributes_table,
    build_datasets_table,
    build_filters_table,
    build_marts_table,
    build_response_table,
    print_banner,
)
from core.config import AppSettings
from core.domain.errors import MartError
from core.services.mart_client import MartClient
from core.services.query_builder import QueryBuilder

app = typer.Typer(no_args_is_help=True, help="Query BioMart martservice endpoints.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def configure_logging(level: str) -> None:
    """Instala un `RichHandler` en el logger raíz (idempotente)."""

    root = logging.getLogger()
    root.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(RichHandler(console=_err_console, show_path=False, rich_tracebacks=False))


def settings_from(ctx: typer.Context) -> AppSettings:
    """Settings guardados por el callback raíz (con los overrides de la CLI)."""

    settings = ctx.find_root().obj
    return settings if isinstance(settings, AppSettings) else AppSettings()


def _client(ctx: typer.Context) -> MartClient:
    return open_mart_client(settings_from(ctx))


def _fail(exc: Exception) -> NoReturn:
    _err_console.print(f"[red]Error:[/red] {exc}")
    raise typer.Exit(code=1)


def _parse_match_filter(raw: str) -> tuple[str, list[str]]:
    name, sep, values = raw.partition("=")
    if not sep or not name.strip():
        raise typer.BadParameter(f"expected NAME=v1,v2,... got {raw!r}", param_hint="--filter")
    return name.strip(), [v.strip() for v in values.split(",") if v.strip()]


@app.callback()
def main(
    ctx: typer.Context,
    server: Optional[str] = typer.Option(None, "--server", help="martservice URL (overrides MARTCLIENT_SERVER_URL)."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR."),
) -> None:
    overrides: dict[str, str] = {}
    if server:
        overrides["server_url"] = server
    if log_level:
        overrides["log_level"] = log_level
    try:
        settings = AppSettings(**overrides)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    ctx.obj = settings
    configure_logging(settings.log_level)


@app.command()
def marts(ctx: typer.Context) -> None:
    """List the marts published in the server registry."""

    try:
        with _client(ctx) as client:
            items = client.list_marts()
    except (MartError, httpx.HTTPError) as exc:
        _fail(exc)
    _console.print(build_marts_table(items))


@app.command()
def datasets(ctx: typer.Context, mart: str = typer.Argument(..., help="Mart name (see `marts`).")) -> None:
    """List the datasets of a mart."""

    try:
        with _client(ctx) as client:
            items = client.list_datasets(mart)
    except (MartError, httpx.HTTPError) as exc:
        _fail(exc)
    _console.print(build_datasets_table(items))


@app.command()
def filters(
    ctx: typer.Context,
    mart: str = typer.Argument(..., help="Mart name."),
    dataset: str = typer.Argument(..., help="Dataset name (see `datasets`)."),
) -> None:
    """List the filters declared by a dataset."""

    try:
        with _client(ctx) as client:
            items = client.list_filters(mart, dataset)
    except (MartError, httpx.HTTPError) as exc:
        _fail(exc)
    _console.print(build_filters_table(items))


@app.command()
def attributes(
    ctx: typer.Context,
    mart: str = typer.Argument(..., help="Mart name."),
    dataset: str = typer.Argument(..., help="Dataset name (see `datasets`)."),
) -> None:
    """List the attributes declared by a dataset."""

    try:
        with _client(ctx) as client:
            items = client.list_attributes(mart, dataset)
    except (MartError, httpx.HTTPError) as exc:
        _fail(exc)
    _console.print(build_attributes_table(items))


@app.command()
def query(
    ctx: typer.Context,
    dataset: str = typer.Option(..., "--dataset", "-d", help="Dataset to query."),
    attribute: list[str] = typer.Option([], "--attribute", "-a", help="Attribute to return (repeatable)."),
    match: list[str] = typer.Option([], "--filter", "-f", help="Match filter NAME=v1,v2 (repeatable)."),
    include: list[str] = typer.Option([], "--include", help="Boolean filter, keep rows that have it."),
    exclude: list[str] = typer.Option([], "--exclude", help="Boolean filter, drop rows that have it."),
    mart: str = typer.Option("", "--mart", "-m", help="Mart name (informative)."),
    limit: int = typer.Option(0, "--limit", min=0, help="Row limit sent to the server (0 = unlimited)."),
    show: int = typer.Option(50, "--show", min=1, help="Rows to print in the terminal."),
    show_xml: bool = typer.Option(False, "--show-xml", help="Print the XML document and exit."),
    json_output: Optional[Path] = typer.Option(None, "--json-output", help="Write header + records as JSON."),
) -> None:
    """Build a query document and run it."""

    builder = QueryBuilder().set_mart(mart).set_dataset(dataset).set_row_limit(limit)
    for raw in match:
        name, values = _parse_match_filter(raw)
        builder.add_match_filter(name, values)
    for name in include:
        builder.add_boolean_filter(name, True)
    for name in exclude:
        builder.add_boolean_filter(name, False)
    builder.add_attributes(attribute)

    try:
        document = builder.build()
    except MartError as exc:
        _fail(exc)

    if show_xml:
        typer.echo(document.to_text())
        return

    print_banner(_console, settings_from(ctx).server_url)
    try:
        with _client(ctx) as client:
            response = client.run_query(document)
    except (MartError, httpx.HTTPError) as exc:
        _fail(exc)

    _console.print(build_response_table(response, limit=show))
    if json_output is not None:
        path = export_response_json(response=response, output_path=json_output, document=document)
        _console.print(f"[green]Saved results to:[/green] {path}")


def run() -> None:
    app()
