"""Doctor command for environment diagnostics."""

from __future__ import annotations

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import open_mart_client
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.domain.errors import MartError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_registry(settings: AppSettings) -> tuple[bool, str]:
    """Fetch the registry once; a decodable registry proves the endpoint works."""

    try:
        with open_mart_client(settings) as client:
            marts = client.list_marts()
    except (MartError, httpx.HTTPError) as exc:
        return False, str(exc) or type(exc).__name__
    return True, f"{len(marts)} marts"


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    # Reuse the settings built by the root callback so `--server` applies here too.
    shared = ctx.find_root().obj
    settings = shared if isinstance(shared, AppSettings) else AppSettings()

    table = Table(title="martclient Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Server URL", "OK", settings.server_url)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", str(env_file))

    # Connectivity (best-effort)
    ok_registry, detail_registry = _check_registry(settings)
    table.add_row("Registry", "OK" if ok_registry else "FAIL", detail_registry)

    _console.print(table)

    if not ok_registry:
        _console.print(
            "\n[yellow]Note:[/yellow] Use `martclient doctor setup` to point at another martservice mirror."
        )
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores the server URL in the user config .env)."""

    presets: dict[str, str] = {
        "ensembl": "http://www.ensembl.org/biomart/martservice",
        "useast": "http://useast.ensembl.org/biomart/martservice",
        "asia": "http://asia.ensembl.org/biomart/martservice",
        "plants": "http://plants.ensembl.org/biomart/martservice",
    }

    mirror = typer.prompt("Mirror preset (or 'custom')", default="ensembl", show_default=True).strip().lower()
    server_url = presets.get(mirror, "")
    if not server_url:
        server_url = typer.prompt("martservice URL").strip()
    if not server_url.startswith(("http://", "https://")):
        raise typer.BadParameter("server URL must start with http:// or https://")

    timeout = typer.prompt("HTTP timeout (seconds)", default="60", show_default=True).strip()

    env_path = write_user_env_vars(
        {
            "MARTCLIENT_SERVER_URL": server_url,
            "MARTCLIENT_HTTP_TIMEOUT_SECONDS": timeout,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
