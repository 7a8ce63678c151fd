"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.opensea_api import OpenSeaAPIClient
from core.config import AppSettings, write_user_env_vars
from core.domain.network import Network
from core.domain.queries import TokenQuery
from core.errors import OpenSeaAPIError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_api(
    settings: AppSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[bool, str]:
    """Single unretried request against the tokens listing."""

    client = OpenSeaAPIClient(settings, transport=transport)
    try:
        page = await client.get_tokens(TokenQuery(limit=1), retries=0)
    except OpenSeaAPIError as exc:
        return False, str(exc)
    return True, f"{len(page.tokens)} token(s) returned"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    client = OpenSeaAPIClient(settings)

    table = Table(title="opensea-client Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Network", "OK", settings.network.label())
    table.add_row("API base_url", "OK", client.api_base_url)
    table.add_row("Site host", "OK", client.host_url)
    if settings.api_key:
        table.add_row("API key", "OK", "X-API-KEY header enabled")
    else:
        table.add_row("API key", "OPTIONAL", "No key set -> requests may be rate limited")
    table.add_row("Page size", "OK", str(settings.page_size))

    # Connectivity (best-effort)
    ok_api, detail_api = asyncio.run(_check_api(settings))
    table.add_row("API connectivity", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)

    if not ok_api and not settings.api_key:
        _console.print("\n[yellow]Note:[/yellow] run `opensea doctor setup-key` to store an API key.")


@app.command(name="setup-key")
def setup_key() -> None:
    """Interactive API setup (stores config in the user config .env)."""

    network = typer.prompt(
        "Network",
        default=Network.default().value,
        show_default=True,
    ).strip().lower()

    try:
        selected = Network(network)
    except ValueError as exc:
        raise typer.BadParameter(f"network must be one of: {', '.join(n.value for n in Network)}") from exc

    api_key = typer.prompt("API key", hide_input=True, confirmation_prompt=False).strip()
    if not api_key:
        raise typer.BadParameter("api key is required")

    env_path = write_user_env_vars(
        {
            "OPENSEA_NETWORK": selected.value,
            "OPENSEA_API_KEY": api_key,
        }
    )

    _console.print(f"[green]Saved API config to:[/green] {env_path}")
