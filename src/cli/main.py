"""CLI principal (Typer).

Comandos de consulta sobre orderbook, assets, bundles y tokens. La CLI solo
arma queries, delega en `MarketplaceAPI` y presenta resultados con Rich.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Awaitable, Optional, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from adapters.json_exporter import export_models_json
from adapters.opensea_api import OpenSeaAPIClient
from cli import doctor
from cli.ui_components import (
    build_asset_panel,
    build_assets_table,
    build_bundles_table,
    build_orders_table,
    build_tokens_table,
    print_banner,
)
from core.config import AppSettings
from core.domain.models import OrderSide
from core.domain.network import Network
from core.domain.queries import AssetQuery, BundleQuery, OrderQuery, TokenQuery
from core.errors import OpenSeaAPIError
from core.interfaces.marketplace import MarketplaceAPI
from core.services.paging import collect_pages

T = TypeVar("T")

app = typer.Typer(no_args_is_help=True, help="Typed client for the OpenSea REST API.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


@dataclass
class CLIState:
    settings: AppSettings
    verbose: bool = False
    banner: bool = False


def build_api(settings: AppSettings, *, verbose: bool = False) -> MarketplaceAPI:
    """Construye el cliente concreto; con `verbose` el logger escribe en consola."""

    def _log(message: str) -> None:
        _console.log(message, style="dim", markup=False)

    return OpenSeaAPIClient(settings, _log if verbose else None)


def _state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        state = CLIState(settings=AppSettings())
        ctx.obj = state
    return state


def _api(ctx: typer.Context) -> MarketplaceAPI:
    state = _state(ctx)
    if state.banner:
        network = state.settings.network
        print_banner(
            _console,
            network_label=network.label(),
            api_base_url=state.settings.api_base_url or network.api_base_url,
        )
    return build_api(state.settings, verbose=state.verbose)


def _run(coro: Awaitable[T]) -> T:
    try:
        return asyncio.run(coro)  # type: ignore[arg-type]
    except OpenSeaAPIError as exc:
        _console.print(f"[red]Error:[/red] {escape(str(exc))}", highlight=False)
        raise typer.Exit(code=1) from exc


def _export(items: Any, json_out: Path | None) -> None:
    if json_out is None:
        return
    path = export_models_json(items=items, output_path=json_out)
    _console.print(f"[green]Saved JSON to:[/green] {path}")


@app.callback()
def main(
    ctx: typer.Context,
    network: Optional[Network] = typer.Option(None, "--network", "-n", help="Target network (main | rinkeby)."),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="API key sent as X-API-KEY."),
    api_base_url: Optional[str] = typer.Option(None, "--api-base-url", help="Override the API base URL."),
    page_size: Optional[int] = typer.Option(None, "--page-size", min=1, max=300, help="Page size for listings."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every request and response."),
    banner: bool = typer.Option(False, "--banner", help="Print the banner before results."),
) -> None:
    overrides: dict[str, Any] = {
        "network": network,
        "api_key": api_key,
        "api_base_url": api_base_url,
        "page_size": page_size,
    }
    settings = AppSettings(**{k: v for k, v in overrides.items() if v is not None})
    ctx.obj = CLIState(settings=settings, verbose=verbose, banner=banner)


@app.command()
def orders(
    ctx: typer.Context,
    contract: Optional[str] = typer.Option(None, "--contract", help="asset_contract_address filter."),
    token_id: Optional[str] = typer.Option(None, "--token-id", help="token_id filter."),
    maker: Optional[str] = typer.Option(None, "--maker"),
    owner: Optional[str] = typer.Option(None, "--owner"),
    side: Optional[str] = typer.Option(None, "--side", help="buy | sell"),
    page: int = typer.Option(1, "--page", min=1),
    pages: int = typer.Option(1, "--pages", min=1, help="Number of consecutive pages to fetch."),
    json_out: Optional[Path] = typer.Option(None, "--json-out", help="Export results to a JSON file."),
) -> None:
    """List orders from the orderbook."""

    query = OrderQuery(
        asset_contract_address=contract,
        token_id=token_id,
        maker=maker,
        owner=owner,
        side=_parse_side(side),
    )
    api = _api(ctx)

    async def fetch() -> tuple[list, int]:
        first = await api.get_orders(query, page=page)
        if pages == 1:
            return first.orders, first.count

        async def fetch_page(p: int) -> list:
            return (await api.get_orders(query, page=p)).orders

        rest = await collect_pages(fetch_page, pages=pages - 1, start_page=page + 1)
        return first.orders + rest, first.count

    found, count = _run(fetch())
    _console.print(build_orders_table(found, count=count))
    _export(found, json_out)


@app.command()
def order(
    ctx: typer.Context,
    contract: Optional[str] = typer.Option(None, "--contract"),
    token_id: Optional[str] = typer.Option(None, "--token-id"),
    maker: Optional[str] = typer.Option(None, "--maker"),
    side: Optional[str] = typer.Option(None, "--side", help="buy | sell"),
    json_out: Optional[Path] = typer.Option(None, "--json-out"),
) -> None:
    """Show the first order matching the filters."""

    query = OrderQuery(asset_contract_address=contract, token_id=token_id, maker=maker, side=_parse_side(side))
    found = _run(_api(ctx).get_order(query))
    if found is None:
        _console.print("[yellow]No order found.[/yellow]")
        raise typer.Exit(code=1)
    _console.print(build_orders_table([found]))
    _export(found, json_out)


@app.command()
def asset(
    ctx: typer.Context,
    token_address: str = typer.Argument(..., help="Asset contract address."),
    token_id: str = typer.Argument(..., help="Token ID."),
    json_out: Optional[Path] = typer.Option(None, "--json-out"),
) -> None:
    """Show a single asset."""

    found = _run(_api(ctx).get_asset(token_address, token_id))
    if found is None:
        _console.print("[yellow]Asset not found.[/yellow]")
        raise typer.Exit(code=1)
    _console.print(build_asset_panel(found))
    _export(found, json_out)


@app.command()
def assets(
    ctx: typer.Context,
    owner: Optional[str] = typer.Option(None, "--owner"),
    contract: Optional[str] = typer.Option(None, "--contract"),
    search: Optional[str] = typer.Option(None, "--search"),
    page: int = typer.Option(1, "--page", min=1),
    json_out: Optional[Path] = typer.Option(None, "--json-out"),
) -> None:
    """List assets."""

    query = AssetQuery(owner=owner, asset_contract_address=contract, search=search)
    result = _run(_api(ctx).get_assets(query, page=page))
    _console.print(build_assets_table(result.assets, estimated_count=result.estimated_count))
    _export(result.assets, json_out)


@app.command()
def bundle(
    ctx: typer.Context,
    slug: str = typer.Argument(..., help="Bundle slug."),
    json_out: Optional[Path] = typer.Option(None, "--json-out"),
) -> None:
    """Show a single bundle."""

    found = _run(_api(ctx).get_bundle(slug))
    if found is None:
        _console.print("[yellow]Bundle not found.[/yellow]")
        raise typer.Exit(code=1)
    _console.print(build_bundles_table([found]))
    if found.assets:
        _console.print(build_assets_table(found.assets))
    _export(found, json_out)


@app.command()
def bundles(
    ctx: typer.Context,
    owner: Optional[str] = typer.Option(None, "--owner"),
    contract: Optional[str] = typer.Option(None, "--contract"),
    on_sale: Optional[bool] = typer.Option(None, "--on-sale/--not-on-sale"),
    page: int = typer.Option(1, "--page", min=1),
    json_out: Optional[Path] = typer.Option(None, "--json-out"),
) -> None:
    """List bundles."""

    query = BundleQuery(owner=owner, asset_contract_address=contract, on_sale=on_sale)
    result = _run(_api(ctx).get_bundles(query, page=page))
    _console.print(build_bundles_table(result.bundles, estimated_count=result.estimated_count))
    _export(result.bundles, json_out)


@app.command()
def tokens(
    ctx: typer.Context,
    symbol: Optional[str] = typer.Option(None, "--symbol"),
    address: Optional[str] = typer.Option(None, "--address"),
    name: Optional[str] = typer.Option(None, "--name"),
    page: int = typer.Option(1, "--page", min=1),
    json_out: Optional[Path] = typer.Option(None, "--json-out"),
) -> None:
    """List fungible (payment) tokens."""

    query = TokenQuery(symbol=symbol, address=address, name=name)
    result = _run(_api(ctx).get_tokens(query, page=page))
    _console.print(build_tokens_table(result.tokens))
    _export(result.tokens, json_out)


@app.command(name="post-order")
def post_order(
    ctx: typer.Context,
    order_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Signed order JSON file."),
    retries: Optional[int] = typer.Option(None, "--retries", min=0, max=10),
) -> None:
    """Post a signed order (JSON file) to the orderbook."""

    try:
        payload = json.loads(order_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"{order_file} is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise typer.BadParameter(f"{order_file} must contain a JSON object")

    posted = _run(_api(ctx).post_order(payload, retries=retries))
    _console.print("[green]Order posted.[/green]")
    _console.print(build_orders_table([posted]))


def _parse_side(side: str | None) -> OrderSide | None:
    if side is None:
        return None
    try:
        return OrderSide[side.strip().upper()]
    except KeyError as exc:
        raise typer.BadParameter("side must be 'buy' or 'sell'") from exc


def run() -> None:
    app()


if __name__ == "__main__":
    run()
