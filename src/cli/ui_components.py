"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Asset, AssetBundle, FungibleToken, Order


def print_banner(console: Console, *, network_label: str, api_base_url: str) -> None:
    """Imprime el banner con la red y la URL base activas."""

    title = Text("opensea-client", style="bold cyan")
    subtitle = Text(f"{network_label} • {api_base_url}", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _fmt(value: object) -> str:
    if value is None:
        return "-"
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


def build_orders_table(orders: Sequence[Order], *, count: int | None = None) -> Table:
    title = "Orders" if count is None else f"Orders ({len(orders)} of {count})"
    table = Table(title=title)
    table.add_column("Hash", style="cyan", no_wrap=True)
    table.add_column("Side", style="white")
    table.add_column("Sale kind", style="white")
    table.add_column("Maker", style="magenta")
    table.add_column("Current price", style="green", justify="right")
    table.add_column("Asset", style="dim")

    for order in orders:
        asset_name = order.asset.name if order.asset else None
        table.add_row(
            _fmt(order.order_hash),
            order.side.name if order.side is not None else "-",
            order.sale_kind.name if order.sale_kind is not None else "-",
            _fmt(order.maker_address),
            _fmt(order.current_price),
            _fmt(asset_name),
        )
    return table


def build_assets_table(assets: Sequence[Asset], *, estimated_count: int | None = None) -> Table:
    title = "Assets" if estimated_count is None else f"Assets (~{estimated_count})"
    table = Table(title=title)
    table.add_column("Contract", style="cyan", no_wrap=True)
    table.add_column("Token ID", style="white")
    table.add_column("Name", style="green")
    table.add_column("Owner", style="magenta")
    table.add_column("Sales", style="dim", justify="right")

    for asset in assets:
        table.add_row(
            _fmt(asset.token_address),
            _fmt(asset.token_id),
            _fmt(asset.name),
            _fmt(asset.owner.address if asset.owner else None),
            _fmt(asset.num_sales),
        )
    return table


def build_bundles_table(bundles: Sequence[AssetBundle], *, estimated_count: int | None = None) -> Table:
    title = "Bundles" if estimated_count is None else f"Bundles (~{estimated_count})"
    table = Table(title=title)
    table.add_column("Slug", style="cyan", no_wrap=True)
    table.add_column("Name", style="green")
    table.add_column("Assets", style="white", justify="right")
    table.add_column("Permalink", style="magenta")

    for bundle in bundles:
        table.add_row(_fmt(bundle.slug), _fmt(bundle.name), str(len(bundle.assets or [])), _fmt(bundle.permalink))
    return table


def build_tokens_table(tokens: Sequence[FungibleToken]) -> Table:
    table = Table(title="Fungible tokens")
    table.add_column("Symbol", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Address", style="magenta")
    table.add_column("Decimals", style="dim", justify="right")
    table.add_column("USD", style="green", justify="right")

    for token in tokens:
        table.add_row(
            _fmt(token.symbol),
            _fmt(token.name),
            _fmt(token.address),
            _fmt(token.decimals),
            _fmt(token.usd_price),
        )
    return table


def build_asset_panel(asset: Asset) -> Panel:
    """Panel de detalle para un asset individual."""

    title = Text(asset.name or f"#{asset.token_id}", style="bold yellow")
    body = Text()
    if asset.description:
        body.append(asset.description.strip() + "\n\n")
    body.append(f"Contract: {_fmt(asset.token_address)}\n")
    body.append(f"Token ID: {_fmt(asset.token_id)}\n")
    if asset.collection and asset.collection.name:
        body.append(f"Collection: {asset.collection.name}\n")
    if asset.owner and asset.owner.address:
        body.append(f"Owner: {asset.owner.address}\n")
    if asset.sell_orders:
        body.append(f"Sell orders: {len(asset.sell_orders)}\n", style="green")
    if asset.permalink:
        body.append(f"\n{asset.permalink}", style="dim")

    return Panel(body, title=title, border_style="yellow")
