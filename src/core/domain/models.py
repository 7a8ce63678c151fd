"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Valida la respuesta JSON en el borde: si la forma no encaja, el adaptador
  lo reporta como `UnexpectedResponseShape` en vez de propagar dicts sueltos.
- `extra="allow"`: los campos que la API añada y no modelamos se conservan.

Nota:
- Los nombres de campo siguen el JSON de la API (snake_case), sin renombrados.
- Ningún campo se inventa: lo que falta en la respuesta queda en `None`.
"""

from __future__ import annotations

from decimal import Decimal
from enum import IntEnum
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class OrderSide(IntEnum):
    BUY = 0
    SELL = 1


class SaleKind(IntEnum):
    FIXED_PRICE = 0
    DUTCH_AUCTION = 1


class _APIModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class UserInfo(_APIModel):
    username: str | None = None


class Account(_APIModel):
    """Cuenta (wallet) tal como la expone la API."""

    address: str | None = None
    user: UserInfo | None = None
    profile_img_url: str | None = None
    config: str | None = None


class AssetContract(_APIModel):
    address: str | None = None
    name: str | None = None
    symbol: str | None = None
    schema_name: str | None = None
    description: str | None = None
    image_url: str | None = None
    external_link: str | None = None
    wiki_link: str | None = None

    buyer_fee_basis_points: int | None = None
    seller_fee_basis_points: int | None = None
    opensea_buyer_fee_basis_points: int | None = None
    opensea_seller_fee_basis_points: int | None = None


class Collection(_APIModel):
    name: str | None = None
    slug: str | None = None
    description: str | None = None
    image_url: str | None = None
    external_url: str | None = None
    payout_address: str | None = None
    dev_buyer_fee_basis_points: int | None = None
    dev_seller_fee_basis_points: int | None = None


class FungibleToken(_APIModel):
    """Token ERC20-like usado como moneda de pago."""

    name: str | None = None
    symbol: str | None = None
    decimals: int | None = None
    address: str | None = None
    image_url: str | None = None
    eth_price: Decimal | None = None
    usd_price: Decimal | None = None


class OrderJSON(_APIModel):
    """Payload de una orden firmada lista para publicarse en el orderbook.

    La firma y construcción de la orden ocurren fuera de este cliente; aquí
    solo se tipan los campos más habituales y se deja pasar el resto.
    """

    exchange: str | None = None
    maker: str | None = None
    taker: str | None = None
    quantity: Decimal | None = None
    maker_relayer_fee: Decimal | None = None
    taker_relayer_fee: Decimal | None = None
    maker_protocol_fee: Decimal | None = None
    taker_protocol_fee: Decimal | None = None
    maker_referrer_fee: Decimal | None = None
    fee_method: int | None = None
    fee_recipient: str | None = None
    side: OrderSide | None = None
    sale_kind: SaleKind | None = None
    how_to_call: int | None = None
    target: str | None = None
    calldata: str | None = None
    replacement_pattern: str | None = None
    static_target: str | None = None
    static_extradata: str | None = None
    payment_token: str | None = None
    base_price: Decimal | None = None
    extra: Decimal | None = None
    listing_time: int | None = None
    expiration_time: int | None = None
    salt: str | None = None
    hash: str | None = None
    metadata: dict[str, Any] | None = None
    v: int | None = None
    r: str | None = None
    s: str | None = None


class Order(_APIModel):
    """Orden (listing/oferta) firmada, leída del orderbook."""

    id: int | None = None
    order_hash: str | None = Field(
        default=None,
        description="Hash de la orden (clave natural en el orderbook).",
    )
    prefixed_hash: str | None = None
    exchange: str | None = None
    maker: Account | str | None = Field(
        default=None,
        description="Cuenta del creador; la API puede devolver objeto o dirección.",
    )
    taker: Account | str | None = None
    fee_recipient: Account | str | None = None

    side: OrderSide | None = None
    sale_kind: SaleKind | None = None
    how_to_call: int | None = None
    fee_method: int | None = None

    target: str | None = None
    calldata: str | None = None
    replacement_pattern: str | None = None
    static_target: str | None = None
    static_extradata: str | None = None

    payment_token: str | None = None
    payment_token_contract: FungibleToken | None = None
    base_price: Decimal | None = None
    current_price: Decimal | None = None
    extra: Decimal | None = None
    quantity: Decimal | None = None

    maker_relayer_fee: Decimal | None = None
    taker_relayer_fee: Decimal | None = None
    maker_protocol_fee: Decimal | None = None
    taker_protocol_fee: Decimal | None = None
    maker_referrer_fee: Decimal | None = None

    listing_time: int | None = None
    expiration_time: int | None = None
    salt: str | None = None
    v: int | None = None
    r: str | None = None
    s: str | None = None

    metadata: dict[str, Any] | None = None
    asset: Asset | None = None
    asset_bundle: AssetBundle | None = None

    cancelled: bool | None = None
    finalized: bool | None = None
    marked_invalid: bool | None = None
    approved_on_chain: bool | None = None
    created_date: str | None = None
    closing_date: str | None = None

    @property
    def maker_address(self) -> str | None:
        if isinstance(self.maker, Account):
            return self.maker.address
        return self.maker


class Asset(_APIModel):
    """Metadata de un token on-chain cacheada por la API."""

    token_id: str | None = Field(
        default=None,
        description="ID del token dentro de su contrato (string: puede exceder 2^53).",
    )
    name: str | None = None
    description: str | None = None
    external_link: str | None = None
    permalink: str | None = None
    background_color: str | None = None

    image_url: str | None = None
    image_preview_url: str | None = None
    image_thumbnail_url: str | None = None
    image_original_url: str | None = None
    animation_url: str | None = None

    owner: Account | None = None
    asset_contract: AssetContract | None = None
    collection: Collection | None = None

    orders: list[Order] | None = None
    sell_orders: list[Order] | None = None
    buy_orders: list[Order] | None = None

    traits: list[dict[str, Any]] | None = None
    last_sale: dict[str, Any] | None = None
    num_sales: int | None = None
    is_presale: bool | None = None
    transfer_fee: Decimal | None = None
    transfer_fee_payment_token: FungibleToken | None = None

    @property
    def token_address(self) -> str | None:
        return self.asset_contract.address if self.asset_contract else None


class AssetBundle(_APIModel):
    """Colección con nombre/slug de assets que se venden juntos."""

    maker: Account | None = None
    assets: list[Asset] | None = None
    asset_contract: AssetContract | None = None
    name: str | None = None
    slug: str | None = None
    permalink: str | None = None
    description: str | None = None
    external_link: str | None = None
    sell_orders: list[Order] | None = None


class OrdersPage(BaseModel):
    orders: list[Order] = Field(default_factory=list)
    count: int = Field(
        ...,
        ge=0,
        description="Total de órdenes que cumplen el filtro (puede exceder len(orders)).",
    )


class AssetsPage(BaseModel):
    assets: list[Asset] = Field(default_factory=list)
    estimated_count: int | None = Field(
        default=None,
        description="Conteo aproximado según la API.",
    )


class BundlesPage(BaseModel):
    bundles: list[AssetBundle] = Field(default_factory=list)
    estimated_count: int | None = None


class TokensPage(BaseModel):
    tokens: list[FungibleToken] = Field(default_factory=list)


Order.model_rebuild()
Asset.model_rebuild()
AssetBundle.model_rebuild()
