"""Contrato del cliente de marketplace.

Por qué Protocol:
- La CLI depende de este contrato estructural, no del adaptador HTTP concreto.
- Permite sustituir el cliente por un doble en tests sin herencia.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

from core.domain.models import (
    Asset,
    AssetBundle,
    AssetsPage,
    BundlesPage,
    Order,
    OrderJSON,
    OrdersPage,
    TokensPage,
)
from core.domain.queries import AssetQuery, BundleQuery, OrderQuery, TokenQuery


@runtime_checkable
class MarketplaceAPI(Protocol):
    """Operaciones de alto nivel sobre orderbook, assets, bundles y tokens.

    Reglas de diseño:
    - Todo es asíncrono (I/O HTTP).
    - Los getters de un solo recurso devuelven `None` cuando no existe.
    """

    async def post_order(self, order: OrderJSON | Mapping[str, Any], retries: int | None = None) -> Order: ...

    async def get_order(self, query: OrderQuery) -> Order | None: ...

    async def get_orders(self, query: OrderQuery | None = None, page: int = 1) -> OrdersPage: ...

    async def get_asset(
        self, token_address: str, token_id: str | int, retries: int | None = None
    ) -> Asset | None: ...

    async def get_assets(self, query: AssetQuery | None = None, page: int = 1) -> AssetsPage: ...

    async def get_tokens(
        self, query: TokenQuery | None = None, page: int = 1, retries: int | None = None
    ) -> TokensPage: ...

    async def get_bundle(self, slug: str) -> AssetBundle | None: ...

    async def get_bundles(self, query: BundleQuery | None = None, page: int = 1) -> BundlesPage: ...
