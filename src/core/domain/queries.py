"""Consultas tipadas para los endpoints de listado.

Todos los filtros son opcionales; solo los presentes viajan en el query
string. Los campos desconocidos se dejan pasar (`extra="allow"`): el catálogo
de filtros autoritativo es el de la API, no el de este cliente.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.models import OrderSide, SaleKind


class BaseQuery(BaseModel):
    model_config = ConfigDict(extra="allow")

    limit: int | None = Field(default=None, ge=0)
    offset: int | None = Field(default=None, ge=0)

    def to_params(self) -> dict[str, Any]:
        """Parámetros listos para `httpx` (sin `None`, enums como valor)."""

        params: dict[str, Any] = {}
        for key, value in self.model_dump(exclude_none=True).items():
            if isinstance(value, Enum):
                value = value.value
            params[key] = value
        return params


class OrderQuery(BaseQuery):
    owner: str | None = None
    maker: str | None = None
    taker: str | None = None
    side: OrderSide | None = None
    sale_kind: SaleKind | None = None
    asset_contract_address: str | None = None
    payment_token_address: str | None = None
    token_id: str | int | None = None
    token_ids: list[str | int] | None = None
    is_english: bool | None = None
    is_expired: bool | None = None
    bundled: bool | None = None
    include_invalid: bool | None = None
    include_bundled: bool | None = None
    listed_after: int | None = None
    listed_before: int | None = None
    order_by: str | None = None
    order_direction: str | None = None


class AssetQuery(BaseQuery):
    owner: str | None = None
    asset_contract_address: str | None = None
    token_ids: list[str | int] | None = None
    search: str | None = None
    order_by: str | None = None
    order_direction: str | None = None


class BundleQuery(BaseQuery):
    on_sale: bool | None = None
    owner: str | None = None
    asset_contract_address: str | None = None
    token_ids: list[str | int] | None = None


class TokenQuery(BaseQuery):
    symbol: str | None = None
    address: str | None = None
    name: str | None = None
