"""Adaptador HTTP para la API REST del marketplace (orderbook + assets).

Responsabilidad:
- Traducir llamadas tipadas (queries Pydantic) a peticiones HTTP contra la URL
  base configurada, adjuntando la cabecera `X-API-KEY`.
- Clasificar el status HTTP (éxito / no encontrado / validación / transitorio).
- Reintentar un número acotado de veces ante fallos transitorios (5xx, 429, red).
- Validar el JSON de respuesta contra los modelos del dominio.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Awaitable, Callable, Mapping, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings
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
from core.domain.network import API_PATH, ORDERBOOK_PATH
from core.domain.queries import AssetQuery, BaseQuery, BundleQuery, OrderQuery, TokenQuery
from core.errors import (
    NotFoundError,
    OpenSeaAPIError,
    TransientServiceError,
    UnauthorizedError,
    UnexpectedResponseShape,
    ValidationError,
)
from core.services.paging import merge_page_params

Logger = Callable[[str], None]

M = TypeVar("M", bound=BaseModel)
T = TypeVar("T")

_JSON_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


def _noop_logger(_: str) -> None:
    return None


def _extract_error_message(payload: Any) -> str | None:
    """Busca un mensaje legible en un cuerpo de error de la API."""

    if isinstance(payload, dict):
        errors = payload.get("errors")
        if isinstance(errors, list) and errors:
            return ", ".join(str(e) for e in errors)
        for key in ("message", "detail"):
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value
        err = payload.get("error")
        if isinstance(err, dict):
            message = err.get("message")
            if isinstance(message, str) and message.strip():
                return message
        if isinstance(err, str) and err.strip():
            return err
    if isinstance(payload, str) and payload.strip():
        return payload.strip()
    return None


def _order_payload(order: OrderJSON | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(order, BaseModel):
        return order.model_dump(mode="json", exclude_none=True)
    return dict(order)


def _query_params(query: BaseModel | Mapping[str, Any] | None) -> dict[str, Any]:
    if query is None:
        return {}
    if isinstance(query, BaseQuery):
        return query.to_params()
    if isinstance(query, BaseModel):
        return query.model_dump(exclude_none=True)
    return {k: v for k, v in query.items() if v is not None}


class OpenSeaAPIClient:
    """Cliente tipado de la API.

    La configuración es de solo lectura tras la construcción, salvo
    `page_size` y `logger`. No hay estado mutable compartido entre llamadas:
    cada petición abre su propio `httpx.AsyncClient`.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        logger: Logger | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        network = self._settings.network
        self._host_url = self._settings.host_url or network.site_host
        self._api_base_url = (self._settings.api_base_url or network.api_base_url).rstrip("/")
        self._api_key = self._settings.api_key or None
        self._transport = transport

        self.page_size = self._settings.page_size
        self.logger: Logger = logger or _noop_logger

    @property
    def host_url(self) -> str:
        return self._host_url

    @property
    def api_base_url(self) -> str:
        return self._api_base_url

    # Orderbook

    async def post_order(self, order: OrderJSON | Mapping[str, Any], retries: int | None = None) -> Order:
        """Publica una orden en el orderbook.

        Lanza `ValidationError` si la API la rechaza (sin reintento) y
        `TransientServiceError` si el servicio sigue caído tras `retries`
        reintentos. La API no deduplica: un reintento puede duplicar la orden.
        """

        payload = _order_payload(order)
        path = f"{ORDERBOOK_PATH}/orders/post/"

        async def attempt() -> Order:
            response = await self.post(path, payload)
            return self._validate(Order, self._read_json(response), path)

        if retries is None:
            retries = self._settings.post_order_retries
        return await self._with_retries(attempt, retries=retries, description="post_order")

    async def get_order(self, query: OrderQuery) -> Order | None:
        """Primera orden que cumple `query`, o `None` si no hay ninguna."""

        path = f"{ORDERBOOK_PATH}/orders/"
        params = {"limit": 1, **_query_params(query)}
        try:
            response = await self.get(path, params)
        except NotFoundError:
            return None

        data = self._read_json(response)
        orders = data.get("orders") if isinstance(data, dict) else data
        if not isinstance(orders, list):
            raise UnexpectedResponseShape(
                f"Expected a list of orders from {path}",
                status_code=response.status_code,
                payload=data,
                path=path,
            )
        if not orders:
            return None
        return self._validate(Order, orders[0], path)

    async def get_orders(self, query: OrderQuery | None = None, page: int = 1) -> OrdersPage:
        """Página de órdenes y el total (`count`) que reporta la API."""

        path = f"{ORDERBOOK_PATH}/orders/"
        params = merge_page_params(_query_params(query), page=page, page_size=self.page_size)
        response = await self.get(path, params)
        data = self._require_mapping(self._read_json(response), path)
        return self._validate(OrdersPage, {"orders": data.get("orders"), "count": data.get("count")}, path)

    # Assets

    async def get_asset(
        self,
        token_address: str,
        token_id: str | int,
        retries: int | None = None,
    ) -> Asset | None:
        """Asset por contrato + token id, o `None` si la API responde 404."""

        path = f"{API_PATH}/asset/{token_address}/{token_id}/"

        async def attempt() -> Asset | None:
            try:
                response = await self.get(path)
            except NotFoundError:
                return None
            return self._validate(Asset, self._read_json(response), path)

        if retries is None:
            retries = self._settings.get_asset_retries
        return await self._with_retries(attempt, retries=retries, description="get_asset")

    async def get_assets(self, query: AssetQuery | None = None, page: int = 1) -> AssetsPage:
        path = f"{API_PATH}/assets/"
        params = merge_page_params(_query_params(query), page=page, page_size=self.page_size)
        response = await self.get(path, params)
        data = self._require_mapping(self._read_json(response), path)
        return self._validate(
            AssetsPage,
            {"assets": data.get("assets"), "estimated_count": data.get("estimated_count")},
            path,
        )

    async def get_tokens(
        self,
        query: TokenQuery | None = None,
        page: int = 1,
        retries: int | None = None,
    ) -> TokensPage:
        """Tokens fungibles (monedas de pago). La API no devuelve conteo."""

        path = f"{API_PATH}/tokens/"
        params = merge_page_params(_query_params(query), page=page, page_size=self.page_size)

        async def attempt() -> TokensPage:
            response = await self.get(path, params)
            data = self._read_json(response)
            tokens = data.get("tokens") if isinstance(data, dict) else data
            return self._validate(TokensPage, {"tokens": tokens}, path)

        if retries is None:
            retries = self._settings.get_tokens_retries
        return await self._with_retries(attempt, retries=retries, description="get_tokens")

    # Bundles

    async def get_bundle(self, slug: str) -> AssetBundle | None:
        path = f"{API_PATH}/bundle/{slug}/"
        try:
            response = await self.get(path)
        except NotFoundError:
            return None

        data = self._read_json(response)
        if not data:
            return None
        return self._validate(AssetBundle, data, path)

    async def get_bundles(self, query: BundleQuery | None = None, page: int = 1) -> BundlesPage:
        path = f"{API_PATH}/bundles/"
        params = merge_page_params(_query_params(query), page=page, page_size=self.page_size)
        response = await self.get(path, params)
        data = self._require_mapping(self._read_json(response), path)
        return self._validate(
            BundlesPage,
            {"bundles": data.get("bundles"), "estimated_count": data.get("estimated_count")},
            path,
        )

    # Bajo nivel

    async def get(self, api_path: str, query: BaseModel | Mapping[str, Any] | None = None) -> httpx.Response:
        """GET con la query codificada en el query string."""

        return await self._fetch("GET", api_path, params=_query_params(query))

    async def post(
        self,
        api_path: str,
        body: Any | None = None,
        opts: Mapping[str, Any] | None = None,
    ) -> httpx.Response:
        """POST JSON. Si `opts["body"]` trae un cuerpo ya construido, se envía tal cual."""

        return await self._send_body("POST", api_path, body, opts)

    async def put(
        self,
        api_path: str,
        body: Any,
        opts: Mapping[str, Any] | None = None,
    ) -> httpx.Response:
        return await self._send_body("PUT", api_path, body, opts)

    async def _send_body(
        self,
        method: str,
        api_path: str,
        body: Any | None,
        opts: Mapping[str, Any] | None,
    ) -> httpx.Response:
        opts = opts or {}
        headers = {**_JSON_HEADERS, **(opts.get("headers") or {})}

        content: str | bytes | None
        if opts.get("body") is not None:
            content = opts["body"]
        elif body is not None:
            content = json.dumps(body, default=str)
        else:
            content = None

        return await self._fetch(method, api_path, content=content, headers=headers)

    async def _fetch(
        self,
        method: str,
        api_path: str,
        *,
        params: dict[str, Any] | None = None,
        content: str | bytes | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        url = f"{self._api_base_url}{api_path}"
        request_headers: dict[str, str] = dict(headers or {})
        if self._api_key:
            # La key configurada no se puede pisar desde opts["headers"].
            for name in [n for n in request_headers if n.lower() == "x-api-key"]:
                del request_headers[name]
            request_headers["X-API-KEY"] = self._api_key

        self.logger(f"Sending request: {method} {url} {json.dumps(params or {}, default=str)[:100]}")
        try:
            async with build_async_client(
                self._settings,
                extra_headers=request_headers,
                transport=self._transport,
            ) as client:
                response = await client.request(method, url, params=params or None, content=content)
        except httpx.TransportError as exc:
            self.logger(f"Request failed: {method} {url}: {exc}")
            raise TransientServiceError(
                f"Transport error for {method} {api_path}: {exc}",
                path=api_path,
            ) from exc

        return self._handle_api_response(response, api_path)

    def _handle_api_response(self, response: httpx.Response, api_path: str) -> httpx.Response:
        status = response.status_code
        if response.is_success:
            self.logger(f"Got success: {status}")
            return response

        payload: Any
        try:
            payload = response.json()
        except ValueError:
            payload = response.text

        self.logger(f"Got error {status}: {json.dumps(payload, default=str)[:200]}")
        message = _extract_error_message(payload)
        full = json.dumps(payload, default=str)

        error_cls: type[OpenSeaAPIError]
        if status == 404:
            error_cls, detail = NotFoundError, f"Not found. Full message was '{full}'"
        elif status in (401, 403):
            error_cls, detail = UnauthorizedError, message or f"Unauthorized. Full message was '{full}'"
        elif status == 429:
            error_cls, detail = TransientServiceError, message or f"Rate limited. Full message was '{full}'"
        elif status >= 500:
            error_cls = TransientServiceError
            if status == 503:
                detail = f"Service unavailable. Please try again in a few minutes. Full message was '{full}'"
            else:
                detail = f"Internal server error. Full message was '{full}'"
            if message:
                detail = f"{detail} ({message})"
        elif status >= 400:
            error_cls, detail = ValidationError, message or f"Invalid request: {full}"
        else:
            error_cls, detail = UnexpectedResponseShape, f"Unexpected status. Full message was '{full}'"

        raise error_cls(
            f"API Error {status}: {detail}",
            status_code=status,
            payload=payload,
            path=api_path,
        )

    # Decodificación

    @staticmethod
    def _read_json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise UnexpectedResponseShape(
                f"Response from {response.request.url.path} is not valid JSON",
                status_code=response.status_code,
                payload=response.text,
                path=response.request.url.path,
            ) from exc

    @staticmethod
    def _require_mapping(data: Any, api_path: str) -> dict[str, Any]:
        if not isinstance(data, dict):
            raise UnexpectedResponseShape(
                f"Expected a JSON object from {api_path}, got {type(data).__name__}",
                payload=data,
                path=api_path,
            )
        return data

    @staticmethod
    def _validate(model: type[M], data: Any, api_path: str) -> M:
        try:
            return model.model_validate(data)
        except PydanticValidationError as exc:
            raise UnexpectedResponseShape(
                f"Response from {api_path} does not match {model.__name__}: {exc.error_count()} error(s)",
                payload=data,
                path=api_path,
            ) from exc

    async def _with_retries(
        self,
        operation: Callable[[], Awaitable[T]],
        *,
        retries: int,
        description: str,
    ) -> T:
        attempt = 0
        while True:
            try:
                return await operation()
            except TransientServiceError as exc:
                if attempt >= retries:
                    raise
                attempt += 1
                self.logger(f"Retrying {description} ({attempt}/{retries}) after: {exc}")
                if self._settings.retry_delay_seconds > 0:
                    await asyncio.sleep(self._settings.retry_delay_seconds)
