from collections.abc import Callable

import httpx
import pytest

from adapters.opensea_api import OpenSeaAPIClient
from core.config import AppSettings

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def make_settings() -> Callable[..., AppSettings]:
    def factory(**overrides: object) -> AppSettings:
        values: dict[str, object] = {"api_key": "test-key", "page_size": 20}
        values.update(overrides)
        return AppSettings(_env_file=None, **values)

    return factory


@pytest.fixture
def make_client(make_settings: Callable[..., AppSettings]) -> Callable[..., OpenSeaAPIClient]:
    def factory(handler: Handler, *, logger=None, **overrides: object) -> OpenSeaAPIClient:
        return OpenSeaAPIClient(
            make_settings(**overrides),
            logger,
            transport=httpx.MockTransport(handler),
        )

    return factory
