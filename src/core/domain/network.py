"""Network targets for the marketplace API.

This module centralizes the preconfigured endpoints (production and the test
network) and the versioned path prefixes. Keeping it in the domain layer lets
configuration, adapters and the CLI share a single source of truth.
"""

from __future__ import annotations

from enum import Enum

ORDERBOOK_VERSION = 1
API_VERSION = 1

ORDERBOOK_PATH = f"/wyvern/v{ORDERBOOK_VERSION}"
API_PATH = f"/api/v{API_VERSION}"

API_BASE_MAINNET = "https://api.opensea.io"
API_BASE_RINKEBY = "https://rinkeby-api.opensea.io"
SITE_HOST_MAINNET = "https://opensea.io"
SITE_HOST_RINKEBY = "https://rinkeby.opensea.io"


class Network(str, Enum):
    """Supported network selectors."""

    MAIN = "main"
    RINKEBY = "rinkeby"

    @classmethod
    def default(cls) -> "Network":
        """Return the network used when none is configured."""

        return cls.MAIN

    @property
    def api_base_url(self) -> str:
        return API_BASE_RINKEBY if self is Network.RINKEBY else API_BASE_MAINNET

    @property
    def site_host(self) -> str:
        return SITE_HOST_RINKEBY if self is Network.RINKEBY else SITE_HOST_MAINNET

    def label(self) -> str:
        """Human readable label for tables and logging."""

        return "Rinkeby testnet" if self is Network.RINKEBY else "Mainnet"
