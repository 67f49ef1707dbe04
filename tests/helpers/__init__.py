"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Token addresses and token objects
- factories: Pool, candidate, request and fake-source factories
"""

from tests.helpers.constants import (
    DAI,
    DAI_TOKEN,
    ETH_TOKEN,
    FRAX,
    FRAX_TOKEN,
    POOL_A,
    POOL_B,
    POOL_C,
    THREE_CRV,
    THREE_CRV_TOKEN,
    USDC,
    USDC_TOKEN,
    USDT,
    USDT_TOKEN,
    WBTC,
    WBTC_TOKEN,
    WETH,
    WETH_TOKEN,
)
from tests.helpers.factories import (
    FakeSource,
    failing,
    make_candidate,
    make_cp_pool,
    make_request,
    make_router,
)

__all__ = [
    # Constants
    "WETH",
    "USDC",
    "DAI",
    "USDT",
    "WBTC",
    "FRAX",
    "THREE_CRV",
    "ETH_TOKEN",
    "WETH_TOKEN",
    "USDC_TOKEN",
    "USDT_TOKEN",
    "DAI_TOKEN",
    "WBTC_TOKEN",
    "FRAX_TOKEN",
    "THREE_CRV_TOKEN",
    "POOL_A",
    "POOL_B",
    "POOL_C",
    # Factories
    "FakeSource",
    "failing",
    "make_candidate",
    "make_cp_pool",
    "make_request",
    "make_router",
]
