"""Pytest configuration and fixtures."""

import pytest

from ecorouter.pools.registry import PoolSnapshot
from ecorouter.stableswap.pools import POOLS_MAINNET
from ecorouter.transport.view_call import MockViewCaller


@pytest.fixture
def view_caller() -> MockViewCaller:
    """A view caller with no canned responses (every call reverts)."""
    return MockViewCaller()


@pytest.fixture
def mainnet_stableswap_snapshot() -> PoolSnapshot:
    """Snapshot holding the bundled mainnet stableswap pools."""
    return PoolSnapshot.from_pools(1, POOLS_MAINNET)
