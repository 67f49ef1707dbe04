"""Tests for PoolRegistry and PoolSnapshot."""

import asyncio

import pytest

from ecorouter.errors import NetworkError
from ecorouter.pools.registry import PoolRegistry, PoolSnapshot, StaticFetcher
from ecorouter.pools.static import STATIC_POOLS, default_fetcher
from ecorouter.pools.types import ConcentratedPool, StableswapPool
from tests.helpers import (
    DAI_TOKEN,
    POOL_A,
    POOL_B,
    POOL_C,
    USDC,
    USDC_TOKEN,
    WETH,
    make_cp_pool,
)


@pytest.fixture
def stable_pool() -> StableswapPool:
    return StableswapPool(address=POOL_A, name="pair", tokens=(DAI_TOKEN, USDC_TOKEN))


class TestPoolSnapshot:
    def test_splits_by_family(self, stable_pool):
        cp = make_cp_pool(USDC, WETH, address=POOL_B)
        cl = ConcentratedPool(POOL_C, USDC, WETH, "uniswap-v3", fee=500)

        snapshot = PoolSnapshot.from_pools(1, [stable_pool, cp, cl])

        assert snapshot.stableswap == (stable_pool,)
        assert snapshot.constant_product == (cp,)
        assert snapshot.concentrated == (cl,)
        assert snapshot.pool_count == 3

    def test_duplicates_dropped_first_wins(self, stable_pool):
        duplicate = StableswapPool(
            address=POOL_A.upper().replace("0X", "0x"), name="dup", tokens=(DAI_TOKEN, USDC_TOKEN)
        )
        snapshot = PoolSnapshot.from_pools(1, [stable_pool, duplicate])
        assert snapshot.stableswap == (stable_pool,)

    def test_same_address_in_different_deployments_kept(self):
        uni = make_cp_pool(USDC, WETH, address=POOL_B, source="uniswap-v2")
        sushi = make_cp_pool(USDC, WETH, address=POOL_B, source="sushiswap")

        snapshot = PoolSnapshot.from_pools(1, [uni, sushi])

        assert snapshot.constant_product_for("uniswap-v2") == (uni,)
        assert snapshot.constant_product_for("sushiswap") == (sushi,)

    def test_unknown_pool_type(self):
        with pytest.raises(TypeError, match="Unknown pool type"):
            PoolSnapshot.from_pools(1, [object()])  # type: ignore[list-item]


class FailingFactoryFetcher(StaticFetcher):
    async def fetch_factory_pools(self, chain_id):
        raise NetworkError("factory API down")


class CrashingFactoryFetcher(StaticFetcher):
    async def fetch_factory_pools(self, chain_id):
        raise RuntimeError("unexpected payload")


class TestPoolRegistry:
    def test_merges_static_and_factory_pools(self, stable_pool):
        factory = StableswapPool(
            address=POOL_B, name="factory", tokens=(DAI_TOKEN, USDC_TOKEN), is_factory=True
        )
        registry = PoolRegistry(StaticFetcher({1: [stable_pool]}, {1: [factory]}))

        snapshot = asyncio.run(registry.snapshot(1))

        assert snapshot.stableswap == (stable_pool, factory)

    def test_factory_failure_falls_back_to_static(self, stable_pool):
        registry = PoolRegistry(FailingFactoryFetcher({1: [stable_pool]}))

        snapshot = asyncio.run(registry.snapshot(1))

        assert snapshot.stableswap == (stable_pool,)

    def test_unexpected_factory_error_falls_back_to_static(self, stable_pool):
        registry = PoolRegistry(CrashingFactoryFetcher({1: [stable_pool]}))

        snapshot = asyncio.run(registry.snapshot(1))

        assert snapshot.stableswap == (stable_pool,)

    def test_unknown_chain_is_empty(self):
        snapshot = asyncio.run(PoolRegistry(StaticFetcher()).snapshot(5))
        assert snapshot.pool_count == 0

    def test_snapshots_are_independent(self, stable_pool):
        registry = PoolRegistry(StaticFetcher({1: [stable_pool]}))
        first = asyncio.run(registry.snapshot(1))
        second = asyncio.run(registry.snapshot(1))
        assert first == second
        assert first is not second


class TestBundledPools:
    def test_every_chain_has_pools(self):
        assert set(STATIC_POOLS) == {1, 100, 42161}

    def test_default_fetcher_builds_mainnet_snapshot(self):
        snapshot = asyncio.run(PoolRegistry(default_fetcher()).snapshot(1))

        assert len(snapshot.stableswap) == 5
        assert {p.source for p in snapshot.constant_product} == {"uniswap-v2", "sushiswap"}
        assert len(snapshot.concentrated_for("uniswap-v3")) == 4
