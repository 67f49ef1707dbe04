"""Tests for Curve API factory pool discovery."""

import asyncio

import httpx
import pytest

from ecorouter.constants import NATIVE_ADDRESS, WETH
from ecorouter.errors import NetworkError
from ecorouter.pools.curve_api import CurveApiFetcher, CurvePoolData
from ecorouter.pools.registry import PoolRegistry, StaticFetcher
from ecorouter.pools.types import StableswapPool
from ecorouter.stableswap.routing import TOKEN_NOT_FOUND, get_token_index
from tests.helpers import DAI, FRAX, POOL_A, POOL_B, THREE_CRV, USDC, USDT

STETH = "0xae7ab96520de3a18e5e111b5eaab095312d7fe84"

FACTORY_RESPONSE = {
    "success": True,
    "data": {
        "poolData": [
            {
                "address": POOL_A,
                "name": "FRAX/3Crv factory",
                "isMetaPool": True,
                "coins": [
                    {"address": FRAX, "symbol": "FRAX", "decimals": "18"},
                    {"address": THREE_CRV, "symbol": "3Crv", "decimals": "18"},
                ],
                "underlyingCoins": [
                    {"address": FRAX, "symbol": "FRAX", "decimals": "18"},
                    {"address": DAI, "symbol": "DAI", "decimals": "18"},
                    {"address": USDC, "symbol": "USDC", "decimals": "6"},
                    {"address": USDT, "symbol": "USDT", "decimals": "6"},
                ],
                "usdTotal": 123456.78,
            },
            {
                "address": POOL_B,
                "name": "ETH/stETH factory",
                "coins": [
                    {"address": NATIVE_ADDRESS, "symbol": "ETH", "decimals": "18"},
                    {"address": STETH, "symbol": "stETH", "decimals": "18"},
                ],
            },
        ]
    },
}


def _fetcher(handler, registries=("factory",)) -> tuple[CurveApiFetcher, httpx.AsyncClient]:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    fetcher = CurveApiFetcher(
        StaticFetcher(), base_url="https://curve.test", registries=registries, client=client
    )
    return fetcher, client


class TestCurvePoolData:
    def test_meta_pool_conversion(self):
        data = CurvePoolData.model_validate(FACTORY_RESPONSE["data"]["poolData"][0])
        pool = data.to_pool(1)

        assert pool.is_meta
        assert pool.is_factory
        assert [t.symbol for t in pool.meta_tokens] == ["FRAX", "DAI", "USDC", "USDT"]
        assert pool.underlying_tokens is None

    def test_fraxbp_meta_pool_indices(self):
        """Factory meta pools over crvFRAX resolve indices without the LP coin."""
        alusd = "0xbc6da0fe9ad5f3b0d58160288917aa56653660e9"
        crv_frax = "0x3175df0976dfa876431c2e9ee6bc45b65d3473cc"
        data = CurvePoolData.model_validate(
            {
                "address": POOL_A,
                "name": "alUSD/FRAXBP",
                "isMetaPool": True,
                "coins": [
                    {"address": alusd, "symbol": "alUSD", "decimals": "18"},
                    {"address": crv_frax, "symbol": "crvFRAX", "decimals": "18"},
                ],
                "underlyingCoins": [
                    {"address": alusd, "symbol": "alUSD", "decimals": "18"},
                    {"address": FRAX, "symbol": "FRAX", "decimals": "18"},
                    {"address": USDC, "symbol": "USDC", "decimals": "6"},
                ],
            }
        )
        pool = data.to_pool(1)

        assert [get_token_index(pool, a) for a in (alusd, FRAX, USDC)] == [0, 1, 2]
        assert get_token_index(pool, crv_frax) == TOKEN_NOT_FOUND

    def test_native_coin_listed_as_wrapped(self):
        data = CurvePoolData.model_validate(FACTORY_RESPONSE["data"]["poolData"][1])
        pool = data.to_pool(1)

        assert pool.allows_trading_eth
        assert pool.tokens[0].address == WETH


class TestCurveApiFetcher:
    def test_fetches_factory_pools(self):
        requested = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(str(request.url))
            return httpx.Response(200, json=FACTORY_RESPONSE)

        async def run():
            fetcher, client = _fetcher(handler, registries=("factory", "factory-crypto"))
            async with client:
                return await fetcher.fetch_factory_pools(1)

        pools = asyncio.run(run())

        assert requested == [
            "https://curve.test/api/getPools/ethereum/factory",
            "https://curve.test/api/getPools/ethereum/factory-crypto",
        ]
        assert len(pools) == 4
        assert all(isinstance(p, StableswapPool) for p in pools)
        assert [p.is_crypto for p in pools] == [False, False, True, True]

    def test_unsupported_chain_returns_nothing(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        async def run():
            fetcher, client = _fetcher(handler)
            async with client:
                return await fetcher.fetch_factory_pools(5)

        assert asyncio.run(run()) == ()

    def test_http_error_is_network_error(self):
        async def run():
            fetcher, client = _fetcher(lambda request: httpx.Response(503))
            async with client:
                return await fetcher.fetch_factory_pools(1)

        with pytest.raises(NetworkError):
            asyncio.run(run())

    def test_malformed_payload_is_network_error(self):
        async def run():
            fetcher, client = _fetcher(
                lambda request: httpx.Response(200, json={"data": {"poolData": [{"name": 1}]}})
            )
            async with client:
                return await fetcher.fetch_factory_pools(1)

        with pytest.raises(NetworkError, match="Malformed"):
            asyncio.run(run())

    def test_registry_falls_back_when_api_fails(self):
        async def run():
            fetcher, client = _fetcher(lambda request: httpx.Response(500))
            async with client:
                return await PoolRegistry(fetcher).snapshot(1)

        snapshot = asyncio.run(run())
        assert snapshot.pool_count == 0
