"""Bundled pool tables for every supported chain.

Stableswap pools live with the stableswap package; constant-product and
concentrated-liquidity pairs are listed here per deployment.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from ecorouter.concentrated.constants import V3_FEE_LOW, V3_FEE_LOWEST, V3_FEE_MEDIUM
from ecorouter.constants import DAI, USDC, USDT, WETH, ChainId
from ecorouter.stableswap.pools import STABLESWAP_POOLS

from .registry import StaticFetcher
from .types import AnyPool, ConcentratedPool, ConstantProductPool

CONSTANT_PRODUCT_POOLS_MAINNET: tuple[ConstantProductPool, ...] = (
    # Uniswap V2 pairs (token0 < token1)
    ConstantProductPool(
        address="0xb4e16d0168e52d35cacd2c6185b44281ec28c9dc",
        token0=USDC,
        token1=WETH,
        source="uniswap-v2",
    ),
    ConstantProductPool(
        address="0xa478c2975ab1ea89e8196811f51a7b7ade33eb11",
        token0=DAI,
        token1=WETH,
        source="uniswap-v2",
    ),
    ConstantProductPool(
        address="0x0d4a11d5eeaac28ec3f61d100daf4d40471f1852",
        token0=WETH,
        token1=USDT,
        source="uniswap-v2",
    ),
    # SushiSwap
    ConstantProductPool(
        address="0x397ff1542f962076d0bfe58ea045ffa2d347aca0",
        token0=USDC,
        token1=WETH,
        source="sushiswap",
    ),
)

CONCENTRATED_POOLS_MAINNET: tuple[ConcentratedPool, ...] = (
    ConcentratedPool(
        address="0x88e6a0c2ddd26feeb64f039a2c41296fcb3f5640",
        token0=USDC,
        token1=WETH,
        source="uniswap-v3",
        fee=V3_FEE_LOW,
    ),
    ConcentratedPool(
        address="0x8ad599c3a0ff1de082011efddc58f1908eb6e6d8",
        token0=USDC,
        token1=WETH,
        source="uniswap-v3",
        fee=V3_FEE_MEDIUM,
    ),
    ConcentratedPool(
        address="0x3416cf6c708da44db2624d63ea0aaef7113527c6",
        token0=USDC,
        token1=USDT,
        source="uniswap-v3",
        fee=V3_FEE_LOWEST,
    ),
    ConcentratedPool(
        address="0x5777d92f208679db4b9778590fa3cab3ac9e2168",
        token0=DAI,
        token1=USDC,
        source="uniswap-v3",
        fee=V3_FEE_LOWEST,
    ),
)

STATIC_POOLS: Mapping[int, tuple[AnyPool, ...]] = MappingProxyType(
    {
        ChainId.MAINNET: (
            *STABLESWAP_POOLS[ChainId.MAINNET],
            *CONSTANT_PRODUCT_POOLS_MAINNET,
            *CONCENTRATED_POOLS_MAINNET,
        ),
        ChainId.GNOSIS: STABLESWAP_POOLS[ChainId.GNOSIS],
        ChainId.ARBITRUM_ONE: STABLESWAP_POOLS[ChainId.ARBITRUM_ONE],
    }
)


def default_fetcher() -> StaticFetcher:
    """Fetcher over the bundled tables, without factory pools."""
    return StaticFetcher(pools=STATIC_POOLS)


__all__ = [
    "STATIC_POOLS",
    "CONSTANT_PRODUCT_POOLS_MAINNET",
    "CONCENTRATED_POOLS_MAINNET",
    "default_fetcher",
]
