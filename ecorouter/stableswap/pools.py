"""Statically configured stableswap pools per chain."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from ecorouter.constants import ChainId
from ecorouter.pools.types import StableswapPool

from .tokens import TOKENS_ARBITRUM_ONE as ARB
from .tokens import TOKENS_GNOSIS as GNO
from .tokens import TOKENS_MAINNET as ETH

POOLS_MAINNET: tuple[StableswapPool, ...] = (
    StableswapPool(
        address="0xbebc44782c7db0a1a60cb6fe97d0b483032ff1c7",
        name="3pool",
        tokens=(ETH["dai"], ETH["usdc"], ETH["usdt"]),
    ),
    StableswapPool(
        address="0xdc24316b9ae028f1497c275eb9192a3ea0f67022",
        name="steth",
        tokens=(ETH["weth"], ETH["steth"]),
        allows_trading_eth=True,
    ),
    StableswapPool(
        address="0xd51a44d3fae010294c616388b506acda1bfaae46",
        name="tricrypto2",
        tokens=(ETH["usdt"], ETH["wbtc"], ETH["weth"]),
        is_crypto=True,
    ),
    StableswapPool(
        address="0xd632f22692fac7611d2aa1c0d552930d43caed3b",
        name="frax",
        tokens=(ETH["frax"], ETH["3crv"]),
        meta_tokens=(ETH["dai"], ETH["usdc"], ETH["usdt"]),
        is_meta=True,
    ),
    StableswapPool(
        address="0xed279fdd11ca84beef15af5d39bb4d4bee23f0ca",
        name="lusd",
        tokens=(ETH["lusd"], ETH["3crv"]),
        meta_tokens=(ETH["dai"], ETH["usdc"], ETH["usdt"]),
        is_meta=True,
    ),
)

POOLS_GNOSIS: tuple[StableswapPool, ...] = (
    StableswapPool(
        address="0x7f90122bf0700f9e7e1f688fe926940e8839f353",
        name="x3pool",
        tokens=(GNO["wxdai"], GNO["usdc"], GNO["usdt"]),
    ),
)

POOLS_ARBITRUM_ONE: tuple[StableswapPool, ...] = (
    StableswapPool(
        address="0x7f90122bf0700f9e7e1f688fe926940e8839f353",
        name="2pool",
        tokens=(ARB["usdc"], ARB["usdt"]),
    ),
    StableswapPool(
        address="0x960ea3e3c7fb317332d990873d354e18d7645590",
        name="tricrypto",
        tokens=(ARB["usdt"], ARB["wbtc"], ARB["weth"]),
        is_crypto=True,
    ),
)

STABLESWAP_POOLS: Mapping[int, tuple[StableswapPool, ...]] = MappingProxyType(
    {
        ChainId.MAINNET: POOLS_MAINNET,
        ChainId.GNOSIS: POOLS_GNOSIS,
        ChainId.ARBITRUM_ONE: POOLS_ARBITRUM_ONE,
    }
)

__all__ = ["STABLESWAP_POOLS", "POOLS_MAINNET", "POOLS_GNOSIS", "POOLS_ARBITRUM_ONE"]
