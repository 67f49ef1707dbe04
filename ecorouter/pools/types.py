"""Pool dataclasses for every supported pool family.

Provides the AnyPool union type for use throughout the codebase.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from ecorouter.models.token import Token
from ecorouter.models.types import normalize_address


@dataclass(frozen=True)
class StableswapPool:
    """A Curve-style stableswap pool.

    Token order is significant: the pool addresses coins by index.

    meta_tokens is set on meta-pools and lists the coins reachable through
    the nested base pool. underlying_tokens lists the real assets behind
    wrapped (lending) coins. When both are set, underlying_tokens wins for
    index resolution.
    """

    address: str
    name: str
    tokens: tuple[Token, ...]
    meta_tokens: tuple[Token, ...] | None = None
    underlying_tokens: tuple[Token, ...] | None = None
    allows_trading_eth: bool = False
    is_meta: bool = False
    # Crypto (tricrypto-style) pools take uint256 indices
    is_crypto: bool = False
    is_factory: bool = False

    def __post_init__(self) -> None:
        if self.is_meta and not self.meta_tokens:
            raise ValueError(f"Meta pool {self.address} must define meta_tokens")

    @property
    def has_supplementary_tokens(self) -> bool:
        return bool(self.underlying_tokens) or (self.is_meta and bool(self.meta_tokens))


@dataclass(frozen=True)
class ConstantProductPool:
    """A Uniswap V2-style x*y=k pair."""

    address: str
    token0: str
    token1: str
    source: str
    # Fee in basis points (30 = 0.3%)
    fee_bps: int = 30

    @property
    def fee_multiplier(self) -> int:
        """10000 - fee_bps, used as amount_in * fee_multiplier / 10000."""
        return 10000 - self.fee_bps

    def is_token0(self, token: str) -> bool:
        return normalize_address(token) == normalize_address(self.token0)


@dataclass(frozen=True)
class ConcentratedPool:
    """A Uniswap V3 / Algebra concentrated liquidity pool.

    Swap simulation is delegated to the deployment's quoter contract.
    """

    address: str
    token0: str
    token1: str
    source: str
    # Fee in hundredths of a basis point (3000 = 0.3%); Algebra pools use a
    # dynamic fee and leave this at 0
    fee: int = 0


# Union type for all pool types
AnyPool: TypeAlias = StableswapPool | ConstantProductPool | ConcentratedPool

__all__ = ["AnyPool", "StableswapPool", "ConstantProductPool", "ConcentratedPool"]
