"""Trade representations produced by liquidity sources."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from fractions import Fraction

from ecorouter.models.percent import Percent
from ecorouter.models.token import Token


class TradeDirection(Enum):
    """Which side of the trade is fixed by the caller."""

    EXACT_INPUT = "exact_input"
    EXACT_OUTPUT = "exact_output"


class SourceProtocol(Enum):
    """Closed set of pool families a source can belong to.

    Declaration order is the ranking tie-break priority.
    """

    STABLESWAP = "stableswap"
    CONSTANT_PRODUCT = "constant_product"
    CONCENTRATED_LIQUIDITY = "concentrated_liquidity"


@dataclass(frozen=True)
class RouteHop:
    """One pool traversal inside a route."""

    pool: str
    token_in: str
    token_out: str
    fee: int | None = None


@dataclass(frozen=True)
class TradeCandidate:
    """A quote from a single source, before slippage bounds are applied."""

    source: str
    protocol: SourceProtocol
    direction: TradeDirection
    token_in: Token
    token_out: Token
    amount_in: int
    amount_out: int
    route: tuple[RouteHop, ...]

    @property
    def is_multihop(self) -> bool:
        return len(self.route) > 1

    @property
    def execution_price(self) -> Fraction:
        """Output per unit of input, in whole-token units."""
        if self.amount_in == 0:
            return Fraction(0)
        return Fraction(
            self.amount_out * 10**self.token_in.decimals,
            self.amount_in * 10**self.token_out.decimals,
        )


@dataclass(frozen=True)
class Trade(TradeCandidate):
    """A ranked, slippage-bounded trade.

    Exactly one of minimum_amount_out (exact input) or maximum_amount_in
    (exact output) is set. Re-quoting produces a new Trade.
    """

    maximum_slippage: Percent = Percent(0)
    minimum_amount_out: int | None = None
    maximum_amount_in: int | None = None


__all__ = [
    "TradeDirection",
    "SourceProtocol",
    "RouteHop",
    "TradeCandidate",
    "Trade",
]
