"""Trade ranking and slippage bounds.

Bounds use exact rational arithmetic: the minimum output is rounded down
and the maximum input is rounded up, so a bound never promises more than
the slippage allows.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from ecorouter.errors import ValidationError
from ecorouter.models.percent import Percent
from ecorouter.models.trade import SourceProtocol, Trade, TradeCandidate, TradeDirection

# Tie-break priority, lower first
PROTOCOL_PRIORITY = {protocol: rank for rank, protocol in enumerate(SourceProtocol)}


def validate_slippage(maximum_slippage: Percent) -> None:
    """Raises:
    ValidationError: If slippage is outside [0%, 100%]
    """
    if maximum_slippage.is_negative() or maximum_slippage.exceeds_one_hundred():
        raise ValidationError(f"maximum_slippage must be within [0%, 100%], got {maximum_slippage}")


def minimum_amount_out(amount_out: int, maximum_slippage: Percent) -> int:
    """floor(amount_out * (1 - slippage))"""
    return math.floor(amount_out * (1 - maximum_slippage.fraction))


def maximum_amount_in(amount_in: int, maximum_slippage: Percent) -> int:
    """ceil(amount_in * (1 + slippage))"""
    return math.ceil(amount_in * (1 + maximum_slippage.fraction))


def apply_slippage(candidate: TradeCandidate, maximum_slippage: Percent) -> Trade:
    """Turn a source quote into a bounded Trade.

    Exact input trades get minimum_amount_out; exact output trades get
    maximum_amount_in.
    """
    validate_slippage(maximum_slippage)

    bounds: dict[str, int] = {}
    if candidate.direction is TradeDirection.EXACT_INPUT:
        bounds["minimum_amount_out"] = minimum_amount_out(candidate.amount_out, maximum_slippage)
    else:
        bounds["maximum_amount_in"] = maximum_amount_in(candidate.amount_in, maximum_slippage)

    return Trade(
        source=candidate.source,
        protocol=candidate.protocol,
        direction=candidate.direction,
        token_in=candidate.token_in,
        token_out=candidate.token_out,
        amount_in=candidate.amount_in,
        amount_out=candidate.amount_out,
        route=candidate.route,
        maximum_slippage=maximum_slippage,
        **bounds,
    )


def _sort_key(trade: TradeCandidate, direction: TradeDirection) -> tuple[int, int, str]:
    amount = -trade.amount_out if direction is TradeDirection.EXACT_INPUT else trade.amount_in
    return (amount, PROTOCOL_PRIORITY[trade.protocol], trade.source)


def rank_trades(trades: Iterable[Trade], direction: TradeDirection) -> tuple[Trade, ...]:
    """Best first.

    Exact input orders by amount_out descending, exact output by amount_in
    ascending. Equal amounts fall back to protocol priority, then source id.
    """
    return tuple(sorted(trades, key=lambda trade: _sort_key(trade, direction)))


__all__ = [
    "PROTOCOL_PRIORITY",
    "validate_slippage",
    "minimum_amount_out",
    "maximum_amount_in",
    "apply_slippage",
    "rank_trades",
]
