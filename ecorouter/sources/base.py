"""Quote source protocol and shared adapter utilities."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Iterable, Sequence
from typing import ClassVar, Protocol

import structlog

from ecorouter.errors import (
    EcoRouterError,
    ErrorKind,
    InsufficientLiquidityError,
    NoRouteError,
)
from ecorouter.models.token import Token
from ecorouter.models.trade import RouteHop, SourceProtocol, TradeCandidate, TradeDirection
from ecorouter.pools.registry import PoolSnapshot

logger = structlog.get_logger()

# When every route of a source fails, the reported error is the first of
# these kinds that occurred
_ERROR_PRECEDENCE = (
    ErrorKind.INSUFFICIENT_LIQUIDITY,
    ErrorKind.SIMULATION_REVERTED,
    ErrorKind.NETWORK_ERROR,
    ErrorKind.NO_ROUTE,
)


class QuoteSource(Protocol):
    """Protocol for liquidity-source adapters.

    Each adapter normalizes one pool family into TradeCandidates. Adapters
    are read-only: they only issue view calls. A failure raises an
    EcoRouterError subclass and stays local to the adapter.
    """

    source: str
    protocol: SourceProtocol

    def supports_chain(self, chain_id: int) -> bool:
        """Whether the adapter has a deployment on the chain."""
        ...

    async def quote_exact_in(
        self,
        token_in: Token,
        token_out: Token,
        amount_in: int,
        chain_id: int,
        pools: PoolSnapshot,
    ) -> TradeCandidate:
        """Quote the output for a fixed input amount."""
        ...

    async def quote_exact_out(
        self,
        token_in: Token,
        token_out: Token,
        amount_out: int,
        chain_id: int,
        pools: PoolSnapshot,
    ) -> TradeCandidate:
        """Quote the input required for a fixed output amount."""
        ...


class BaseSource:
    """Base class with shared adapter utilities.

    Provides candidate building and best-route selection used by every
    adapter variant.
    """

    protocol: ClassVar[SourceProtocol]

    def __init__(self, source: str, chain_ids: Iterable[int]) -> None:
        self.source = source
        self.chain_ids = frozenset(chain_ids)

    def supports_chain(self, chain_id: int) -> bool:
        return chain_id in self.chain_ids

    def _candidate(
        self,
        direction: TradeDirection,
        token_in: Token,
        token_out: Token,
        amount_in: int,
        amount_out: int,
        route: Sequence[RouteHop],
    ) -> TradeCandidate:
        return TradeCandidate(
            source=self.source,
            protocol=self.protocol,
            direction=direction,
            token_in=token_in,
            token_out=token_out,
            amount_in=amount_in,
            amount_out=amount_out,
            route=tuple(route),
        )

    async def _best_of(
        self,
        quotes: Sequence[Awaitable[TradeCandidate]],
        direction: TradeDirection,
    ) -> TradeCandidate:
        """Settle all route quotes and keep the best one.

        Exact input keeps the largest output, exact output the smallest
        input; earlier routes win ties.

        Raises:
            NoRouteError: If there are no routes to quote
            EcoRouterError: The most informative route failure if all fail
        """
        if not quotes:
            raise NoRouteError(f"{self.source}: no route for pair")

        results = await asyncio.gather(*quotes, return_exceptions=True)

        best: TradeCandidate | None = None
        failures: list[EcoRouterError] = []
        for result in results:
            if isinstance(result, EcoRouterError):
                failures.append(result)
                continue
            if isinstance(result, BaseException):
                raise result
            if best is None or _better(result, best, direction):
                best = result

        if best is not None:
            if failures:
                logger.debug(
                    "source_routes_partially_failed",
                    source=self.source,
                    failed=len(failures),
                    succeeded=len(results) - len(failures),
                )
            return best

        raise _most_informative(failures)


def _better(a: TradeCandidate, b: TradeCandidate, direction: TradeDirection) -> bool:
    if direction is TradeDirection.EXACT_INPUT:
        return a.amount_out > b.amount_out
    return a.amount_in < b.amount_in


def _most_informative(failures: Sequence[EcoRouterError]) -> EcoRouterError:
    for kind in _ERROR_PRECEDENCE:
        for failure in failures:
            if failure.kind is kind:
                return failure
    return failures[0]


def require_liquidity(amount: int, context: str) -> int:
    """Reject zero results that a pool returns instead of reverting.

    Raises:
        InsufficientLiquidityError: If amount is not positive
    """
    if amount <= 0:
        raise InsufficientLiquidityError(f"{context}: pool returned zero")
    return amount


__all__ = ["QuoteSource", "BaseSource", "require_liquidity"]
