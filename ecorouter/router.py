"""Quote aggregation across liquidity sources.

The router validates a request, takes one pool snapshot, asks every
applicable source for a quote concurrently and settles all of them within
the request timeout. Successful quotes become slippage-bounded trades;
every failed source contributes exactly one SourceError.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

import structlog

from ecorouter.errors import EcoRouterError, ErrorKind, QuoteTimeoutError, ValidationError
from ecorouter.models.percent import Percent
from ecorouter.models.result import EcoRouterResult, SourceError
from ecorouter.models.token import Token
from ecorouter.models.trade import Trade, TradeDirection
from ecorouter.pools.registry import PoolRegistry, PoolSnapshot
from ecorouter.ranking import apply_slippage, rank_trades, validate_slippage
from ecorouter.sources.base import QuoteSource

logger = structlog.get_logger()

DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_MAXIMUM_SLIPPAGE = Percent(1, 2)


@dataclass(frozen=True)
class UniswapV2Options:
    """Options for constant-product (UniswapV2-family) sources."""

    use_multihops: bool = True


@dataclass(frozen=True)
class EcoRouterSourceOptions:
    """Per-family source options applied when the router is assembled."""

    uniswap_v2: UniswapV2Options = field(default_factory=UniswapV2Options)


@dataclass(frozen=True)
class QuoteRequest:
    """A request for the best trades of a token pair.

    amount is the input amount for EXACT_INPUT and the output amount for
    EXACT_OUTPUT. enabled_sources restricts the request to the named
    source ids; None means every source. timeout_seconds bounds the whole
    request, pool snapshot included.
    """

    token_in: Token
    token_out: Token
    amount: int
    direction: TradeDirection = TradeDirection.EXACT_INPUT
    chain_id: int | None = None
    maximum_slippage: Percent = DEFAULT_MAXIMUM_SLIPPAGE
    enabled_sources: frozenset[str] | None = None
    # Overrides the router default for this request
    timeout_seconds: float | None = None

    @property
    def resolved_chain_id(self) -> int:
        return self.chain_id if self.chain_id is not None else self.token_in.chain_id


def validate_request(request: QuoteRequest) -> None:
    """Reject malformed requests before any source is queried.

    Raises:
        ValidationError: On a non-positive amount, slippage outside
            [0%, 100%], a non-positive timeout, identical tokens or tokens
            from another chain
    """
    amount = request.amount
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValidationError(f"amount must be an integer, got {amount!r}")
    if amount <= 0:
        raise ValidationError(f"amount must be positive, got {amount}")

    validate_slippage(request.maximum_slippage)

    if request.timeout_seconds is not None and not request.timeout_seconds > 0:
        raise ValidationError(f"timeout must be positive, got {request.timeout_seconds}")

    if request.token_in == request.token_out:
        raise ValidationError(
            f"token_in and token_out are the same token ({request.token_in.symbol})"
        )

    chain_id = request.resolved_chain_id
    for token in (request.token_in, request.token_out):
        if token.chain_id != chain_id:
            raise ValidationError(
                f"token {token.symbol} is on chain {token.chain_id}, "
                f"request is for chain {chain_id}"
            )


def _fail_all(sources: Sequence[QuoteSource], kind: ErrorKind, message: str) -> EcoRouterResult:
    """One error per source, for failures that happen before dispatch."""
    return EcoRouterResult(errors=tuple(SourceError(s.source, kind, message) for s in sources))


class EcoRouter:
    """Aggregates quotes from a set of liquidity sources.

    Args:
        sources: Quote sources, one per deployment
        registry: Supplies the pool snapshot of each request
        timeout_seconds: Default deadline for a whole request
    """

    def __init__(
        self,
        sources: Iterable[QuoteSource],
        registry: PoolRegistry,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.sources: tuple[QuoteSource, ...] = tuple(sources)
        self.registry = registry
        self.timeout_seconds = timeout_seconds

    def applicable_sources(self, request: QuoteRequest) -> list[QuoteSource]:
        """Enabled sources deployed on the request's chain, in registration order."""
        chain_id = request.resolved_chain_id
        return [
            source
            for source in self.sources
            if source.supports_chain(chain_id)
            and (request.enabled_sources is None or source.source in request.enabled_sources)
        ]

    async def get_best_trade_exact_in(
        self,
        token_in: Token,
        token_out: Token,
        amount_in: int,
        maximum_slippage: Percent = DEFAULT_MAXIMUM_SLIPPAGE,
        enabled_sources: Iterable[str] | None = None,
    ) -> EcoRouterResult:
        """Ranked trades selling exactly amount_in of token_in."""
        return await self.route(
            QuoteRequest(
                token_in=token_in,
                token_out=token_out,
                amount=amount_in,
                direction=TradeDirection.EXACT_INPUT,
                maximum_slippage=maximum_slippage,
                enabled_sources=frozenset(enabled_sources) if enabled_sources is not None else None,
            )
        )

    async def get_best_trade_exact_out(
        self,
        token_in: Token,
        token_out: Token,
        amount_out: int,
        maximum_slippage: Percent = DEFAULT_MAXIMUM_SLIPPAGE,
        enabled_sources: Iterable[str] | None = None,
    ) -> EcoRouterResult:
        """Ranked trades buying exactly amount_out of token_out."""
        return await self.route(
            QuoteRequest(
                token_in=token_in,
                token_out=token_out,
                amount=amount_out,
                direction=TradeDirection.EXACT_OUTPUT,
                maximum_slippage=maximum_slippage,
                enabled_sources=frozenset(enabled_sources) if enabled_sources is not None else None,
            )
        )

    async def route(self, request: QuoteRequest) -> EcoRouterResult:
        """Quote a request across all applicable sources.

        Returns:
            Ranked trades (best first) and one error per failed source.
            An empty result when no source applies.

        Raises:
            ValidationError: If the request is malformed
        """
        validate_request(request)
        chain_id = request.resolved_chain_id

        sources = self.applicable_sources(request)
        if not sources:
            logger.info("no_applicable_sources", chain_id=chain_id)
            return EcoRouterResult.empty()

        timeout = request.timeout_seconds
        if timeout is None:
            timeout = self.timeout_seconds
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout

        try:
            snapshot = await asyncio.wait_for(self.registry.snapshot(chain_id), timeout=timeout)
        except EcoRouterError as e:
            logger.warning("pool_snapshot_failed", chain_id=chain_id, error=str(e))
            return _fail_all(sources, e.kind, str(e))
        except TimeoutError:
            logger.warning("pool_snapshot_timed_out", chain_id=chain_id, timeout_seconds=timeout)
            error = QuoteTimeoutError(f"no pool snapshot within {timeout}s")
            return _fail_all(sources, error.kind, str(error))
        except Exception as e:
            logger.exception("pool_snapshot_crashed", chain_id=chain_id)
            return _fail_all(sources, ErrorKind.INTERNAL, f"{type(e).__name__}: {e}")

        remaining = max(deadline - loop.time(), 0.0)
        outcomes = await self._settle_all(sources, request, snapshot, remaining)

        trades = [outcome for outcome in outcomes if isinstance(outcome, Trade)]
        errors = tuple(outcome for outcome in outcomes if isinstance(outcome, SourceError))
        result = EcoRouterResult(trades=rank_trades(trades, request.direction), errors=errors)

        logger.info(
            "quote_request_settled",
            chain_id=chain_id,
            direction=request.direction.value,
            sources=len(sources),
            **result.summary(),
        )
        return result

    async def _settle_all(
        self,
        sources: Sequence[QuoteSource],
        request: QuoteRequest,
        snapshot: PoolSnapshot,
        timeout: float,
    ) -> list[Trade | SourceError]:
        """One task per source; sources still running after timeout seconds time out."""
        tasks = [asyncio.create_task(self._quote(source, request, snapshot)) for source in sources]
        _, pending = await asyncio.wait(tasks, timeout=timeout)

        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

        outcomes: list[Trade | SourceError] = []
        for source, task in zip(sources, tasks):
            if task in pending:
                logger.warning("source_quote_timed_out", source=source.source, remaining=timeout)
                error = QuoteTimeoutError("no quote before the request deadline")
                outcomes.append(SourceError(source.source, error.kind, str(error)))
            else:
                outcomes.append(task.result())
        return outcomes

    async def _quote(
        self,
        source: QuoteSource,
        request: QuoteRequest,
        snapshot: PoolSnapshot,
    ) -> Trade | SourceError:
        chain_id = request.resolved_chain_id
        try:
            if request.direction is TradeDirection.EXACT_INPUT:
                candidate = await source.quote_exact_in(
                    request.token_in, request.token_out, request.amount, chain_id, snapshot
                )
            else:
                candidate = await source.quote_exact_out(
                    request.token_in, request.token_out, request.amount, chain_id, snapshot
                )
        except EcoRouterError as e:
            logger.debug(
                "source_quote_failed", source=source.source, kind=e.kind.value, error=str(e)
            )
            return SourceError(source.source, e.kind, str(e))
        except Exception as e:
            logger.exception("source_quote_crashed", source=source.source)
            return SourceError(source.source, ErrorKind.INTERNAL, f"{type(e).__name__}: {e}")

        return apply_slippage(candidate, request.maximum_slippage)


__all__ = [
    "EcoRouter",
    "QuoteRequest",
    "EcoRouterSourceOptions",
    "UniswapV2Options",
    "validate_request",
    "DEFAULT_TIMEOUT_SECONDS",
    "DEFAULT_MAXIMUM_SLIPPAGE",
]
