"""Factory functions for pools, requests and fake sources used in tests."""

import asyncio

from ecorouter.errors import EcoRouterError
from ecorouter.models.percent import Percent
from ecorouter.models.token import Token
from ecorouter.models.trade import RouteHop, SourceProtocol, TradeCandidate, TradeDirection
from ecorouter.pools.registry import PoolRegistry, PoolSnapshot, StaticFetcher
from ecorouter.pools.types import ConstantProductPool
from ecorouter.router import EcoRouter, QuoteRequest
from tests.helpers.constants import POOL_A, USDC_TOKEN, USDT_TOKEN


def make_cp_pool(
    token0: str,
    token1: str,
    address: str = POOL_A,
    source: str = "uniswap-v2",
    fee_bps: int = 30,
) -> ConstantProductPool:
    """Create a constant-product pool."""
    return ConstantProductPool(
        address=address, token0=token0, token1=token1, source=source, fee_bps=fee_bps
    )


def make_candidate(
    source: str = "fake",
    protocol: SourceProtocol = SourceProtocol.CONSTANT_PRODUCT,
    amount_in: int = 1_000_000,
    amount_out: int = 999_000,
    direction: TradeDirection = TradeDirection.EXACT_INPUT,
    token_in: Token = USDC_TOKEN,
    token_out: Token = USDT_TOKEN,
) -> TradeCandidate:
    """Create a single-hop trade candidate."""
    return TradeCandidate(
        source=source,
        protocol=protocol,
        direction=direction,
        token_in=token_in,
        token_out=token_out,
        amount_in=amount_in,
        amount_out=amount_out,
        route=(RouteHop(POOL_A, token_in.address, token_out.address),),
    )


def make_request(
    amount: int = 1_000_000_000,
    direction: TradeDirection = TradeDirection.EXACT_INPUT,
    maximum_slippage: Percent = Percent(1, 2),
    token_in: Token = USDC_TOKEN,
    token_out: Token = USDT_TOKEN,
    enabled_sources: frozenset[str] | None = None,
    timeout_seconds: float | None = None,
) -> QuoteRequest:
    """Create a quote request (1000 USDC -> USDT by default)."""
    return QuoteRequest(
        token_in=token_in,
        token_out=token_out,
        amount=amount,
        direction=direction,
        maximum_slippage=maximum_slippage,
        enabled_sources=enabled_sources,
        timeout_seconds=timeout_seconds,
    )


class FakeSource:
    """Quote source returning a fixed amount, raising, or hanging.

    For exact input the fixed amount is the output; for exact output it is
    the required input.
    """

    def __init__(
        self,
        source: str,
        amount: int | None = None,
        error: Exception | None = None,
        protocol: SourceProtocol = SourceProtocol.CONSTANT_PRODUCT,
        delay: float = 0.0,
        chain_ids: tuple[int, ...] = (1,),
    ):
        self.source = source
        self.protocol = protocol
        self.amount = amount
        self.error = error
        self.delay = delay
        self.chain_ids = chain_ids
        self.calls = 0

    def supports_chain(self, chain_id: int) -> bool:
        return chain_id in self.chain_ids

    async def _answer(
        self, token_in: Token, token_out: Token, amount: int, direction: TradeDirection
    ) -> TradeCandidate:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        assert self.amount is not None
        if direction is TradeDirection.EXACT_INPUT:
            amount_in, amount_out = amount, self.amount
        else:
            amount_in, amount_out = self.amount, amount
        return make_candidate(
            source=self.source,
            protocol=self.protocol,
            amount_in=amount_in,
            amount_out=amount_out,
            direction=direction,
            token_in=token_in,
            token_out=token_out,
        )

    async def quote_exact_in(
        self,
        token_in: Token,
        token_out: Token,
        amount_in: int,
        chain_id: int,
        pools: PoolSnapshot,
    ) -> TradeCandidate:
        return await self._answer(token_in, token_out, amount_in, TradeDirection.EXACT_INPUT)

    async def quote_exact_out(
        self,
        token_in: Token,
        token_out: Token,
        amount_out: int,
        chain_id: int,
        pools: PoolSnapshot,
    ) -> TradeCandidate:
        return await self._answer(token_in, token_out, amount_out, TradeDirection.EXACT_OUTPUT)


def make_router(*sources: FakeSource, timeout_seconds: float = 1.0) -> EcoRouter:
    """Router over fake sources and an empty pool registry."""
    return EcoRouter(sources, PoolRegistry(StaticFetcher()), timeout_seconds=timeout_seconds)


def failing(source: str, error: EcoRouterError) -> FakeSource:
    """Fake source that always raises the given error."""
    return FakeSource(source, error=error)
