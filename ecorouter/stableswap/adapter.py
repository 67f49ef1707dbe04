"""Stableswap (Curve-style) quote adapter."""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from ecorouter.constants import ChainId
from ecorouter.errors import InsufficientLiquidityError, NoRouteError
from ecorouter.models.token import Token
from ecorouter.models.trade import RouteHop, SourceProtocol, TradeCandidate, TradeDirection
from ecorouter.pools.registry import PoolSnapshot
from ecorouter.pools.types import StableswapPool
from ecorouter.sources.base import BaseSource, require_liquidity
from ecorouter.transport.view_call import ViewCaller

from .routing import (
    TOKEN_NOT_FOUND,
    filter_routable_pools,
    get_token_index,
    order_pools_by_affinity,
)

logger = structlog.get_logger()

GET_DY = "get_dy(int128,int128,uint256)"
GET_DY_UNDERLYING = "get_dy_underlying(int128,int128,uint256)"
GET_DY_CRYPTO = "get_dy(uint256,uint256,uint256)"

# Forward-verification rounds when solving for an exact output
EXACT_OUT_MAX_ROUNDS = 4

DEFAULT_STABLESWAP_CHAINS = (ChainId.MAINNET, ChainId.GNOSIS, ChainId.ARBITRUM_ONE)


def dy_signature(pool: StableswapPool) -> str:
    """Quote method for a pool: crypto, underlying or plain get_dy."""
    if pool.is_crypto:
        return GET_DY_CRYPTO
    if pool.has_supplementary_tokens:
        return GET_DY_UNDERLYING
    return GET_DY


class StableswapAdapter(BaseSource):
    """Quotes stableswap pools through their get_dy view methods.

    Candidate pools come from the routability resolver; each is quoted
    concurrently and the best pool wins.

    Args:
        view_caller: On-chain view-call capability
        source: Source identifier reported on trades and errors
        chain_ids: Chains with stableswap deployments
        max_pools: Optional cap on pools quoted per request, applied after
            ordering pools by token-type affinity
    """

    protocol = SourceProtocol.STABLESWAP

    def __init__(
        self,
        view_caller: ViewCaller,
        source: str = "curve",
        chain_ids: Iterable[int] = DEFAULT_STABLESWAP_CHAINS,
        max_pools: int | None = None,
    ) -> None:
        super().__init__(source, chain_ids)
        self.view_caller = view_caller
        self.max_pools = max_pools

    def _indexed_pools(
        self,
        token_in: Token,
        token_out: Token,
        chain_id: int,
        pools: PoolSnapshot,
    ) -> list[tuple[StableswapPool, int, int]]:
        routable = filter_routable_pools(pools.stableswap, token_in, token_out, chain_id)
        ordered = order_pools_by_affinity(routable, token_in, token_out)
        if self.max_pools is not None:
            ordered = ordered[: self.max_pools]

        indexed = []
        for pool in ordered:
            i = get_token_index(pool, token_in, chain_id)
            j = get_token_index(pool, token_out, chain_id)
            if i == TOKEN_NOT_FOUND or j == TOKEN_NOT_FOUND or i == j:
                logger.debug("stableswap_pool_unindexable", pool=pool.address, i=i, j=j)
                continue
            indexed.append((pool, i, j))

        if not indexed:
            raise NoRouteError(
                f"{self.source}: no stableswap pool routes {token_in.symbol} -> {token_out.symbol}"
            )
        return indexed

    async def _get_dy(self, pool: StableswapPool, i: int, j: int, dx: int) -> int:
        (dy,) = await self.view_caller.call(
            pool.address, dy_signature(pool), (i, j, dx), ["uint256"]
        )
        return int(dy)

    async def quote_exact_in(
        self,
        token_in: Token,
        token_out: Token,
        amount_in: int,
        chain_id: int,
        pools: PoolSnapshot,
    ) -> TradeCandidate:
        indexed = self._indexed_pools(token_in, token_out, chain_id, pools)

        async def quote(pool: StableswapPool, i: int, j: int) -> TradeCandidate:
            amount_out = require_liquidity(
                await self._get_dy(pool, i, j, amount_in), f"{self.source}:{pool.name}"
            )
            return self._candidate(
                TradeDirection.EXACT_INPUT,
                token_in,
                token_out,
                amount_in,
                amount_out,
                [RouteHop(pool.address, token_in.address, token_out.address)],
            )

        return await self._best_of(
            [quote(pool, i, j) for pool, i, j in indexed], TradeDirection.EXACT_INPUT
        )

    async def quote_exact_out(
        self,
        token_in: Token,
        token_out: Token,
        amount_out: int,
        chain_id: int,
        pools: PoolSnapshot,
    ) -> TradeCandidate:
        indexed = self._indexed_pools(token_in, token_out, chain_id, pools)

        async def quote(pool: StableswapPool, i: int, j: int) -> TradeCandidate:
            amount_in = await self._solve_amount_in(pool, i, j, amount_out)
            return self._candidate(
                TradeDirection.EXACT_OUTPUT,
                token_in,
                token_out,
                amount_in,
                amount_out,
                [RouteHop(pool.address, token_in.address, token_out.address)],
            )

        return await self._best_of(
            [quote(pool, i, j) for pool, i, j in indexed], TradeDirection.EXACT_OUTPUT
        )

    async def _solve_amount_in(self, pool: StableswapPool, i: int, j: int, amount_out: int) -> int:
        """Find an input whose forward quote covers amount_out.

        Starts from the reverse quote (selling amount_out of the output coin)
        and scales the input up until the forward quote reaches the target.

        Raises:
            InsufficientLiquidityError: If no covering input is found
        """
        context = f"{self.source}:{pool.name}"
        estimate = require_liquidity(await self._get_dy(pool, j, i, amount_out), context)

        for _ in range(EXACT_OUT_MAX_ROUNDS):
            forward = require_liquidity(await self._get_dy(pool, i, j, estimate), context)
            if forward >= amount_out:
                return estimate
            # Scale by the observed shortfall, rounding up
            estimate = -(-estimate * amount_out // forward) + 1

        raise InsufficientLiquidityError(
            f"{context}: could not reach output {amount_out} within {EXACT_OUT_MAX_ROUNDS} rounds"
        )


__all__ = ["StableswapAdapter", "dy_signature", "GET_DY", "GET_DY_UNDERLYING", "GET_DY_CRYPTO"]
