"""Concentrated liquidity (UniswapV3 / Algebra) quote adapter."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

import structlog

from ecorouter.constants import BASE_TOKENS, wrap_if_native
from ecorouter.errors import NoRouteError
from ecorouter.models.token import Token
from ecorouter.models.trade import RouteHop, SourceProtocol, TradeCandidate, TradeDirection
from ecorouter.models.types import normalize_address
from ecorouter.pools.registry import PoolSnapshot
from ecorouter.pools.types import ConcentratedPool
from ecorouter.sources.base import BaseSource, require_liquidity
from ecorouter.transport.view_call import ViewCaller

from .constants import UNISWAP_V3_DEPLOYMENTS, QuoterDeployment, QuoterDialect
from .encoding import PATH_SIGNATURES, SINGLE_SIGNATURES, encode_path, single_call_args

logger = structlog.get_logger()

Route = tuple[tuple[ConcentratedPool, str, str], ...]


def find_routes(
    pools: Sequence[ConcentratedPool],
    token_in: str,
    token_out: str,
    base_tokens: Sequence[str] = (),
    max_hops: int = 2,
) -> list[Route]:
    """Direct routes (one per pool/fee tier), then two-hop routes via base tokens."""
    token_in = normalize_address(token_in)
    token_out = normalize_address(token_out)

    by_pair: dict[frozenset[str], list[ConcentratedPool]] = {}
    for pool in pools:
        pair = frozenset((normalize_address(pool.token0), normalize_address(pool.token1)))
        by_pair.setdefault(pair, []).append(pool)

    routes: list[Route] = [
        ((pool, token_in, token_out),) for pool in by_pair.get(frozenset((token_in, token_out)), [])
    ]
    if max_hops < 2:
        return routes

    for base in base_tokens:
        base = normalize_address(base)
        if base in (token_in, token_out):
            continue
        for first in by_pair.get(frozenset((token_in, base)), []):
            for second in by_pair.get(frozenset((base, token_out)), []):
                routes.append(((first, token_in, base), (second, base, token_out)))
    return routes


class ConcentratedLiquidityAdapter(BaseSource):
    """Quotes concentrated liquidity pools through the deployment's quoter.

    Single-hop routes call quoteExact{Input,Output}Single with explicit
    token/fee parameters. Multi-hop routes are encoded as a byte path and
    quoted with quoteExact{Input,Output}. Both paths price the same route
    identically.

    Args:
        view_caller: On-chain view-call capability
        source: Deployment identifier; only pools with this source are used
        deployments: chain_id -> quoter contract and dialect
        base_tokens: Intermediate tokens per chain (defaults to BASE_TOKENS)
        max_hops: 1 disables multi-hop routes
    """

    protocol = SourceProtocol.CONCENTRATED_LIQUIDITY

    def __init__(
        self,
        view_caller: ViewCaller,
        source: str = "uniswap-v3",
        deployments: Mapping[int, QuoterDeployment] = UNISWAP_V3_DEPLOYMENTS,
        base_tokens: Mapping[int, Sequence[str]] | None = None,
        max_hops: int = 2,
    ) -> None:
        super().__init__(source, deployments.keys())
        self.view_caller = view_caller
        self.deployments = deployments
        self.base_tokens = base_tokens if base_tokens is not None else BASE_TOKENS
        self.max_hops = max_hops

    def _routes(
        self, token_in: Token, token_out: Token, chain_id: int, pools: PoolSnapshot
    ) -> list[Route]:
        address_in = wrap_if_native(token_in.address, chain_id)
        address_out = wrap_if_native(token_out.address, chain_id)
        if address_in == address_out:
            raise NoRouteError(
                f"{self.source}: {token_in.symbol} and {token_out.symbol} wrap to the same token"
            )

        routes = find_routes(
            pools.concentrated_for(self.source),
            address_in,
            address_out,
            self.base_tokens.get(chain_id, ()),
            self.max_hops,
        )
        if not routes:
            raise NoRouteError(
                f"{self.source}: no pool route for {token_in.symbol} -> {token_out.symbol}"
            )
        return routes

    def _deployment(self, chain_id: int) -> QuoterDeployment:
        deployment = self.deployments.get(chain_id)
        if deployment is None:
            raise NoRouteError(f"{self.source}: no quoter on chain {chain_id}")
        return deployment

    async def quote_route(
        self,
        deployment: QuoterDeployment,
        route: Route,
        amount: int,
        *,
        exact_input: bool,
    ) -> int:
        """Quote one route; returns amount out (exact input) or amount in."""
        if len(route) == 1:
            pool, hop_in, hop_out = route[0]
            signature = SINGLE_SIGNATURES[deployment.dialect][exact_input]
            args = single_call_args(deployment.dialect, hop_in, hop_out, pool.fee, amount)
        else:
            tokens = [route[0][1]] + [hop_out for _, _, hop_out in route]
            fees = [pool.fee for pool, _, _ in route]
            path = encode_path(tokens, fees, deployment.dialect, exact_output=not exact_input)
            signature = PATH_SIGNATURES[exact_input]
            args = (path, amount)

        (result,) = await self.view_caller.call(deployment.address, signature, args, ["uint256"])
        return require_liquidity(int(result), f"{self.source}:{route[0][0].address}")

    @staticmethod
    def _hops(route: Route, dialect: QuoterDialect) -> list[RouteHop]:
        return [
            RouteHop(
                pool.address,
                hop_in,
                hop_out,
                pool.fee if dialect is QuoterDialect.UNISWAP else None,
            )
            for pool, hop_in, hop_out in route
        ]

    async def quote_exact_in(
        self,
        token_in: Token,
        token_out: Token,
        amount_in: int,
        chain_id: int,
        pools: PoolSnapshot,
    ) -> TradeCandidate:
        deployment = self._deployment(chain_id)
        routes = self._routes(token_in, token_out, chain_id, pools)

        async def quote(route: Route) -> TradeCandidate:
            amount_out = await self.quote_route(deployment, route, amount_in, exact_input=True)
            return self._candidate(
                TradeDirection.EXACT_INPUT,
                token_in,
                token_out,
                amount_in,
                amount_out,
                self._hops(route, deployment.dialect),
            )

        return await self._best_of([quote(r) for r in routes], TradeDirection.EXACT_INPUT)

    async def quote_exact_out(
        self,
        token_in: Token,
        token_out: Token,
        amount_out: int,
        chain_id: int,
        pools: PoolSnapshot,
    ) -> TradeCandidate:
        deployment = self._deployment(chain_id)
        routes = self._routes(token_in, token_out, chain_id, pools)

        async def quote(route: Route) -> TradeCandidate:
            amount_in = await self.quote_route(deployment, route, amount_out, exact_input=False)
            return self._candidate(
                TradeDirection.EXACT_OUTPUT,
                token_in,
                token_out,
                amount_in,
                amount_out,
                self._hops(route, deployment.dialect),
            )

        return await self._best_of([quote(r) for r in routes], TradeDirection.EXACT_OUTPUT)


__all__ = ["ConcentratedLiquidityAdapter", "find_routes"]
