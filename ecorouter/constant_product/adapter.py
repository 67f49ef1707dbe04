"""Constant product (UniswapV2-family) quote adapter."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping, Sequence

import structlog

from ecorouter.constants import BASE_TOKENS, ChainId, wrap_if_native
from ecorouter.errors import EcoRouterError, NoRouteError
from ecorouter.models.token import Token
from ecorouter.models.trade import RouteHop, SourceProtocol, TradeCandidate, TradeDirection
from ecorouter.models.types import normalize_address
from ecorouter.pools.registry import PoolSnapshot
from ecorouter.pools.types import ConstantProductPool
from ecorouter.sources.base import BaseSource, require_liquidity
from ecorouter.transport.view_call import ViewCaller

from .math import get_amount_in, get_amount_out

logger = structlog.get_logger()

GET_RESERVES = "getReserves()"
GET_RESERVES_OUTPUTS = ("uint112", "uint112", "uint32")

# A path is a sequence of (pool, token_in, token_out) hops
Path = tuple[tuple[ConstantProductPool, str, str], ...]


def find_paths(
    pools: Sequence[ConstantProductPool],
    token_in: str,
    token_out: str,
    base_tokens: Iterable[str] = (),
    use_multihops: bool = True,
) -> list[Path]:
    """Direct paths first, then two-hop paths through base tokens."""
    token_in = normalize_address(token_in)
    token_out = normalize_address(token_out)

    by_pair: dict[frozenset[str], list[ConstantProductPool]] = {}
    for pool in pools:
        pair = frozenset((normalize_address(pool.token0), normalize_address(pool.token1)))
        by_pair.setdefault(pair, []).append(pool)

    paths: list[Path] = [
        ((pool, token_in, token_out),) for pool in by_pair.get(frozenset((token_in, token_out)), [])
    ]
    if not use_multihops:
        return paths

    for base in base_tokens:
        base = normalize_address(base)
        if base in (token_in, token_out):
            continue
        for first in by_pair.get(frozenset((token_in, base)), []):
            for second in by_pair.get(frozenset((base, token_out)), []):
                paths.append(((first, token_in, base), (second, base, token_out)))
    return paths


class ConstantProductAdapter(BaseSource):
    """Quotes x*y=k pairs from on-chain reserves.

    Reserves of every pair on a candidate path are read once per request
    through getReserves(); the swap math runs locally.

    Args:
        view_caller: On-chain view-call capability
        source: Deployment identifier; only pools with this source are used
        chain_ids: Chains the deployment exists on
        use_multihops: Also try two-hop paths through the chain's base tokens
        base_tokens: Intermediate tokens per chain (defaults to BASE_TOKENS)
    """

    protocol = SourceProtocol.CONSTANT_PRODUCT

    def __init__(
        self,
        view_caller: ViewCaller,
        source: str = "uniswap-v2",
        chain_ids: Iterable[int] = (ChainId.MAINNET,),
        use_multihops: bool = True,
        base_tokens: Mapping[int, Sequence[str]] | None = None,
    ) -> None:
        super().__init__(source, chain_ids)
        self.view_caller = view_caller
        self.use_multihops = use_multihops
        self.base_tokens = base_tokens if base_tokens is not None else BASE_TOKENS

    def _paths(
        self, token_in: Token, token_out: Token, chain_id: int, pools: PoolSnapshot
    ) -> list[Path]:
        address_in = wrap_if_native(token_in.address, chain_id)
        address_out = wrap_if_native(token_out.address, chain_id)
        if address_in == address_out:
            raise NoRouteError(
                f"{self.source}: {token_in.symbol} and {token_out.symbol} wrap to the same token"
            )

        paths = find_paths(
            pools.constant_product_for(self.source),
            address_in,
            address_out,
            self.base_tokens.get(chain_id, ()),
            self.use_multihops,
        )
        if not paths:
            raise NoRouteError(
                f"{self.source}: no pair path for {token_in.symbol} -> {token_out.symbol}"
            )
        return paths

    async def _fetch_reserves(
        self, paths: Sequence[Path]
    ) -> dict[str, tuple[int, int] | EcoRouterError]:
        """Read (reserve0, reserve1) of every distinct pair on the paths."""
        pools = {normalize_address(pool.address): pool for path in paths for pool, _, _ in path}
        addresses = list(pools)
        results = await asyncio.gather(
            *(self.view_caller.call(a, GET_RESERVES, (), GET_RESERVES_OUTPUTS) for a in addresses),
            return_exceptions=True,
        )

        reserves: dict[str, tuple[int, int] | EcoRouterError] = {}
        for address, result in zip(addresses, results, strict=True):
            if isinstance(result, EcoRouterError):
                logger.debug(
                    "cp_reserves_failed", source=self.source, pool=address, error=str(result)
                )
                reserves[address] = result
            elif isinstance(result, BaseException):
                raise result
            else:
                reserves[address] = (int(result[0]), int(result[1]))
        return reserves

    @staticmethod
    def _oriented(
        reserves: Mapping[str, tuple[int, int] | EcoRouterError],
        pool: ConstantProductPool,
        token_in: str,
    ) -> tuple[int, int]:
        entry = reserves[normalize_address(pool.address)]
        if isinstance(entry, EcoRouterError):
            raise entry
        reserve0, reserve1 = entry
        return (reserve0, reserve1) if pool.is_token0(token_in) else (reserve1, reserve0)

    @staticmethod
    def _route(path: Path) -> list[RouteHop]:
        return [
            RouteHop(pool.address, hop_in, hop_out, pool.fee_bps)
            for pool, hop_in, hop_out in path
        ]

    async def quote_exact_in(
        self,
        token_in: Token,
        token_out: Token,
        amount_in: int,
        chain_id: int,
        pools: PoolSnapshot,
    ) -> TradeCandidate:
        paths = self._paths(token_in, token_out, chain_id, pools)
        reserves = await self._fetch_reserves(paths)

        async def quote(path: Path) -> TradeCandidate:
            amount = amount_in
            for pool, hop_in, _ in path:
                reserve_in, reserve_out = self._oriented(reserves, pool, hop_in)
                amount = require_liquidity(
                    get_amount_out(amount, reserve_in, reserve_out, pool.fee_multiplier),
                    f"{self.source}:{pool.address}",
                )
            return self._candidate(
                TradeDirection.EXACT_INPUT,
                token_in,
                token_out,
                amount_in,
                amount,
                self._route(path),
            )

        return await self._best_of([quote(path) for path in paths], TradeDirection.EXACT_INPUT)

    async def quote_exact_out(
        self,
        token_in: Token,
        token_out: Token,
        amount_out: int,
        chain_id: int,
        pools: PoolSnapshot,
    ) -> TradeCandidate:
        paths = self._paths(token_in, token_out, chain_id, pools)
        reserves = await self._fetch_reserves(paths)

        async def quote(path: Path) -> TradeCandidate:
            amount = amount_out
            for pool, hop_in, _ in reversed(path):
                reserve_in, reserve_out = self._oriented(reserves, pool, hop_in)
                amount = get_amount_in(amount, reserve_in, reserve_out, pool.fee_multiplier)
            return self._candidate(
                TradeDirection.EXACT_OUTPUT,
                token_in,
                token_out,
                amount,
                amount_out,
                self._route(path),
            )

        return await self._best_of([quote(path) for path in paths], TradeDirection.EXACT_OUTPUT)


__all__ = ["ConstantProductAdapter", "find_paths", "GET_RESERVES"]
