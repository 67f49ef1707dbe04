"""Stableswap routability resolution.

Decides which stableswap pools can route a token pair and at which coin
indices, accounting for meta-pools, underlying tokens and the native asset.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

import structlog

from ecorouter.constants import ChainId, is_native, wrapped_native_address
from ecorouter.models.token import Token
from ecorouter.models.types import normalize_address
from ecorouter.pools.types import StableswapPool

from .tokens import CURVE_TOKENS, POOL_SHARE_SYMBOLS, TokenType, determine_token_type

if TYPE_CHECKING:
    from ecorouter.pools.registry import Fetcher

logger = structlog.get_logger()

# Returned by get_token_index when the token has no index in the pool
TOKEN_NOT_FOUND = -1


def _address_of(token: Token | str) -> str:
    return normalize_address(token.address if isinstance(token, Token) else token)


def effective_token_list(pool: StableswapPool) -> tuple[Token, ...]:
    """Coins of a pool in the order the pool indexes them for routing.

    Pool-share tokens are dropped once an underlying or meta list takes
    over, and base coins that reappear in that list are superseded by it
    rather than listed twice. A meta pool's last raw coin is always the
    base pool's LP token, whatever its symbol.
    """
    if pool.underlying_tokens:
        supplementary: Sequence[Token] = pool.underlying_tokens
    elif pool.is_meta and pool.meta_tokens:
        supplementary = pool.meta_tokens
    else:
        return pool.tokens

    raw = pool.tokens[:-1] if pool.is_meta else pool.tokens
    superseded = {_address_of(token) for token in supplementary}
    base = tuple(
        token
        for token in raw
        if token.symbol.lower() not in POOL_SHARE_SYMBOLS
        and _address_of(token) not in superseded
    )
    return base + tuple(supplementary)


def _wrapped_native_for_pools(chain_id: int) -> str | None:
    tokens = CURVE_TOKENS.get(chain_id)
    if tokens is not None and "weth" in tokens:
        return _address_of(tokens["weth"])
    return wrapped_native_address(chain_id)


def get_token_index(
    pool: StableswapPool,
    token_address: Token | str,
    chain_id: int = ChainId.MAINNET,
) -> int:
    """Return the pool's coin index for a token, or TOKEN_NOT_FOUND.

    Pools holding the chain's wrapped-native token (or trading the native
    asset directly) put the native/wrapped slot first, so a lookup that
    finds no exact match in such a pool falls back to index 0. This mirrors
    the deployment convention of the known pools and is not guaranteed for
    arbitrary slot layouts.
    """
    token_list = effective_token_list(pool)
    wanted = _address_of(token_address)

    weth = _wrapped_native_for_pools(chain_id)
    native_slot_first = pool.allows_trading_eth or (
        weth is not None and any(_address_of(t) == weth for t in (*token_list, *pool.tokens))
    )

    for index, token in enumerate(token_list):
        if _address_of(token) == wanted:
            return index

    if native_slot_first:
        return 0

    return TOKEN_NOT_FOUND


def _pool_has_token(pool: StableswapPool, address: str) -> bool:
    # Raw, underlying and meta lists are each sufficient on their own
    for token_list in (pool.tokens, pool.underlying_tokens, pool.meta_tokens):
        if token_list and any(_address_of(token) == address for token in token_list):
            return True
    return False


def _routing_address(token: Token | str, pool: StableswapPool, chain_id: int) -> str:
    address = _address_of(token)
    # Native/wrapped substitution is only defined for mainnet pools
    if chain_id == ChainId.MAINNET and pool.allows_trading_eth and is_native(address):
        weth = _wrapped_native_for_pools(chain_id)
        if weth is not None:
            return weth
    return address


def filter_routable_pools(
    pools: Iterable[StableswapPool],
    token_in: Token | str,
    token_out: Token | str,
    chain_id: int,
) -> list[StableswapPool]:
    """Pools in which both tokens are serviceable."""
    routable = []
    for pool in pools:
        token_in_address = _routing_address(token_in, pool, chain_id)
        token_out_address = _routing_address(token_out, pool, chain_id)
        if _pool_has_token(pool, token_in_address) and _pool_has_token(pool, token_out_address):
            routable.append(pool)
    return routable


async def get_routable_pools(
    pools: Sequence[StableswapPool],
    token_in: Token | str,
    token_out: Token | str,
    chain_id: int,
    fetcher: Fetcher | None = None,
) -> list[StableswapPool]:
    """Pools (static plus the fetcher's factory pools) that can route the pair.

    Args:
        pools: Statically known pools
        token_in: Input token (or its address)
        token_out: Output token (or its address)
        chain_id: Chain the pools live on
        fetcher: If given, its factory pools are appended to ``pools``

    Returns:
        Routable pools in input order, static pools first
    """
    all_pools = list(pools)
    if fetcher is not None:
        factory_pools = await fetcher.fetch_factory_pools(chain_id)
        all_pools.extend(p for p in factory_pools if isinstance(p, StableswapPool))

    routable = filter_routable_pools(all_pools, token_in, token_out, chain_id)
    logger.debug(
        "stableswap_routable_pools",
        chain_id=chain_id,
        candidates=len(all_pools),
        routable=len(routable),
    )
    return routable


def type_affinity(pool: StableswapPool, token_type: TokenType) -> int:
    """Count the pool's coins sharing a value class with the traded pair."""
    return sum(
        1
        for token in effective_token_list(pool)
        if determine_token_type(token.symbol) == token_type
    )


def order_pools_by_affinity(
    pools: Sequence[StableswapPool],
    token_in: Token,
    token_out: Token,
) -> list[StableswapPool]:
    """Order pools so those grouping the pair's value class come first.

    Only the quoting order changes; amounts are never derived from token
    types.
    """
    type_in = determine_token_type(token_in.symbol)
    type_out = determine_token_type(token_out.symbol)
    if type_in != type_out or type_in == TokenType.OTHER:
        return list(pools)
    # sorted() is stable, so ties keep registry order
    return sorted(pools, key=lambda pool: -type_affinity(pool, type_in))


__all__ = [
    "TOKEN_NOT_FOUND",
    "effective_token_list",
    "get_token_index",
    "filter_routable_pools",
    "get_routable_pools",
    "type_affinity",
    "order_pools_by_affinity",
]
