"""Stableswap (Curve-style) pool support.

- Reference tokens and token-type classification
- Statically configured pools
- Routability resolution (coin indices, routable pool filtering)
- Quote adapter
"""

from .adapter import StableswapAdapter, dy_signature
from .pools import STABLESWAP_POOLS
from .routing import (
    TOKEN_NOT_FOUND,
    effective_token_list,
    filter_routable_pools,
    get_routable_pools,
    get_token_index,
)
from .tokens import CURVE_TOKENS, TokenType, determine_token_type, get_curve_token

__all__ = [
    "StableswapAdapter",
    "dy_signature",
    "STABLESWAP_POOLS",
    "TOKEN_NOT_FOUND",
    "effective_token_list",
    "filter_routable_pools",
    "get_routable_pools",
    "get_token_index",
    "CURVE_TOKENS",
    "TokenType",
    "determine_token_type",
    "get_curve_token",
]
