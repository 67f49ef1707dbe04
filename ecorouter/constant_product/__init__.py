"""Constant product (UniswapV2-family) pool support."""

from .adapter import GET_RESERVES, ConstantProductAdapter, find_paths
from .math import get_amount_in, get_amount_out

__all__ = [
    "ConstantProductAdapter",
    "find_paths",
    "GET_RESERVES",
    "get_amount_in",
    "get_amount_out",
]
