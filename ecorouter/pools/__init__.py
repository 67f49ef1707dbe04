"""Pool management package.

Provides pool dataclasses, the Fetcher interface and PoolRegistry snapshots.
"""

from .curve_api import CurveApiFetcher
from .registry import Fetcher, PoolRegistry, PoolSnapshot, StaticFetcher
from .types import AnyPool, ConcentratedPool, ConstantProductPool, StableswapPool

__all__ = [
    "AnyPool",
    "StableswapPool",
    "ConstantProductPool",
    "ConcentratedPool",
    "Fetcher",
    "StaticFetcher",
    "PoolSnapshot",
    "PoolRegistry",
    "CurveApiFetcher",
]
