"""Concentrated liquidity (UniswapV3 / Algebra) pool support.

- Fee tiers and quoter deployments per chain
- Byte-path encoding for multi-hop quotes
- Quote adapter
"""

from .adapter import ConcentratedLiquidityAdapter, find_routes
from .constants import (
    SWAPR_V3_DEPLOYMENTS,
    UNISWAP_V3_DEPLOYMENTS,
    V3_FEE_HIGH,
    V3_FEE_LOW,
    V3_FEE_LOWEST,
    V3_FEE_MEDIUM,
    V3_FEE_TIERS,
    QuoterDeployment,
    QuoterDialect,
)
from .encoding import PATH_SIGNATURES, SINGLE_SIGNATURES, encode_path

__all__ = [
    "ConcentratedLiquidityAdapter",
    "find_routes",
    "QuoterDeployment",
    "QuoterDialect",
    "UNISWAP_V3_DEPLOYMENTS",
    "SWAPR_V3_DEPLOYMENTS",
    "V3_FEE_LOWEST",
    "V3_FEE_LOW",
    "V3_FEE_MEDIUM",
    "V3_FEE_HIGH",
    "V3_FEE_TIERS",
    "encode_path",
    "SINGLE_SIGNATURES",
    "PATH_SIGNATURES",
]
