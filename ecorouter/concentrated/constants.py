"""Concentrated liquidity constants: fee tiers and quoter deployments."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from ecorouter.constants import ChainId

# Fee tiers in Uniswap units (hundredths of a basis point)
# Fee = units / 1,000,000 (e.g., 3000 = 0.3%)
V3_FEE_LOWEST = 100  # 0.01% - stable pairs
V3_FEE_LOW = 500  # 0.05% - stable pairs
V3_FEE_MEDIUM = 3000  # 0.30% - most pairs
V3_FEE_HIGH = 10000  # 1.00% - exotic pairs

V3_FEE_TIERS = (V3_FEE_LOWEST, V3_FEE_LOW, V3_FEE_MEDIUM, V3_FEE_HIGH)


class QuoterDialect(Enum):
    """ABI flavour of a quoter contract.

    Uniswap quoters take a fee tier per hop; Algebra pools have a single
    dynamic-fee pool per pair, so neither calls nor byte paths carry a fee.
    """

    UNISWAP = "uniswap"
    ALGEBRA = "algebra"


@dataclass(frozen=True)
class QuoterDeployment:
    """Quoter contract for one source on one chain."""

    address: str
    dialect: QuoterDialect


UNISWAP_V3_QUOTER = "0xb27308f9f90d607463bb33ea1bebb41c27ce5ab6"
SWAPR_ALGEBRA_QUOTER_GNOSIS = "0xcbad9fdf0d2814659eb26f600efdeaf005eda0f7"

UNISWAP_V3_DEPLOYMENTS: Mapping[int, QuoterDeployment] = MappingProxyType(
    {
        ChainId.MAINNET: QuoterDeployment(UNISWAP_V3_QUOTER, QuoterDialect.UNISWAP),
        ChainId.ARBITRUM_ONE: QuoterDeployment(UNISWAP_V3_QUOTER, QuoterDialect.UNISWAP),
    }
)

SWAPR_V3_DEPLOYMENTS: Mapping[int, QuoterDeployment] = MappingProxyType(
    {
        ChainId.GNOSIS: QuoterDeployment(SWAPR_ALGEBRA_QUOTER_GNOSIS, QuoterDialect.ALGEBRA),
    }
)

__all__ = [
    "V3_FEE_LOWEST",
    "V3_FEE_LOW",
    "V3_FEE_MEDIUM",
    "V3_FEE_HIGH",
    "V3_FEE_TIERS",
    "QuoterDialect",
    "QuoterDeployment",
    "UNISWAP_V3_DEPLOYMENTS",
    "SWAPR_V3_DEPLOYMENTS",
]
