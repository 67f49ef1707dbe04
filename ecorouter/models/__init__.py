"""Data models for tokens, trades and router results."""

from ecorouter.models.percent import ZERO_PERCENT, Percent
from ecorouter.models.result import EcoRouterResult, SourceError
from ecorouter.models.token import Token
from ecorouter.models.trade import (
    RouteHop,
    SourceProtocol,
    Trade,
    TradeCandidate,
    TradeDirection,
)
from ecorouter.models.types import is_valid_address, normalize_address

__all__ = [
    "Token",
    "Percent",
    "ZERO_PERCENT",
    "RouteHop",
    "SourceProtocol",
    "Trade",
    "TradeCandidate",
    "TradeDirection",
    "EcoRouterResult",
    "SourceError",
    "normalize_address",
    "is_valid_address",
]
