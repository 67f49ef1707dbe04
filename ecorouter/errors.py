"""Error types for quote discovery.

Every failure a liquidity source can report maps to one ErrorKind. Source
failures are captured per source by the router; only ValidationError escapes
to the caller.
"""

from enum import Enum


class ErrorKind(Enum):
    """Kinds of quote failures reported in EcoRouterResult.errors."""

    NO_ROUTE = "no_route"
    SIMULATION_REVERTED = "simulation_reverted"
    NETWORK_ERROR = "network_error"
    INSUFFICIENT_LIQUIDITY = "insufficient_liquidity"
    TIMEOUT = "timeout"
    VALIDATION_ERROR = "validation_error"
    INTERNAL = "internal"


class EcoRouterError(Exception):
    """Base error for quote discovery."""

    kind: ErrorKind = ErrorKind.INTERNAL


class NoRouteError(EcoRouterError):
    """No pool or path connects the token pair."""

    kind = ErrorKind.NO_ROUTE


class SimulationRevertedError(EcoRouterError):
    """The view call reverted."""

    kind = ErrorKind.SIMULATION_REVERTED


class NetworkError(EcoRouterError):
    """Transport-level failure talking to the node."""

    kind = ErrorKind.NETWORK_ERROR


class InsufficientLiquidityError(EcoRouterError):
    """Simulation succeeded but the amount exceeds what the pool can serve."""

    kind = ErrorKind.INSUFFICIENT_LIQUIDITY


class QuoteTimeoutError(EcoRouterError):
    """The request deadline elapsed before the source answered."""

    kind = ErrorKind.TIMEOUT


class ValidationError(EcoRouterError):
    """Malformed request. Raised before any source is queried."""

    kind = ErrorKind.VALIDATION_ERROR


__all__ = [
    "ErrorKind",
    "EcoRouterError",
    "NoRouteError",
    "SimulationRevertedError",
    "NetworkError",
    "InsufficientLiquidityError",
    "QuoteTimeoutError",
    "ValidationError",
]
