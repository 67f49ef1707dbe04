"""EcoRouter - best-trade discovery across DEX liquidity sources."""

from ecorouter.router import EcoRouter, QuoteRequest

__version__ = "0.1.0"
__all__ = ["EcoRouter", "QuoteRequest", "__version__"]
