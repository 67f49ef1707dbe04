"""Quote source interface shared by every adapter."""

from .base import BaseSource, QuoteSource, require_liquidity

__all__ = ["QuoteSource", "BaseSource", "require_liquidity"]
