"""Aggregated router output."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ecorouter.errors import ErrorKind
from ecorouter.models.trade import Trade


@dataclass(frozen=True)
class SourceError:
    """A failure reported by one liquidity source."""

    source: str
    kind: ErrorKind
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"source": self.source, "kind": self.kind.value, "message": self.message}


@dataclass(frozen=True)
class EcoRouterResult:
    """Ranked trades (best first) plus one error per failed source."""

    trades: tuple[Trade, ...] = field(default_factory=tuple)
    errors: tuple[SourceError, ...] = field(default_factory=tuple)

    @property
    def best_trade(self) -> Trade | None:
        return self.trades[0] if self.trades else None

    @property
    def is_empty(self) -> bool:
        return not self.trades and not self.errors

    @classmethod
    def empty(cls) -> EcoRouterResult:
        return cls()

    def errors_by_source(self) -> dict[str, SourceError]:
        return {error.source: error for error in self.errors}

    def summary(self) -> dict[str, Any]:
        """Compact log-friendly description."""
        return {
            "trade_count": len(self.trades),
            "error_count": len(self.errors),
            "best_source": self.trades[0].source if self.trades else None,
        }


__all__ = ["SourceError", "EcoRouterResult"]
