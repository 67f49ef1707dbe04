"""Token model shared by every liquidity source."""

from __future__ import annotations

from dataclasses import dataclass, field

from ecorouter.models.types import is_valid_address, normalize_address


@dataclass(frozen=True)
class Token:
    """An ERC20 token (or the native asset sentinel) on a specific chain.

    Identity is the lowercase address within a chain: two Token objects with
    the same chain and differently cased addresses are equal, regardless of
    symbol or decimals.
    """

    address: str
    symbol: str
    decimals: int
    chain_id: int
    name: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not is_valid_address(self.address):
            raise ValueError(f"Invalid token address: {self.address}")
        if self.decimals < 0:
            raise ValueError(f"Token decimals cannot be negative: {self.decimals}")

    @property
    def key(self) -> tuple[int, str]:
        """(chain_id, lowercase address) identity key."""
        return self.chain_id, normalize_address(self.address)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def has_address(self, address: str) -> bool:
        """Check whether this token lives at the given address (any case)."""
        return normalize_address(self.address) == normalize_address(address)


__all__ = ["Token"]
