"""Exact rational percentages for slippage handling."""

from __future__ import annotations

from fractions import Fraction

_ONE_HUNDRED = Fraction(100)


class Percent:
    """A percentage held as an exact rational.

    ``Percent(1, 2)`` is 1/2 percent (0.5%), mirroring how the numerator and
    denominator of a slippage setting are usually supplied. The fractional
    value (0.005 for 0.5%) is exposed as ``fraction``.
    """

    __slots__ = ("_value",)

    def __init__(self, numerator: int | Fraction, denominator: int = 1) -> None:
        if denominator == 0:
            raise ZeroDivisionError("Percent denominator cannot be zero")
        self._value = Fraction(numerator) / denominator

    @classmethod
    def from_bps(cls, bps: int) -> Percent:
        """Build from basis points (50 -> 0.5%)."""
        return cls(bps, 100)

    @classmethod
    def from_fraction(cls, value: Fraction) -> Percent:
        """Build from a plain fraction (Fraction(1, 200) -> 0.5%)."""
        return cls(value * 100)

    @property
    def value(self) -> Fraction:
        """Percentage points (0.5 for 0.5%)."""
        return self._value

    @property
    def fraction(self) -> Fraction:
        """Fractional value (0.005 for 0.5%)."""
        return self._value / _ONE_HUNDRED

    def is_negative(self) -> bool:
        return self._value < 0

    def exceeds_one_hundred(self) -> bool:
        return self._value > _ONE_HUNDRED

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Percent):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"Percent({self._value})"

    def __str__(self) -> str:
        return f"{float(self._value):g}%"


ZERO_PERCENT = Percent(0)

__all__ = ["Percent", "ZERO_PERCENT"]
