"""Tests for exact rational percentages."""

from fractions import Fraction

from ecorouter.models.percent import ZERO_PERCENT, Percent


class TestPercent:
    """Percent construction and comparisons."""

    def test_numerator_denominator(self):
        """Percent(1, 2) is half a percent."""
        p = Percent(1, 2)
        assert p.value == Fraction(1, 2)
        assert p.fraction == Fraction(1, 200)

    def test_from_bps(self):
        assert Percent.from_bps(50) == Percent(1, 2)
        assert Percent.from_bps(10000) == Percent(100)

    def test_from_fraction(self):
        assert Percent.from_fraction(Fraction(1, 200)) == Percent(1, 2)

    def test_bounds_checks(self):
        assert Percent(-1).is_negative()
        assert not ZERO_PERCENT.is_negative()
        assert Percent(101).exceeds_one_hundred()
        assert not Percent(100).exceeds_one_hundred()

    def test_hashable(self):
        assert len({Percent(1, 2), Percent(2, 4), Percent.from_bps(50)}) == 1

    def test_str(self):
        assert str(Percent(1, 2)) == "0.5%"
