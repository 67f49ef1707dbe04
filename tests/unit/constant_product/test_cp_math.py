"""Tests for constant product swap math."""

import pytest

from ecorouter.constant_product.math import get_amount_in, get_amount_out
from ecorouter.errors import InsufficientLiquidityError


class TestGetAmountOut:
    def test_basic_swap(self):
        """1000 in against 1M/1M reserves at 0.3% fee."""
        assert get_amount_out(1000, 10**6, 10**6) == 996

    def test_lower_fee_gives_more(self):
        assert get_amount_out(1000, 10**6, 10**6, 9975) >= get_amount_out(1000, 10**6, 10**6)

    def test_zero_input(self):
        assert get_amount_out(0, 10**6, 10**6) == 0

    def test_empty_reserves(self):
        with pytest.raises(InsufficientLiquidityError):
            get_amount_out(1000, 0, 10**6)


class TestGetAmountIn:
    def test_basic_swap(self):
        assert get_amount_in(996, 10**6, 10**6) == 1000

    def test_input_covers_output(self):
        """The computed input always yields at least the requested output."""
        for amount_out in (1, 17, 996, 12_345, 500_000):
            amount_in = get_amount_in(amount_out, 10**6, 2 * 10**6)
            assert get_amount_out(amount_in, 10**6, 2 * 10**6) >= amount_out

    def test_output_exceeding_reserve(self):
        with pytest.raises(InsufficientLiquidityError, match="exceeds reserve"):
            get_amount_in(10**6, 10**6, 10**6)
