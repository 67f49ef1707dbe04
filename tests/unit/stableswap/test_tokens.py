"""Tests for token type classification and reference token lookup."""

import pytest

from ecorouter.constants import ChainId
from ecorouter.stableswap.tokens import (
    CURVE_TOKENS,
    TokenType,
    determine_token_type,
    get_curve_token,
)
from tests.helpers import USDC, WBTC


class TestDetermineTokenType:
    """Substring classification with ETH > BTC > USD priority."""

    @pytest.mark.parametrize(
        "symbol,expected",
        [
            ("WETH", TokenType.ETH),
            ("stETH", TokenType.ETH),
            ("WBTC", TokenType.BTC),
            ("renBTC", TokenType.BTC),
            ("USDC", TokenType.USD),
            ("DAI", TokenType.USD),
            ("FRAX", TokenType.USD),
            ("agEUR", TokenType.USD),
            ("LINK", TokenType.OTHER),
        ],
    )
    def test_classification(self, symbol, expected):
        assert determine_token_type(symbol) == expected

    def test_case_insensitive(self):
        assert determine_token_type("usdc") == determine_token_type("USDC") == TokenType.USD

    def test_eth_wins_over_btc(self):
        """A symbol matching several classes takes the highest priority one."""
        assert determine_token_type("ETHBTC") == TokenType.ETH

    def test_btc_wins_over_usd(self):
        assert determine_token_type("BTCUSD") == TokenType.BTC


class TestGetCurveToken:
    """Reference token lookup by address."""

    def test_known_token(self):
        token = get_curve_token(USDC, ChainId.MAINNET)
        assert token is not None
        assert token.symbol == "USDC"
        assert token.decimals == 6

    def test_mixed_case_address(self):
        token = get_curve_token(WBTC.upper().replace("0X", "0x"))
        assert token is not None
        assert token.symbol == "WBTC"

    def test_unknown_address(self):
        assert get_curve_token("0x" + "12" * 20) is None

    def test_missing_address(self):
        assert get_curve_token(None) is None
        assert get_curve_token("") is None

    def test_unknown_chain(self):
        assert get_curve_token(USDC, 5) is None

    def test_tables_for_every_chain(self):
        assert set(CURVE_TOKENS) == {ChainId.MAINNET, ChainId.GNOSIS, ChainId.ARBITRUM_ONE}
