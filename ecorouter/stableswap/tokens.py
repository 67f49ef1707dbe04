"""Stableswap reference tokens and token-type classification.

Reference tables are immutable, module-level data built at import time.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType

from ecorouter.constants import (
    DAI,
    NATIVE_ADDRESS,
    USDC,
    USDC_ARBITRUM,
    USDC_GNOSIS,
    USDT,
    USDT_ARBITRUM,
    USDT_GNOSIS,
    WBTC,
    WBTC_ARBITRUM,
    WETH,
    WETH_ARBITRUM,
    WETH_GNOSIS,
    WXDAI_GNOSIS,
    ChainId,
)
from ecorouter.models.token import Token
from ecorouter.models.types import normalize_address


class TokenType(Enum):
    """Value class a stableswap token belongs to."""

    ETH = "eth"
    BTC = "btc"
    USD = "usd"
    OTHER = "other"


def _tokens(
    chain_id: ChainId, entries: Iterable[tuple[str, str, str, int]]
) -> Mapping[str, Token]:
    return MappingProxyType(
        {
            key: Token(address, symbol, decimals, chain_id)
            for key, address, symbol, decimals in entries
        }
    )


TOKENS_MAINNET = _tokens(
    ChainId.MAINNET,
    [
        ("eth", NATIVE_ADDRESS, "ETH", 18),
        ("weth", WETH, "WETH", 18),
        ("steth", "0xae7ab96520de3a18e5e111b5eaab095312d7fe84", "stETH", 18),
        ("dai", DAI, "DAI", 18),
        ("usdc", USDC, "USDC", 6),
        ("usdt", USDT, "USDT", 6),
        ("wbtc", WBTC, "WBTC", 8),
        ("frax", "0x853d955acef822db058eb8505911ed77f175b99e", "FRAX", 18),
        ("lusd", "0x5f98805a4e8be255a32880fdec7f6728c6568ba0", "LUSD", 18),
        ("3crv", "0x6c3f90f043a72fa612cbac8115ee7e52bde6e490", "3Crv", 18),
        ("adai", "0x028171bca77440897b824ca71d1c56cac55b68a3", "aDAI", 18),
        ("ausdc", "0xbcca60bb61934080951369a648fb03df4f96263c", "aUSDC", 6),
        ("ausdt", "0x3ed3b47dd13ec9a98b44e6204a523e766b225811", "aUSDT", 6),
    ],
)

TOKENS_GNOSIS = _tokens(
    ChainId.GNOSIS,
    [
        ("wxdai", WXDAI_GNOSIS, "WXDAI", 18),
        ("usdc", USDC_GNOSIS, "USDC", 6),
        ("usdt", USDT_GNOSIS, "USDT", 6),
        ("weth", WETH_GNOSIS, "WETH", 18),
        ("x3crv", "0x1337bedc9d22ecbe766df105c9623922a27963ec", "x3CRV", 18),
    ],
)

TOKENS_ARBITRUM_ONE = _tokens(
    ChainId.ARBITRUM_ONE,
    [
        ("eth", NATIVE_ADDRESS, "ETH", 18),
        ("weth", WETH_ARBITRUM, "WETH", 18),
        ("usdc", USDC_ARBITRUM, "USDC", 6),
        ("usdt", USDT_ARBITRUM, "USDT", 6),
        ("wbtc", WBTC_ARBITRUM, "WBTC", 8),
        ("2crv", "0x7f90122bf0700f9e7e1f688fe926940e8839f353", "2CRV", 18),
    ],
)

CURVE_TOKENS: Mapping[int, Mapping[str, Token]] = MappingProxyType(
    {
        ChainId.MAINNET: TOKENS_MAINNET,
        ChainId.GNOSIS: TOKENS_GNOSIS,
        ChainId.ARBITRUM_ONE: TOKENS_ARBITRUM_ONE,
    }
)

# Liquidity-token symbols of base pools; these have no tradeable index of
# their own once a pool's meta or underlying list is in play
POOL_SHARE_SYMBOLS = frozenset({"3crv", "2crv", "x3crv"})


def get_curve_token(token_address: str | None, chain_id: int = ChainId.MAINNET) -> Token | None:
    """Look up a reference token by address.

    Returns:
        The token, or None if the address or chain is unknown
    """
    if not token_address:
        return None
    token_list = CURVE_TOKENS.get(chain_id)
    if token_list is None:
        return None
    address = normalize_address(token_address)
    for token in token_list.values():
        if normalize_address(token.address) == address:
            return token
    return None


# Reference symbol fragments per token type, matched as lowercase substrings
USD_SYMBOLS = (
    "dai",
    "jpy",
    "aud",
    "dei",
    "home",
    "fiat",
    "alcx",
    "cad",
    "usx",
    "fei",
    "crv",
    "ust",
    "vst",
    "fxs",
    "fox",
    "cvx",
    "angle",
    "gamma",
    "apw",
    "usd",
    "mim",
    "frax",
    "apv",
    "rai",
    "eur",
    "gbp",
    "chf",
    "dola",
    "krw",
)
BTC_SYMBOLS = ("btc",)
ETH_SYMBOLS = ("eth",)


def _matches_any(symbol: str, fragments: Iterable[str]) -> bool:
    lowered = symbol.lower()
    return any(fragment in lowered for fragment in fragments)


def determine_token_type(symbol: str) -> TokenType:
    """Classify a token symbol, checking ETH, then BTC, then USD."""
    if _matches_any(symbol, ETH_SYMBOLS):
        return TokenType.ETH
    if _matches_any(symbol, BTC_SYMBOLS):
        return TokenType.BTC
    if _matches_any(symbol, USD_SYMBOLS):
        return TokenType.USD
    return TokenType.OTHER


__all__ = [
    "TokenType",
    "CURVE_TOKENS",
    "TOKENS_MAINNET",
    "TOKENS_GNOSIS",
    "TOKENS_ARBITRUM_ONE",
    "POOL_SHARE_SYMBOLS",
    "get_curve_token",
    "determine_token_type",
]
