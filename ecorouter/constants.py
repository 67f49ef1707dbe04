"""Chain identifiers and well-known token addresses.

Centralizes the per-chain native/wrapped-native pairs and the base tokens
used as intermediate hops for multi-hop routing.
"""

from enum import IntEnum
from types import MappingProxyType

from ecorouter.models.token import Token
from ecorouter.models.types import is_valid_address, normalize_address


class ChainId(IntEnum):
    """Supported chains."""

    MAINNET = 1
    GNOSIS = 100
    ARBITRUM_ONE = 42161


def _validate_token_address(name: str, address: str) -> str:
    """Validate and return a lowercase token address.

    Raises:
        ValueError: If the address is invalid
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return normalize_address(address)


# Sentinel address used for the native asset on every chain
NATIVE_ADDRESS = _validate_token_address("native", "0xeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeee")

# Mainnet
WETH = _validate_token_address("WETH", "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2")
USDC = _validate_token_address("USDC", "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48")
USDT = _validate_token_address("USDT", "0xdac17f958d2ee523a2206206994597c13d831ec7")
DAI = _validate_token_address("DAI", "0x6b175474e89094c44da98b954eedeac495271d0f")
WBTC = _validate_token_address("WBTC", "0x2260fac5e5542a773aa44fbcfedf7c193bc2c599")

# Gnosis
WXDAI_GNOSIS = _validate_token_address("WXDAI", "0xe91d153e0b41518a2ce8dd3d7944fa863463a97d")
USDC_GNOSIS = _validate_token_address("USDC", "0xddafbb505ad214d7b80b1f830fccc89b60fb7a83")
USDT_GNOSIS = _validate_token_address("USDT", "0x4ecaba5870353805a9f068101a40e0f32ed605c6")
WETH_GNOSIS = _validate_token_address("WETH", "0x6a023ccd1ff6f2045c3309768ead9e68f978f6e1")

# Arbitrum One
WETH_ARBITRUM = _validate_token_address("WETH", "0x82af49447d8a07e3bd95bd0d56f35241523fbab1")
USDC_ARBITRUM = _validate_token_address("USDC", "0xff970a61a04b1ca14834a43f5de4533ebddb5cc8")
USDT_ARBITRUM = _validate_token_address("USDT", "0xfd086bc7cd5c481dcc9c85ebe478a1c0b69fcbb9")
WBTC_ARBITRUM = _validate_token_address("WBTC", "0x2f2a2543b76a4166549f7aab2e75bef0aefc5b0f")

NATIVE_TOKENS = MappingProxyType(
    {
        ChainId.MAINNET: Token(NATIVE_ADDRESS, "ETH", 18, ChainId.MAINNET, "Ether"),
        ChainId.GNOSIS: Token(NATIVE_ADDRESS, "XDAI", 18, ChainId.GNOSIS, "xDAI"),
        ChainId.ARBITRUM_ONE: Token(NATIVE_ADDRESS, "ETH", 18, ChainId.ARBITRUM_ONE, "Ether"),
    }
)

WRAPPED_NATIVE_TOKENS = MappingProxyType(
    {
        ChainId.MAINNET: Token(WETH, "WETH", 18, ChainId.MAINNET, "Wrapped Ether"),
        ChainId.GNOSIS: Token(WXDAI_GNOSIS, "WXDAI", 18, ChainId.GNOSIS, "Wrapped xDAI"),
        ChainId.ARBITRUM_ONE: Token(
            WETH_ARBITRUM, "WETH", 18, ChainId.ARBITRUM_ONE, "Wrapped Ether"
        ),
    }
)

# Intermediate tokens tried for two-hop routes
BASE_TOKENS = MappingProxyType(
    {
        ChainId.MAINNET: (WETH, USDC, USDT, DAI, WBTC),
        ChainId.GNOSIS: (WXDAI_GNOSIS, USDC_GNOSIS, USDT_GNOSIS, WETH_GNOSIS),
        ChainId.ARBITRUM_ONE: (WETH_ARBITRUM, USDC_ARBITRUM, USDT_ARBITRUM, WBTC_ARBITRUM),
    }
)


def is_native(address: str) -> bool:
    """Check whether an address is the native asset sentinel."""
    return normalize_address(address) == NATIVE_ADDRESS


def wrapped_native_address(chain_id: int) -> str | None:
    """Wrapped-native token address for a chain, or None if unknown."""
    token = WRAPPED_NATIVE_TOKENS.get(chain_id)  # type: ignore[call-overload]
    return token.address if token is not None else None


def wrap_if_native(address: str, chain_id: int) -> str:
    """Substitute the native sentinel with the chain's wrapped-native token."""
    if is_native(address):
        wrapped = wrapped_native_address(chain_id)
        if wrapped is not None:
            return wrapped
    return normalize_address(address)


__all__ = [
    "ChainId",
    "NATIVE_ADDRESS",
    "NATIVE_TOKENS",
    "WRAPPED_NATIVE_TOKENS",
    "BASE_TOKENS",
    "WETH",
    "USDC",
    "USDT",
    "DAI",
    "WBTC",
    "is_native",
    "wrapped_native_address",
    "wrap_if_native",
]
