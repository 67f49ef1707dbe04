"""Shared token constants for tests.

All addresses are lowercase for consistency with normalize_address().

Usage:
    from tests.helpers import WETH, USDC
    # or
    from tests.helpers.constants import WETH, USDC
"""

from ecorouter.constants import NATIVE_ADDRESS, ChainId
from ecorouter.models.token import Token

# =============================================================================
# Mainnet token addresses
# =============================================================================

WETH = "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"  # Wrapped Ether (18 decimals)
USDC = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"  # USD Coin (6 decimals)
DAI = "0x6b175474e89094c44da98b954eedeac495271d0f"  # Dai Stablecoin (18 decimals)
USDT = "0xdac17f958d2ee523a2206206994597c13d831ec7"  # Tether USD (6 decimals)
WBTC = "0x2260fac5e5542a773aa44fbcfedf7c193bc2c599"  # Wrapped Bitcoin (8 decimals)
FRAX = "0x853d955acef822db058eb8505911ed77f175b99e"  # Frax (18 decimals)
THREE_CRV = "0x6c3f90f043a72fa612cbac8115ee7e52bde6e490"  # Curve 3pool LP token

# =============================================================================
# Token objects
# =============================================================================

ETH_TOKEN = Token(NATIVE_ADDRESS, "ETH", 18, ChainId.MAINNET)
WETH_TOKEN = Token(WETH, "WETH", 18, ChainId.MAINNET)
USDC_TOKEN = Token(USDC, "USDC", 6, ChainId.MAINNET)
USDT_TOKEN = Token(USDT, "USDT", 6, ChainId.MAINNET)
DAI_TOKEN = Token(DAI, "DAI", 18, ChainId.MAINNET)
WBTC_TOKEN = Token(WBTC, "WBTC", 8, ChainId.MAINNET)
FRAX_TOKEN = Token(FRAX, "FRAX", 18, ChainId.MAINNET)
THREE_CRV_TOKEN = Token(THREE_CRV, "3Crv", 18, ChainId.MAINNET)

# Synthetic pool addresses
POOL_A = "0x1111111111111111111111111111111111111111"
POOL_B = "0x2222222222222222222222222222222222222222"
POOL_C = "0x3333333333333333333333333333333333333333"
