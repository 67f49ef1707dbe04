"""Byte-path encoding and quoter method signatures."""

from __future__ import annotations

from collections.abc import Sequence

from ecorouter.models.types import normalize_address

from .constants import QuoterDialect

# Max fee that fits the 3-byte fee field of a Uniswap path
_MAX_PATH_FEE = 2**24 - 1

SINGLE_SIGNATURES = {
    QuoterDialect.UNISWAP: {
        True: "quoteExactInputSingle(address,address,uint24,uint256,uint160)",
        False: "quoteExactOutputSingle(address,address,uint24,uint256,uint160)",
    },
    QuoterDialect.ALGEBRA: {
        True: "quoteExactInputSingle(address,address,uint256,uint160)",
        False: "quoteExactOutputSingle(address,address,uint256,uint160)",
    },
}

PATH_SIGNATURES = {
    True: "quoteExactInput(bytes,uint256)",
    False: "quoteExactOutput(bytes,uint256)",
}


def encode_path(
    tokens: Sequence[str],
    fees: Sequence[int],
    dialect: QuoterDialect,
    *,
    exact_output: bool = False,
) -> bytes:
    """Encode a multi-hop route as a quoter byte path.

    Uniswap paths are token(20) | fee(3) | token(20) | ...; Algebra paths
    omit the fee. Exact-output paths run from the output token backwards.

    Args:
        tokens: Token addresses along the route, input first
        fees: Fee tier per hop (ignored by the Algebra dialect)
        dialect: Quoter flavour
        exact_output: Reverse the path for quoteExactOutput

    Raises:
        ValueError: On malformed routes
    """
    if len(tokens) < 2:
        raise ValueError("A path needs at least two tokens")
    if dialect is QuoterDialect.UNISWAP and len(fees) != len(tokens) - 1:
        raise ValueError(f"Expected {len(tokens) - 1} fees, got {len(fees)}")

    tokens = list(tokens)
    fees = list(fees)
    if exact_output:
        tokens.reverse()
        fees.reverse()

    encoded = bytes.fromhex(normalize_address(tokens[0])[2:])
    for index, token in enumerate(tokens[1:]):
        if dialect is QuoterDialect.UNISWAP:
            fee = fees[index]
            if not 0 <= fee <= _MAX_PATH_FEE:
                raise ValueError(f"Fee {fee} does not fit in a path")
            encoded += fee.to_bytes(3, "big")
        encoded += bytes.fromhex(normalize_address(token)[2:])
    return encoded


def single_call_args(
    dialect: QuoterDialect,
    token_in: str,
    token_out: str,
    fee: int,
    amount: int,
) -> tuple[object, ...]:
    """Arguments for quoteExact{Input,Output}Single; price limit 0 means none."""
    token_in = normalize_address(token_in)
    token_out = normalize_address(token_out)
    if dialect is QuoterDialect.UNISWAP:
        return (token_in, token_out, fee, amount, 0)
    return (token_in, token_out, amount, 0)


__all__ = ["encode_path", "single_call_args", "SINGLE_SIGNATURES", "PATH_SIGNATURES"]
