"""Web3 `eth_call` view caller."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import structlog
from eth_abi import decode, encode  # type: ignore[attr-defined]
from eth_abi.exceptions import DecodingError
from eth_utils import function_signature_to_4byte_selector
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3
from web3.exceptions import ContractLogicError

from ecorouter.errors import NetworkError, SimulationRevertedError

logger = structlog.get_logger()


def signature_input_types(signature: str) -> list[str]:
    """Split "f(a,(b,c),d)" into ["a", "(b,c)", "d"]."""
    start = signature.index("(")
    body = signature[start + 1 : signature.rindex(")")]
    if not body:
        return []

    types: list[str] = []
    depth = 0
    current = ""
    for char in body:
        if char == "," and depth == 0:
            types.append(current)
            current = ""
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        current += char
    types.append(current)
    return types


def encode_call(signature: str, args: Sequence[Any]) -> str:
    """Encode a call as 0x-prefixed calldata."""
    selector = function_signature_to_4byte_selector(signature)
    encoded = encode(signature_input_types(signature), list(args))
    return "0x" + (selector + encoded).hex()


class Web3ViewCaller:
    """View caller that issues `eth_call` requests through web3.

    Retries are not performed here; a failed request surfaces as NetworkError
    and the router reports it for the one source that issued it.

    Args:
        rpc_url: HTTP RPC URL (e.g., "https://eth.llamarpc.com")
        timeout_seconds: Per-request HTTP timeout
        w3: Preconfigured client, used instead of one built from rpc_url
    """

    def __init__(
        self,
        rpc_url: str,
        timeout_seconds: float = 10.0,
        w3: AsyncWeb3 | None = None,
    ):
        self.rpc_url = rpc_url
        self.timeout_seconds = timeout_seconds
        self.w3 = w3 or AsyncWeb3(
            AsyncHTTPProvider(rpc_url, request_kwargs={"timeout": timeout_seconds})
        )

    async def call(
        self,
        address: str,
        signature: str,
        args: Sequence[Any],
        output_types: Sequence[str],
    ) -> tuple[Any, ...]:
        transaction = {
            "to": Web3.to_checksum_address(address),
            "data": encode_call(signature, args),
        }

        try:
            result = await self.w3.eth.call(transaction, "latest")
        except ContractLogicError as e:
            raise SimulationRevertedError(f"{signature} reverted: {e}") from e
        except Exception as e:
            logger.warning(
                "rpc_call_failed",
                rpc_url=self.rpc_url[:50],
                address=address,
                signature=signature,
                error=str(e),
            )
            raise NetworkError(f"RPC call {signature} failed: {e}") from e

        if not result:
            raise SimulationRevertedError(f"{signature} returned no data from {address}")

        try:
            return tuple(decode(list(output_types), bytes(result)))
        except (DecodingError, ValueError) as e:
            raise SimulationRevertedError(f"Could not decode {signature} output: {e}") from e


__all__ = ["Web3ViewCaller", "encode_call", "signature_input_types"]
