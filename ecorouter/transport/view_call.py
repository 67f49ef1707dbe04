"""On-chain view-call capability and an in-memory implementation for tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from ecorouter.errors import SimulationRevertedError
from ecorouter.models.types import normalize_address


class ViewCaller(Protocol):
    """Read-only contract call capability.

    Implementations encode the call, execute it without mutating chain state
    and decode the outputs. They raise SimulationRevertedError when the call
    reverts and NetworkError on transport failures. Retries, if any, are the
    implementation's business.
    """

    async def call(
        self,
        address: str,
        signature: str,
        args: Sequence[Any],
        output_types: Sequence[str],
    ) -> tuple[Any, ...]:
        """Execute a view call.

        Args:
            address: Contract address
            signature: Canonical method signature, e.g. "get_dy(int128,int128,uint256)"
            args: Positional arguments matching the signature
            output_types: ABI types of the return values

        Returns:
            Decoded return values
        """
        ...


@dataclass(frozen=True)
class CallKey:
    """Key for looking up responses in MockViewCaller."""

    address: str
    signature: str
    args: tuple[Any, ...]

    @classmethod
    def of(cls, address: str, signature: str, args: Sequence[Any]) -> CallKey:
        return cls(normalize_address(address), signature, _freeze(args))


def _freeze(value: Any) -> Any:
    if isinstance(value, list | tuple):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, str) and value.startswith("0x") and len(value) == 42:
        return value.lower()
    return value


Handler = Callable[[str, str, tuple[Any, ...]], tuple[Any, ...] | None]


class MockViewCaller:
    """View caller serving canned responses.

    Configure with per-call responses (a tuple of outputs, or an exception
    instance to raise), an optional fallback handler and optional per-address
    delays. Every call is recorded for assertions.
    """

    def __init__(
        self,
        responses: dict[CallKey, tuple[Any, ...] | Exception] | None = None,
        handler: Handler | None = None,
        delays: dict[str, float] | None = None,
    ):
        self.responses = dict(responses or {})
        self.handler = handler
        self.delays = {normalize_address(k): v for k, v in (delays or {}).items()}
        self.calls: list[tuple[str, str, tuple[Any, ...]]] = []

    def respond(
        self,
        address: str,
        signature: str,
        args: Sequence[Any],
        result: tuple[Any, ...] | Exception,
    ) -> None:
        """Register a response for one call."""
        self.responses[CallKey.of(address, signature, args)] = result

    async def call(
        self,
        address: str,
        signature: str,
        args: Sequence[Any],
        output_types: Sequence[str],
    ) -> tuple[Any, ...]:
        key = CallKey.of(address, signature, args)
        self.calls.append((key.address, signature, key.args))

        delay = self.delays.get(key.address)
        if delay:
            await asyncio.sleep(delay)

        if key in self.responses:
            result = self.responses[key]
            if isinstance(result, Exception):
                raise result
            return result

        if self.handler is not None:
            handled = self.handler(key.address, signature, key.args)
            if handled is not None:
                return handled

        raise SimulationRevertedError(f"execution reverted: {signature} on {key.address}")


__all__ = ["ViewCaller", "CallKey", "MockViewCaller"]
