"""On-chain view-call transport."""

from .view_call import CallKey, MockViewCaller, ViewCaller
from .web3_caller import Web3ViewCaller, encode_call, signature_input_types

__all__ = [
    "ViewCaller",
    "CallKey",
    "MockViewCaller",
    "Web3ViewCaller",
    "encode_call",
    "signature_input_types",
]
