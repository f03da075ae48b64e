"""
Execution-layer access: JSON-RPC, contract ABI and verification adapters.
"""

from .rpc import JsonRpcClient
from .abi import (
    VERIFY_HEADER_FIELD_SIGNATURE,
    VERIFY_HEADER_FIELD_SELECTOR,
    encode_verify_header_field_call,
    decode_bool_result,
)
from .verifier import BEACON_ROOTS_ADDRESS, OnChainVerifier, BeaconRootsOracle

__all__ = [
    "JsonRpcClient",
    "VERIFY_HEADER_FIELD_SIGNATURE",
    "VERIFY_HEADER_FIELD_SELECTOR",
    "encode_verify_header_field_call",
    "decode_bool_result",
    "BEACON_ROOTS_ADDRESS",
    "OnChainVerifier",
    "BeaconRootsOracle",
]
