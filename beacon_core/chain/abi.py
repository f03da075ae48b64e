"""
Contract ABI

Calldata encoding for the BeaconHeaderVerifier contract:

    function verifyHeaderField(
        uint256 beaconTimestamp,
        uint8 fieldIndex,
        bytes32 expectedValue,
        bytes32[] merkleProof
    ) external view returns (bool)

The contract looks up the trusted root for beaconTimestamp in the beacon
roots oracle, rejects fieldIndex > 4 and replays the proof with the same
low-bit-first rule as beacon_core.merkle.verify_proof.
"""

from __future__ import annotations

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_utils import function_signature_to_4byte_selector

from beacon_core.schemas.bundle import ProofBundle
from beacon_core.schemas.errors import RpcException

VERIFY_HEADER_FIELD_SIGNATURE = "verifyHeaderField(uint256,uint8,bytes32,bytes32[])"
VERIFY_HEADER_FIELD_SELECTOR: bytes = function_signature_to_4byte_selector(
    VERIFY_HEADER_FIELD_SIGNATURE
)
VERIFY_HEADER_FIELD_ARGS: tuple[str, ...] = ("uint256", "uint8", "bytes32", "bytes32[]")


def encode_verify_header_field_call(bundle: ProofBundle) -> bytes:
    """Build calldata for verifyHeaderField from a bundle."""
    args = encode(
        list(VERIFY_HEADER_FIELD_ARGS),
        [
            bundle.beacon_timestamp,
            bundle.field_index,
            bundle.field_value,
            list(bundle.merkle_proof),
        ],
    )
    return VERIFY_HEADER_FIELD_SELECTOR + args


def decode_bool_result(data: bytes) -> bool:
    """
    Decode a single ABI bool return value.

    Raises:
        RpcException: if data is not a valid encoded bool
    """
    if len(data) != 32:
        raise RpcException(
            f"expected a 32-byte bool return value, got {len(data)} bytes",
            method="eth_call",
        )
    try:
        (result,) = decode(["bool"], data)
    except DecodingError as e:
        raise RpcException(f"error unpacking result: {e}", method="eth_call") from e
    return bool(result)


__all__ = [
    "VERIFY_HEADER_FIELD_SIGNATURE",
    "VERIFY_HEADER_FIELD_SELECTOR",
    "encode_verify_header_field_call",
    "decode_bool_result",
]
