"""
Schemas
File: bundle.py

Purpose: ProofBundle, the unit exchanged with the verifying contract.

In memory all 32-byte values are bytes. On a text wire (JSON files,
CLI output) they are 0x-prefixed hex strings and keys are camelCase:

    {
      "beaconTimestamp": 1651234567,
      "beaconBlockRoot": "0x...",
      "fieldIndex": 2,
      "fieldName": "parent_root",
      "fieldValue": "0x...",
      "merkleProof": ["0x...", "0x...", "0x..."]
    }
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from beacon_core.crypto.hashing import from_hex, to_hex
from beacon_core.schemas.errors import (
    ChunkLengthMismatchException,
    MalformedFieldException,
    UnknownFieldException,
)
from beacon_core.schemas.header import BYTES_PER_CHUNK, HEADER_FIELDS

UINT256_MAX = 2**256 - 1


def _check_chunk(value: bytes, name: str) -> bytes:
    if len(value) != BYTES_PER_CHUNK:
        raise ValueError(f"{name} must be {BYTES_PER_CHUNK} bytes, got {len(value)}")
    return value


def decode_wire_chunk(value: Any, name: str) -> bytes:
    """
    Decode one 0x-hex 32-byte value from a text wire.

    Raises:
        MalformedFieldException: not a string or not valid hex
        ChunkLengthMismatchException: decodes to something other than 32 bytes
    """
    if not isinstance(value, str):
        raise MalformedFieldException(
            f"{name} must be a 0x-prefixed hex string",
            field_name=name,
            value=repr(value),
        )
    try:
        decoded = from_hex(value)
    except ValueError as e:
        raise MalformedFieldException(
            f"{name} is not valid hex: {e}",
            field_name=name,
            value=value,
        ) from e
    if len(decoded) != BYTES_PER_CHUNK:
        raise ChunkLengthMismatchException(
            f"{name} must be {BYTES_PER_CHUNK} bytes, got {len(decoded)}",
            length=len(decoded),
            details={"field": name},
        )
    return decoded


class ProofBundle(BaseModel):
    """
    Proof that one header field is included in a header root.

    Attributes:
        beacon_timestamp: Oracle key, the timestamp of the block whose
            parent root is this header's root
        beacon_block_root: Root of the header tree the proof was built from
        field_index: Canonical index of the field (0-4)
        field_name: Canonical name of the field
        field_value: The field's 32-byte chunk
        merkle_proof: Sibling chunks, leaf level first
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    beacon_timestamp: int = Field(..., ge=0, le=UINT256_MAX)
    beacon_block_root: bytes = Field(...)
    field_index: int = Field(..., ge=0, le=len(HEADER_FIELDS) - 1)
    field_name: str = Field(...)
    field_value: bytes = Field(...)
    merkle_proof: tuple[bytes, ...] = Field(default=())

    @field_validator("beacon_block_root", "field_value")
    @classmethod
    def validate_chunk(cls, v: bytes) -> bytes:
        return _check_chunk(v, "value")

    @field_validator("merkle_proof")
    @classmethod
    def validate_proof(cls, v: tuple[bytes, ...]) -> tuple[bytes, ...]:
        for i, node in enumerate(v):
            _check_chunk(node, f"merkle_proof[{i}]")
        return v

    @field_validator("field_name")
    @classmethod
    def validate_field_name(cls, v: str) -> str:
        if v not in HEADER_FIELDS:
            raise ValueError(f"unknown header field {v!r}")
        return v

    @property
    def proof_length(self) -> int:
        return len(self.merkle_proof)

    def to_wire(self) -> dict[str, Any]:
        """Serialize with camelCase keys and 0x hex values."""
        return {
            "beaconTimestamp": self.beacon_timestamp,
            "beaconBlockRoot": to_hex(self.beacon_block_root),
            "fieldIndex": self.field_index,
            "fieldName": self.field_name,
            "fieldValue": to_hex(self.field_value),
            "merkleProof": [to_hex(node) for node in self.merkle_proof],
        }

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> "ProofBundle":
        """
        Decode a bundle from its text wire form.

        fieldName is optional; it is derived from fieldIndex when absent.

        Raises:
            MalformedFieldException: missing keys, bad hex or bad integers
            ChunkLengthMismatchException: a hex value that is not 32 bytes
            UnknownFieldException: fieldName/fieldIndex outside the header
        """
        for key in ("beaconTimestamp", "beaconBlockRoot", "fieldIndex", "fieldValue", "merkleProof"):
            if key not in data:
                raise MalformedFieldException(f"Missing bundle key: {key}", field_name=key)

        timestamp = data["beaconTimestamp"]
        index = data["fieldIndex"]
        for key, value in (("beaconTimestamp", timestamp), ("fieldIndex", index)):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise MalformedFieldException(
                    f"{key} must be a non-negative integer",
                    field_name=key,
                    value=repr(value),
                )
        if timestamp > UINT256_MAX:
            raise MalformedFieldException(
                "beaconTimestamp does not fit in uint256",
                field_name="beaconTimestamp",
                value=str(timestamp),
            )
        if index >= len(HEADER_FIELDS):
            raise UnknownFieldException(
                f"fieldIndex {index} is outside the header layout",
                details={"field_index": index},
            )

        name = data.get("fieldName") or HEADER_FIELDS[index]
        if name not in HEADER_FIELDS or HEADER_FIELDS[index] != name:
            raise UnknownFieldException(
                f"fieldName {name!r} does not match fieldIndex {index}",
                field_name=name,
            )

        raw_proof = data["merkleProof"]
        if not isinstance(raw_proof, list):
            raise MalformedFieldException("merkleProof must be a list", field_name="merkleProof")

        return cls(
            beacon_timestamp=timestamp,
            beacon_block_root=decode_wire_chunk(data["beaconBlockRoot"], "beaconBlockRoot"),
            field_index=index,
            field_name=name,
            field_value=decode_wire_chunk(data["fieldValue"], "fieldValue"),
            merkle_proof=tuple(
                decode_wire_chunk(node, f"merkleProof[{i}]")
                for i, node in enumerate(raw_proof)
            ),
        )
