"""
Chunk Codec
Canonical 32-byte chunk encoding for the beacon block header.

Canonical Encoding Rules (Hard Contracts):
1. uint64 fields: 8 bytes little-endian, right-padded with 24 zero bytes
2. Root fields: copied verbatim (already 32 bytes)
3. Missing roots: treated as 32 zero bytes
4. Chunk order: slot, proposer_index, parent_root, state_root, body_root

The boundary decoder (header_from_data) turns the Beacon API's decimal and
hex strings into a typed BeaconHeader and reports the failing field.
"""
from __future__ import annotations

from typing import Union

from beacon_core.crypto.hashing import from_hex
from beacon_core.schemas.errors import (
    ChunkLengthMismatchException,
    MalformedFieldException,
)
from beacon_core.schemas.header import (
    BYTES_PER_CHUNK,
    UINT64_MAX,
    BeaconHeader,
    HeaderData,
)

Chunk = bytes

ZERO_CHUNK: Chunk = bytes(BYTES_PER_CHUNK)

_UINT64_BYTES = 8


def as_chunk(value: bytes, position: int | None = None) -> Chunk:
    """
    Return value as an immutable chunk, enforcing the 32-byte length.

    Raises:
        ChunkLengthMismatchException: if value is not exactly 32 bytes
    """
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise ChunkLengthMismatchException(
            f"Chunk must be bytes, got {type(value).__name__}",
            position=position,
        )
    chunk = bytes(value)
    if len(chunk) != BYTES_PER_CHUNK:
        where = f"Chunk {position}" if position is not None else "Chunk"
        raise ChunkLengthMismatchException(
            f"{where} has length {len(chunk)}, expected {BYTES_PER_CHUNK}",
            position=position,
            length=len(chunk),
        )
    return chunk


def encode_uint64(value: int) -> Chunk:
    """
    Encode an unsigned 64-bit integer as a chunk.

    Example:
        >>> encode_uint64(1).hex()[:4]
        '0100'
    """
    if value < 0 or value > UINT64_MAX:
        raise MalformedFieldException(f"Value {value} does not fit in uint64", value=str(value))
    return value.to_bytes(_UINT64_BYTES, "little") + bytes(BYTES_PER_CHUNK - _UINT64_BYTES)


def decode_uint64(chunk: bytes) -> int:
    """Read the little-endian uint64 stored in the first 8 bytes of a chunk."""
    return int.from_bytes(chunk[:_UINT64_BYTES], "little")


def header_to_chunks(header: BeaconHeader) -> tuple[Chunk, ...]:
    """
    Serialize a header into its 5 canonical chunks.

    Args:
        header: Typed header record

    Returns:
        Tuple of chunks in canonical field order
    """
    return (
        encode_uint64(header.slot),
        encode_uint64(header.proposer_index),
        as_chunk(header.parent_root, 2),
        as_chunk(header.state_root, 3),
        as_chunk(header.body_root, 4),
    )


def _parse_uint64(raw: str, field_name: str) -> int:
    # empty numeric fields decode to zero, as the header source may omit them
    if raw == "":
        return 0
    if not raw.isascii() or not raw.isdigit():
        raise MalformedFieldException(
            f"{field_name} is not an unsigned decimal integer: {raw!r}",
            field_name=field_name,
            value=raw,
        )
    value = int(raw, 10)
    if value > UINT64_MAX:
        raise MalformedFieldException(
            f"{field_name} overflows uint64: {raw}",
            field_name=field_name,
            value=raw,
        )
    return value


def _parse_root(raw: str, field_name: str) -> bytes:
    if raw == "":
        return ZERO_CHUNK
    try:
        decoded = from_hex(raw, require_prefix=False)
    except ValueError as e:
        raise MalformedFieldException(
            f"{field_name} is not valid hex: {e}",
            field_name=field_name,
            value=raw,
        ) from e
    if len(decoded) != BYTES_PER_CHUNK:
        raise MalformedFieldException(
            f"{field_name} must decode to {BYTES_PER_CHUNK} bytes, got {len(decoded)}",
            field_name=field_name,
            value=raw,
        )
    return decoded


def header_from_data(data: HeaderData) -> BeaconHeader:
    """
    Decode raw Beacon API strings into a typed header.

    Raises:
        MalformedFieldException: naming the first field that fails to decode
    """
    return BeaconHeader(
        slot=_parse_uint64(data.slot, "slot"),
        proposer_index=_parse_uint64(data.proposer_index, "proposer_index"),
        parent_root=_parse_root(data.parent_root, "parent_root"),
        state_root=_parse_root(data.state_root, "state_root"),
        body_root=_parse_root(data.body_root, "body_root"),
    )


def to_header(header: Union[BeaconHeader, HeaderData]) -> BeaconHeader:
    """Accept either header form and return the typed one."""
    if isinstance(header, BeaconHeader):
        return header
    return header_from_data(header)


__all__ = [
    "Chunk",
    "ZERO_CHUNK",
    "as_chunk",
    "encode_uint64",
    "decode_uint64",
    "header_to_chunks",
    "header_from_data",
    "to_header",
]
