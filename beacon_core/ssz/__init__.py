"""
Chunk Codec: header fields to canonical 32-byte chunks.

Usage:
    from beacon_core.ssz import header_to_chunks, header_from_data

    header = header_from_data(HeaderData(slot="123456", proposer_index="42"))
    chunks = header_to_chunks(header)
"""
from .chunks import (
    Chunk,
    ZERO_CHUNK,
    as_chunk,
    encode_uint64,
    decode_uint64,
    header_to_chunks,
    header_from_data,
    to_header,
)

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
