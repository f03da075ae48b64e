"""
Header Field Proofs
Assemble and check ProofBundles for single beacon header fields.

This module provides:
- field_index: canonical field name -> index
- generate_header_proof: header + field name + oracle key -> ProofBundle
- verify_header_field: local mirror of the contract's verifyHeaderField
- verify_bundle: check a bundle against a trusted (or its own) root
"""
from __future__ import annotations

import logging
from typing import Sequence, Union

from beacon_core.crypto.hashing import to_hex, truncate_hex
from beacon_core.merkle.merkle_proofs import prove
from beacon_core.merkle.merkle_tree import verify_proof
from beacon_core.schemas.bundle import ProofBundle
from beacon_core.schemas.errors import IndexOutOfRangeException, UnknownFieldException
from beacon_core.schemas.header import (
    FIELD_INDICES,
    HEADER_FIELDS,
    NUMERIC_FIELDS,
    BeaconHeader,
    HeaderData,
)
from beacon_core.ssz.chunks import decode_uint64, header_to_chunks, to_header

logger = logging.getLogger(__name__)

# Highest field index the verifying contract accepts.
MAX_FIELD_INDEX = len(HEADER_FIELDS) - 1


def field_index(field_name: str) -> int:
    """
    Resolve a canonical field name to its index.

    Raises:
        UnknownFieldException: if field_name is not a header field
    """
    try:
        return FIELD_INDICES[field_name]
    except KeyError:
        raise UnknownFieldException(
            f"unknown field name: {field_name}. Must be one of {list(HEADER_FIELDS)}",
            field_name=field_name,
        ) from None


def generate_header_proof(
    header: Union[BeaconHeader, HeaderData],
    field_name: str,
    beacon_timestamp: int,
) -> ProofBundle:
    """
    Build the ProofBundle for one field of a header.

    Args:
        header: Typed header, or raw API strings to decode first
        field_name: One of the canonical header field names
        beacon_timestamp: Oracle key for the root (timestamp of the next
            filled slot)

    Returns:
        ProofBundle with the header root, field chunk and sibling path

    Raises:
        UnknownFieldException: field_name is not a header field
        MalformedFieldException: raw header strings fail to decode
    """
    index = field_index(field_name)
    typed = to_header(header)
    chunks = header_to_chunks(typed)
    proof = prove(chunks, index)

    if field_name in NUMERIC_FIELDS:
        logger.debug(f"{field_name} value (decoded): {decode_uint64(proof.leaf)}")

    bundle = ProofBundle(
        beacon_timestamp=beacon_timestamp,
        beacon_block_root=proof.root,
        field_index=index,
        field_name=field_name,
        field_value=proof.leaf,
        merkle_proof=proof.siblings,
    )

    logger.info(f"Generated proof for field '{field_name}' (index {index})")
    logger.info(f"Field value: {truncate_hex(to_hex(bundle.field_value))}")
    logger.info(f"Header root: {truncate_hex(to_hex(bundle.beacon_block_root))}")

    return bundle


def verify_header_field(
    trusted_root: bytes,
    field_idx: int,
    expected_value: bytes,
    merkle_proof: Sequence[bytes],
) -> bool:
    """
    Check a field proof against a trusted header root.

    Same contract as the on-chain verifyHeaderField once the oracle lookup
    has produced trusted_root.

    Raises:
        IndexOutOfRangeException: field_idx outside [0, 4]
    """
    if field_idx < 0 or field_idx > MAX_FIELD_INDEX:
        raise IndexOutOfRangeException(
            f"field index {field_idx} is outside the header layout",
            index=field_idx,
            size=len(HEADER_FIELDS),
        )
    return verify_proof(trusted_root, field_idx, expected_value, merkle_proof)


def verify_bundle(bundle: ProofBundle, trusted_root: bytes | None = None) -> bool:
    """
    Verify a bundle locally.

    Args:
        bundle: Bundle to check
        trusted_root: Root from the oracle; defaults to the bundle's own
            claimed root, which only checks internal consistency
    """
    root = bundle.beacon_block_root if trusted_root is None else trusted_root
    return verify_header_field(root, bundle.field_index, bundle.field_value, bundle.merkle_proof)


__all__ = [
    "MAX_FIELD_INDEX",
    "field_index",
    "generate_header_proof",
    "verify_header_field",
    "verify_bundle",
]
