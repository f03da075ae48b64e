"""
Common test fixtures shared by all modules.

Provides factory functions for the core header structures:
- 32-byte chunks
- BeaconHeader / HeaderData
- ProofBundle

The default header is the one used throughout the conformance tests:
slot 123456, proposer 42 and roots filled with 0x01, 0x02 and 0x03.
"""

from typing import Optional

from beacon_core.proof.header_proof import generate_header_proof
from beacon_core.schemas.bundle import ProofBundle
from beacon_core.schemas.header import BeaconHeader, HeaderData


def make_chunk(fill: int) -> bytes:
    """A 32-byte chunk with every byte set to fill."""
    return bytes([fill]) * 32


def make_beacon_header(
    slot: int = 123456,
    proposer_index: int = 42,
    parent_root: Optional[bytes] = None,
    state_root: Optional[bytes] = None,
    body_root: Optional[bytes] = None,
) -> BeaconHeader:
    """Create a typed header for testing."""
    return BeaconHeader(
        slot=slot,
        proposer_index=proposer_index,
        parent_root=parent_root if parent_root is not None else make_chunk(0x01),
        state_root=state_root if state_root is not None else make_chunk(0x02),
        body_root=body_root if body_root is not None else make_chunk(0x03),
    )


def make_header_data(
    slot: str = "123456",
    proposer_index: str = "42",
    parent_root: str = "0x" + "01" * 32,
    state_root: str = "0x" + "02" * 32,
    body_root: str = "0x" + "03" * 32,
    block_root: str = "",
    timestamp: Optional[int] = 1700000000,
) -> HeaderData:
    """Create raw API header strings for testing."""
    return HeaderData(
        slot=slot,
        proposer_index=proposer_index,
        parent_root=parent_root,
        state_root=state_root,
        body_root=body_root,
        block_root=block_root,
        timestamp=timestamp,
    )


def make_bundle(
    field_name: str = "state_root",
    beacon_timestamp: int = 1700000012,
    header: Optional[BeaconHeader] = None,
) -> ProofBundle:
    """Create a valid bundle for the default header."""
    return generate_header_proof(header or make_beacon_header(), field_name, beacon_timestamp)
