"""
Schemas
File: header.py

Purpose: Beacon block header schemas.

- HeaderData: raw string fields as returned by the Beacon node API
- BeaconHeader: typed header record used for merkleization

The canonical field order is part of the on-chain protocol and must
never change: 0=slot, 1=proposer_index, 2=parent_root, 3=state_root,
4=body_root.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

BYTES_PER_CHUNK = 32
UINT64_MAX = 2**64 - 1
SECONDS_PER_SLOT = 12

HEADER_FIELDS: tuple[str, ...] = (
    "slot",
    "proposer_index",
    "parent_root",
    "state_root",
    "body_root",
)

FIELD_INDICES: Mapping[str, int] = MappingProxyType(
    {name: index for index, name in enumerate(HEADER_FIELDS)}
)

NUMERIC_FIELDS: frozenset[str] = frozenset({"slot", "proposer_index"})
ROOT_FIELDS: frozenset[str] = frozenset({"parent_root", "state_root", "body_root"})


class HeaderData(BaseModel):
    """
    Header fields exactly as the Beacon node API returns them.

    Numeric fields are decimal strings and roots are 0x-prefixed hex.
    Empty strings are allowed; the codec decides how to treat them.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    slot: str = Field(default="", description="Slot number (decimal string)")
    proposer_index: str = Field(default="", description="Proposer index (decimal string)")
    parent_root: str = Field(default="", description="Parent root (0x hex)")
    state_root: str = Field(default="", description="State root (0x hex)")
    body_root: str = Field(default="", description="Body root (0x hex)")
    block_root: str = Field(default="", description="Header root reported by the node")
    timestamp: int | None = Field(
        default=None,
        description="Execution payload timestamp of the block (unix seconds)",
    )

    @property
    def slot_number(self) -> int:
        """Slot as an int. Raises ValueError if the slot is not decimal."""
        return int(self.slot, 10)


class BeaconHeader(BaseModel):
    """
    Typed beacon block header record.

    Immutable once constructed.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    slot: int = Field(..., ge=0, le=UINT64_MAX)
    proposer_index: int = Field(..., ge=0, le=UINT64_MAX)
    parent_root: bytes = Field(default=bytes(BYTES_PER_CHUNK))
    state_root: bytes = Field(default=bytes(BYTES_PER_CHUNK))
    body_root: bytes = Field(default=bytes(BYTES_PER_CHUNK))

    @field_validator("parent_root", "state_root", "body_root")
    @classmethod
    def validate_root_length(cls, v: bytes) -> bytes:
        """Roots must be exactly one chunk."""
        if len(v) != BYTES_PER_CHUNK:
            raise ValueError(f"root must be {BYTES_PER_CHUNK} bytes, got {len(v)}")
        return v
