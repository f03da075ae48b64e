"""
Merkle Proof Objects
A self-contained inclusion proof (leaf, index, siblings, root) on top of
the functions in merkle_tree.py.

This module provides:
- MerkleProof: frozen dataclass for a single inclusion proof
- prove: build a tree and extract a MerkleProof in one step
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from beacon_core.merkle.merkle_tree import MerkleTree, verify_proof
from beacon_core.schemas.errors import IndexOutOfRangeException
from beacon_core.ssz.chunks import Chunk


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle proof for a single leaf.

    Attributes:
        leaf: The 32-byte leaf being proven
        index: The 0-based index of the leaf in the original chunk list
        siblings: Sibling chunks from the leaf level up to the root
        root: The root this proof was computed against
    """
    leaf: Chunk
    index: int
    siblings: tuple[Chunk, ...]
    root: Chunk

    def __post_init__(self) -> None:
        if self.index < 0:
            raise IndexOutOfRangeException(
                f"Leaf index must be non-negative, got {self.index}",
                index=self.index,
            )

    def verify(self, root: bytes | None = None) -> bool:
        """
        Verify against root, or against the proof's own root when omitted.
        """
        return verify_proof(self.root if root is None else root, self.index, self.leaf, self.siblings)


def prove(chunks: Sequence[bytes], index: int) -> MerkleProof:
    """
    Generate a MerkleProof for the chunk at index.

    Raises:
        ChunkLengthMismatchException: if any chunk is not 32 bytes
        IndexOutOfRangeException: if index is out of range
    """
    tree = MerkleTree.build(chunks)
    siblings = tree.compute_proof(index)
    return MerkleProof(
        leaf=tree.chunks[index],
        index=index,
        siblings=siblings,
        root=tree.root,
    )


__all__ = [
    "MerkleProof",
    "prove",
]
