"""
Merkle Tree Implementation
Zero-padded binary SHA-256 tree over 32-byte chunks, proof generation,
and proof verification.

Canonical Commitment Rules (Hard Contracts):
1. Leaves are the chunks themselves, no leaf hashing
2. Parent hashing: parent = sha256(left + right)
3. Padding rule: pad leaves on the right with zero chunks up to the next
   power of two; a missing right node in any layer is the zero chunk
4. Empty tree: root is the zero chunk
5. Single leaf: root = leaf
6. Verification: bit i of the index selects the concatenation order at
   level i (0: current + sibling, 1: sibling + current)

Rule 6 is shared with the on-chain verifyHeaderField program and must stay
byte-for-byte identical to it.

Determinism Notes:
- No randomness, I/O or hidden state
- This module never sorts leaves, it trusts input order
"""
from __future__ import annotations

from typing import Iterator, Sequence

from beacon_core.crypto.hashing import hash_concat
from beacon_core.schemas.errors import IndexOutOfRangeException
from beacon_core.ssz.chunks import ZERO_CHUNK, Chunk, as_chunk


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n (1 for n <= 0)."""
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


def proof_length(num_leaves: int) -> int:
    """
    Number of siblings in a proof for a tree of num_leaves chunks.

    0 for empty and single-leaf trees, log2(next_power_of_two(n)) otherwise.
    """
    if num_leaves <= 1:
        return 0
    return next_power_of_two(num_leaves).bit_length() - 1


def merkle_parent(left: bytes, right: bytes) -> bytes:
    """Parent hash of two child nodes: sha256(left + right)."""
    return hash_concat(left, right)


def _padded(chunks: Sequence[Chunk]) -> list[Chunk]:
    layer = list(chunks)
    layer.extend([ZERO_CHUNK] * (next_power_of_two(len(layer)) - len(layer)))
    return layer


def _next_layer(layer: Sequence[Chunk]) -> list[Chunk]:
    parents: list[Chunk] = []
    for i in range(0, len(layer), 2):
        right = layer[i + 1] if i + 1 < len(layer) else ZERO_CHUNK
        parents.append(merkle_parent(layer[i], right))
    return parents


def merkleize(chunks: Sequence[Chunk]) -> Chunk:
    """
    Compute the root of a chunk list.

    Algorithm:
    1. If empty: return the zero chunk
    2. If single chunk: return it unmodified
    3. Otherwise pad to the next power of two and reduce pairwise

    Example:
        >>> merkleize([ZERO_CHUNK]) == ZERO_CHUNK
        True
    """
    if len(chunks) == 0:
        return ZERO_CHUNK

    layer = _padded(chunks)
    while len(layer) > 1:
        layer = _next_layer(layer)

    return layer[0]


class MerkleTree:
    """
    Read-only Merkle tree over an ordered list of 32-byte chunks.

    The tree keeps a copy of the original (unpadded) chunks and its root.
    Padding is internal working state and is never exposed.

    Example:
        >>> tree = MerkleTree.build(chunks)
        >>> proof = tree.compute_proof(2)
        >>> tree.verify_proof(2, chunks[2], proof)
        True
    """

    __slots__ = ("_chunks", "_root")

    def __init__(self, chunks: Sequence[bytes]) -> None:
        self._chunks: tuple[Chunk, ...] = tuple(
            as_chunk(chunk, position) for position, chunk in enumerate(chunks)
        )
        self._root: Chunk = merkleize(self._chunks)

    @classmethod
    def build(cls, chunks: Sequence[bytes]) -> "MerkleTree":
        """
        Build a tree from chunks.

        Raises:
            ChunkLengthMismatchException: if any chunk is not 32 bytes
        """
        return cls(chunks)

    @property
    def root(self) -> Chunk:
        return self._root

    @property
    def chunks(self) -> tuple[Chunk, ...]:
        return self._chunks

    def __len__(self) -> int:
        return len(self._chunks)

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self._chunks)

    def __repr__(self) -> str:
        return f"MerkleTree(leaves={len(self._chunks)}, root=0x{self._root.hex()})"

    def compute_proof(self, index: int) -> tuple[Chunk, ...]:
        """
        Generate the sibling path for the chunk at index.

        Algorithm:
        1. Pad the leaves to the next power of two
        2. At each level record layer[index ^ 1] (zero chunk past the end)
        3. Move up: index = index // 2

        Args:
            index: 0-based position among the original chunks

        Returns:
            Sibling chunks, leaf level first

        Raises:
            IndexOutOfRangeException: if index < 0 or index >= len(tree)
        """
        if index < 0 or index >= len(self._chunks):
            raise IndexOutOfRangeException(
                f"index {index} is out of range for chunks of length {len(self._chunks)}",
                index=index,
                size=len(self._chunks),
            )

        siblings: list[Chunk] = []
        layer = _padded(self._chunks)
        current_index = index

        while len(layer) > 1:
            sibling_index = current_index ^ 1
            if sibling_index < len(layer):
                siblings.append(layer[sibling_index])
            else:
                siblings.append(ZERO_CHUNK)

            layer = _next_layer(layer)
            current_index //= 2

        return tuple(siblings)

    def verify_proof(self, index: int, value: bytes, proof: Sequence[bytes]) -> bool:
        """Verify a proof against this tree's root."""
        return verify_proof(self._root, index, value, proof)


def build_tree(chunks: Sequence[bytes]) -> MerkleTree:
    """Functional alias for MerkleTree.build."""
    return MerkleTree.build(chunks)


def compute_proof(tree: MerkleTree, index: int) -> tuple[Chunk, ...]:
    """Functional alias for MerkleTree.compute_proof."""
    return tree.compute_proof(index)


def verify_proof(
    claimed_root: bytes,
    index: int,
    leaf: bytes,
    proof: Sequence[bytes],
) -> bool:
    """
    Replay a sibling path and compare the result with claimed_root.

    Algorithm:
    1. current = leaf
    2. For each sibling at position i (leaf level first):
       - bit i of index is 0: current = sha256(current + sibling)
       - bit i of index is 1: current = sha256(sibling + current)
    3. Return current == claimed_root

    A proof of the wrong length is replayed like any other and fails the
    final comparison.

    Args:
        claimed_root: Root to check against (32 bytes)
        index: Leaf position
        leaf: Leaf value (32 bytes)
        proof: Sibling chunks, leaf level first (32 bytes each)

    Returns:
        True if the replayed root equals claimed_root

    Raises:
        ChunkLengthMismatchException: if the root, leaf or a sibling is not 32 bytes
        IndexOutOfRangeException: if index is negative
    """
    if index < 0:
        raise IndexOutOfRangeException(f"index must be non-negative, got {index}", index=index)

    root = as_chunk(claimed_root)
    current = as_chunk(leaf)

    for i, node in enumerate(proof):
        sibling = as_chunk(node, i)
        if (index >> i) & 1:
            current = merkle_parent(sibling, current)
        else:
            current = merkle_parent(current, sibling)

    return current == root


__all__ = [
    "MerkleTree",
    "next_power_of_two",
    "proof_length",
    "merkle_parent",
    "merkleize",
    "build_tree",
    "compute_proof",
    "verify_proof",
]
