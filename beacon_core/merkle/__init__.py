"""
Merkle Tree and Proofs
Zero-padded binary SHA-256 tree construction + proof generation/verification.

This module provides:
- MerkleTree: read-only tree over 32-byte chunks
- MerkleProof: self-contained inclusion proof
- merkleize: root of a chunk list
- verify_proof: replay a sibling path against a claimed root

Canonical Commitment Rules:
1. Leaves are raw 32-byte chunks
2. Parent hashing: sha256(left + right)
3. Padding: zero chunks up to the next power of two
4. Empty tree: 32 zero bytes
5. Single leaf: root = leaf
6. Verification order: bit i of the index, low bit first

Usage:
    from beacon_core.merkle import MerkleTree, verify_proof

    tree = MerkleTree.build(chunks)
    proof = tree.compute_proof(2)
    assert verify_proof(tree.root, 2, chunks[2], proof)
"""
from .merkle_tree import (
    MerkleTree,
    next_power_of_two,
    proof_length,
    merkle_parent,
    merkleize,
    build_tree,
    compute_proof,
    verify_proof,
)
from .merkle_proofs import (
    MerkleProof,
    prove,
)


__all__ = [
    # Core types
    "MerkleTree",
    "MerkleProof",
    # Core functions
    "next_power_of_two",
    "proof_length",
    "merkle_parent",
    "merkleize",
    "build_tree",
    "compute_proof",
    "verify_proof",
    "prove",
]
