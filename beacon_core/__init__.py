"""
Beacon header field proofs.

Serialize a beacon block header into canonical chunks, build its Merkle
tree, generate per-field inclusion proofs and verify them locally or
through the on-chain BeaconHeaderVerifier contract.
"""

__version__ = "0.1.0"
