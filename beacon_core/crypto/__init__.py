"""
Crypto primitives: SHA-256 and hex helpers.
"""
from .hashing import (
    sha256,
    hash_concat,
    to_hex,
    from_hex,
    strip_hex_prefix,
    truncate_hex,
)

__all__ = [
    "sha256",
    "hash_concat",
    "to_hex",
    "from_hex",
    "strip_hex_prefix",
    "truncate_hex",
]
