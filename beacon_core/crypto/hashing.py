"""
Hashing Utilities
SHA-256 and 0x-hex helpers shared by the chunk codec, the Merkle engine
and the wire adapters.

This module provides:
- SHA-256 hashing for raw bytes
- Parent hashing for two 32-byte nodes
- Hex encoding/decoding with 0x prefix

Determinism Notes:
- Always hash raw bytes exactly as given, no length prefixes or padding
- All operations are deterministic
"""
from __future__ import annotations

import hashlib


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def hash_concat(left: bytes, right: bytes) -> bytes:
    """
    Hash the concatenation of two byte sequences.

    This is the Merkle parent rule: parent = sha256(left + right).
    Inputs are concatenated as-is (64 bytes for two chunks).

    Args:
        left: Left child (32 bytes)
        right: Right child (32 bytes)

    Returns:
        32-byte SHA-256 digest of concatenation
    """
    return sha256(left + right)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def strip_hex_prefix(hex_string: str) -> str:
    """Remove a leading 0x (if present)."""
    if hex_string[:2] in ("0x", "0X"):
        return hex_string[2:]
    return hex_string


def from_hex(hex_string: str, *, require_prefix: bool = True) -> bytes:
    """
    Convert hexadecimal string to bytes.

    Args:
        hex_string: Hex string, 0x-prefixed unless require_prefix is False
        require_prefix: Reject strings without the 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If the prefix is missing (when required), the length is
                   odd, or the string contains invalid hex characters

    Example:
        >>> from_hex("0xdeadbeef").hex()
        'deadbeef'
    """
    if require_prefix and not hex_string.startswith(("0x", "0X")):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = strip_hex_prefix(hex_string)

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def truncate_hex(hex_string: str, length: int = 20) -> str:
    """Shorten a hex string for log output."""
    if len(hex_string) > length:
        return hex_string[:length] + "..."
    return hex_string


__all__ = [
    "sha256",
    "hash_concat",
    "to_hex",
    "from_hex",
    "strip_hex_prefix",
    "truncate_hex",
]
