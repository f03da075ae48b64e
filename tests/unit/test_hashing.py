"""
Hashing Unit Tests
Tests for beacon_core/crypto/hashing.py

Tests:
- sha256 / hash_concat against hashlib
- to_hex/from_hex round trip and prefix handling
"""
import hashlib
import pytest

from beacon_core.crypto.hashing import (
    sha256,
    hash_concat,
    to_hex,
    from_hex,
    strip_hex_prefix,
    truncate_hex,
)


class TestSha256:
    """Tests for sha256() function."""

    def test_sha256_known_value(self):
        """sha256 produces the hashlib digest."""
        result = sha256(b"hello")

        assert result == hashlib.sha256(b"hello").digest()
        assert len(result) == 32

    def test_sha256_empty_bytes(self):
        """sha256 of empty bytes."""
        assert sha256(b"") == hashlib.sha256(b"").digest()

    def test_sha256_different_inputs_different_outputs(self):
        assert sha256(b"input1") != sha256(b"input2")


class TestHashConcat:
    """Tests for hash_concat() function."""

    def test_hash_concat_is_sha256_of_concatenation(self):
        left = bytes([1]) * 32
        right = bytes([2]) * 32

        assert hash_concat(left, right) == hashlib.sha256(left + right).digest()

    def test_hash_concat_order_matters(self):
        a = bytes([1]) * 32
        b = bytes([2]) * 32

        assert hash_concat(a, b) != hash_concat(b, a)


class TestHexConversion:
    """Tests for to_hex() and from_hex() functions."""

    def test_to_hex_has_prefix(self):
        assert to_hex(bytes.fromhex("deadbeef")) == "0xdeadbeef"

    def test_to_hex_empty(self):
        assert to_hex(b"") == "0x"

    def test_from_hex_with_prefix(self):
        assert from_hex("0xdeadbeef") == bytes.fromhex("deadbeef")

    def test_from_hex_uppercase_prefix(self):
        assert from_hex("0XDEADBEEF") == bytes.fromhex("deadbeef")

    def test_from_hex_requires_prefix_by_default(self):
        with pytest.raises(ValueError, match="0x"):
            from_hex("deadbeef")

    def test_from_hex_prefix_optional(self):
        assert from_hex("deadbeef", require_prefix=False) == bytes.fromhex("deadbeef")

    def test_from_hex_odd_length_rejected(self):
        with pytest.raises(ValueError, match="even length"):
            from_hex("0xabc")

    def test_from_hex_invalid_characters_rejected(self):
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("0xzz")

    def test_round_trip(self):
        data = sha256(b"round trip")
        assert from_hex(to_hex(data)) == data


class TestHelpers:
    """Tests for strip_hex_prefix() and truncate_hex()."""

    def test_strip_prefix(self):
        assert strip_hex_prefix("0xabcd") == "abcd"
        assert strip_hex_prefix("abcd") == "abcd"

    def test_truncate_long(self):
        value = "0x" + "ab" * 32
        assert truncate_hex(value) == value[:20] + "..."

    def test_truncate_short_unchanged(self):
        assert truncate_hex("0xabcd") == "0xabcd"
