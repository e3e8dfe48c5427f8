"""
Hashing Unit Tests
Tests for merkle_core/crypto/hashing.py

Tests:
- built-in hashers produce the expected widths and values
- combine() is ordered concatenation hashing
- hash_leaf() goes through canonical encoding
- registry lookup, registration and errors
- to_hex/from_hex
"""
import hashlib

import pytest

from merkle_core.crypto.hashing import (
    BLAKE2B_64,
    BLAKE2B_256,
    DEFAULT_HASH_ALGORITHM,
    SHA256,
    Hasher,
    available_hashers,
    from_hex,
    get_hasher,
    register_hasher,
    to_hex,
)
from merkle_core.schemas.errors import UnsupportedHashAlgorithmException


class TestBuiltinHashers:
    """Tests for the registered hashers."""

    def test_sha256_known_value(self):
        assert SHA256.digest(b"hello") == hashlib.sha256(b"hello").digest()
        assert SHA256.digest_size == 32

    def test_blake2b_64_width(self):
        """The 64-bit hasher produces 8-byte digests."""
        result = BLAKE2B_64.digest(b"hello")

        assert len(result) == 8
        assert result == hashlib.blake2b(b"hello", digest_size=8).digest()

    def test_blake2b_256_width(self):
        assert len(BLAKE2B_256.digest(b"")) == 32

    @pytest.mark.parametrize("hasher", [SHA256, BLAKE2B_64, BLAKE2B_256])
    def test_digest_size_matches_output(self, hasher):
        assert len(hasher.digest(b"x")) == hasher.digest_size

    def test_default_algorithm(self):
        assert DEFAULT_HASH_ALGORITHM == "sha256"
        assert get_hasher() is SHA256


class TestCombine:
    """Tests for Hasher.combine()."""

    def test_combine_is_hash_of_concatenation(self):
        left = SHA256.digest(b"left")
        right = SHA256.digest(b"right")

        assert SHA256.combine(left, right) == SHA256.digest(left + right)

    def test_combine_order_matters(self):
        a = SHA256.digest(b"a")
        b = SHA256.digest(b"b")

        assert SHA256.combine(a, b) != SHA256.combine(b, a)


class TestHashLeaf:
    """Tests for Hasher.hash_leaf()."""

    def test_int_leaf(self):
        assert SHA256.hash_leaf(5) == hashlib.sha256(b"5").digest()

    def test_str_leaf_is_quoted(self):
        """Strings and ints with the same text hash differently."""
        assert SHA256.hash_leaf("5") == hashlib.sha256(b'"5"').digest()
        assert SHA256.hash_leaf("5") != SHA256.hash_leaf(5)

    def test_dict_leaf_stable_for_key_order(self):
        assert SHA256.hash_leaf({"b": 1, "a": 2}) == SHA256.hash_leaf({"a": 2, "b": 1})

    def test_hash_leaf_is_stable_across_calls(self):
        """Leaf digests do not depend on the salted built-in hash()."""
        assert SHA256.hash_leaf("value") == hashlib.sha256(b'"value"').digest()


class TestRegistry:
    """Tests for get_hasher() and register_hasher()."""

    def test_available_hashers(self):
        names = available_hashers()

        assert {"sha256", "blake2b-64", "blake2b-256"} <= set(names)
        assert names == sorted(names)

    def test_unknown_hasher_raises(self):
        with pytest.raises(UnsupportedHashAlgorithmException) as exc_info:
            get_hasher("md4")

        assert exc_info.value.code == "UNSUPPORTED_HASH_ALGORITHM"
        assert exc_info.value.details["algorithm"] == "md4"
        assert "sha256" in exc_info.value.details["supported"]

    def test_register_custom_hasher(self):
        sha512 = Hasher(
            name="test-sha512",
            digest_size=64,
            hash_fn=lambda data: hashlib.sha512(data).digest(),
        )
        register_hasher(sha512, replace=True)

        assert get_hasher("test-sha512") is sha512

    def test_register_duplicate_name_rejected(self):
        with pytest.raises(ValueError, match="already registered"):
            register_hasher(Hasher(name="sha256", digest_size=32, hash_fn=SHA256.hash_fn))

    def test_register_narrow_digest_rejected(self):
        with pytest.raises(ValueError, match="at least 8 bytes"):
            register_hasher(
                Hasher(
                    name="test-narrow",
                    digest_size=4,
                    hash_fn=lambda data: hashlib.sha256(data).digest()[:4],
                )
            )


    def test_register_misdeclared_width_rejected(self):
        """The declared digest_size must match what hash_fn returns."""
        with pytest.raises(ValueError, match="produced 4 bytes"):
            register_hasher(
                Hasher(
                    name="test-misdeclared",
                    digest_size=32,
                    hash_fn=lambda data: hashlib.sha256(data).digest()[:4],
                )
            )

        assert "test-misdeclared" not in available_hashers()


class TestHexConversion:
    """Tests for to_hex() and from_hex()."""

    def test_to_hex(self):
        assert to_hex(bytes.fromhex("deadbeef")) == "0xdeadbeef"

    def test_from_hex(self):
        assert from_hex("0xdeadbeef") == bytes.fromhex("deadbeef")

    def test_round_trip(self):
        digest = SHA256.digest(b"round trip")

        assert from_hex(to_hex(digest)) == digest

    def test_from_hex_requires_prefix(self):
        with pytest.raises(ValueError, match="0x"):
            from_hex("deadbeef")

    def test_from_hex_odd_length(self):
        with pytest.raises(ValueError, match="even length"):
            from_hex("0xabc")

    def test_from_hex_invalid_chars(self):
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("0xzz")
