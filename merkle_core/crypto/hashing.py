"""
Crypto - Hashing Utilities
Pluggable digest functions for Merkle commitments.

This module provides:
- Hasher: a named, fixed-width digest function with leaf and pair hashing
- A registry of hashers addressable by name (so proofs can carry the name)
- Hex encoding/decoding with 0x prefix

Hashing Rules:
1. Leaf hashing: leaf = H(dumps_canonical(value).encode("utf-8"))
2. Pair hashing: parent = H(left + right)

The tree never assumes a particular digest width; any collision-resistant
function of 64 bits or more can be registered.
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Any, Callable

from merkle_core.schemas.canonical import encode_leaf_value
from merkle_core.schemas.errors import UnsupportedHashAlgorithmException


DEFAULT_HASH_ALGORITHM = "sha256"


@dataclass(frozen=True)
class Hasher:
    """
    A digest function usable by the tree, the proof builder and the verifier.

    Attributes:
        name: Registry name; recorded in every proof
        digest_size: Digest width in bytes
        hash_fn: Function mapping raw bytes to a digest of digest_size bytes
    """
    name: str
    digest_size: int
    hash_fn: Callable[[bytes], bytes]

    def digest(self, data: bytes) -> bytes:
        """Hash raw bytes."""
        return self.hash_fn(data)

    def combine(self, left: bytes, right: bytes) -> bytes:
        """
        Compute the parent digest of two sibling digests.

        Order matters: combine(a, b) != combine(b, a).
        """
        return self.hash_fn(left + right)

    def hash_leaf(self, value: Any) -> bytes:
        """Hash a leaf value through its canonical encoding."""
        return self.hash_fn(encode_leaf_value(value))


def _sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def _blake2b_64(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=8).digest()


def _blake2b_256(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=32).digest()


SHA256 = Hasher(name="sha256", digest_size=32, hash_fn=_sha256)
BLAKE2B_64 = Hasher(name="blake2b-64", digest_size=8, hash_fn=_blake2b_64)
BLAKE2B_256 = Hasher(name="blake2b-256", digest_size=32, hash_fn=_blake2b_256)

_REGISTRY: dict[str, Hasher] = {
    hasher.name: hasher for hasher in (SHA256, BLAKE2B_64, BLAKE2B_256)
}


def register_hasher(hasher: Hasher, *, replace: bool = False) -> None:
    """
    Make a hasher available by name.

    Raises:
        ValueError: If the name is taken and replace is False, the
            declared digest size is below 8 bytes, or hash_fn does not
            return digest_size bytes.
    """
    if hasher.digest_size < 8:
        raise ValueError(
            f"Digest size must be at least 8 bytes, got {hasher.digest_size}"
        )
    actual = len(hasher.digest(b""))
    if actual != hasher.digest_size:
        raise ValueError(
            f"Hasher {hasher.name} declares {hasher.digest_size}-byte digests "
            f"but produced {actual} bytes"
        )
    if hasher.name in _REGISTRY and not replace:
        raise ValueError(f"Hasher already registered: {hasher.name}")
    _REGISTRY[hasher.name] = hasher


def get_hasher(name: str | None = None) -> Hasher:
    """
    Look up a hasher by name.

    Args:
        name: Registry name; None selects DEFAULT_HASH_ALGORITHM

    Raises:
        UnsupportedHashAlgorithmException: If no hasher has that name
    """
    key = name or DEFAULT_HASH_ALGORITHM
    try:
        return _REGISTRY[key]
    except KeyError:
        raise UnsupportedHashAlgorithmException(
            key, supported=available_hashers()
        ) from None


def available_hashers() -> list[str]:
    """Names of all registered hashers, sorted."""
    return sorted(_REGISTRY)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e
