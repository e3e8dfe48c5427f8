"""
Core cryptographic utilities.

Pluggable digest functions and hex helpers used by the Merkle tree.
"""
from .hashing import (
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

__all__ = [
    "Hasher",
    "SHA256",
    "BLAKE2B_64",
    "BLAKE2B_256",
    "DEFAULT_HASH_ALGORITHM",
    "get_hasher",
    "register_hasher",
    "available_hashers",
    "to_hex",
    "from_hex",
]
