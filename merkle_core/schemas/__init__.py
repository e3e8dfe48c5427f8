"""
Schemas
File: __init__.py

Purpose: Export error, versioning and canonicalization primitives.
Proof records live in merkle_core.schemas.proof and are re-exported by
merkle_core.merkle; they are not imported here because they depend on
merkle_core.crypto, which in turn depends on this package.
"""

# Version constants
from .versioning import (
    SCHEMA_VERSION,
    SUPPORTED_SCHEMA_VERSIONS,
    SchemaVersion,
    UnsupportedSchemaVersionError,
    assert_supported_schema_version,
)

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
    encode_leaf_value,
    ensure_utc,
    format_datetime_canonical,
)

# Error models and exceptions
from .errors import (
    CanonicalizationException,
    ConfigurationException,
    ErrorCodes,
    MerkleError,
    MerkleException,
    MerkleVerificationException,
    ProofIndexOutOfRangeException,
    TreeInvariantError,
    UnsupportedHashAlgorithmException,
)

__all__ = [
    # Versioning
    "SCHEMA_VERSION",
    "SUPPORTED_SCHEMA_VERSIONS",
    "SchemaVersion",
    "UnsupportedSchemaVersionError",
    "assert_supported_schema_version",
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    "encode_leaf_value",
    "ensure_utc",
    "format_datetime_canonical",
    # Errors
    "CanonicalizationException",
    "ConfigurationException",
    "ErrorCodes",
    "MerkleError",
    "MerkleException",
    "MerkleVerificationException",
    "ProofIndexOutOfRangeException",
    "TreeInvariantError",
    "UnsupportedHashAlgorithmException",
]
