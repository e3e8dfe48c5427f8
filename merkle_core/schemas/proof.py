"""
Schemas - Inclusion Proofs
File: proof.py

Purpose: Detached, self-contained inclusion proof records.

A MerkleProof owns copies of the leaf digest, the root digest and the
ordered path of sibling digests. It never references the tree it came
from, so it can be handed to a verifier that has nothing else.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from merkle_core.crypto.hashing import DEFAULT_HASH_ALGORITHM, from_hex, to_hex
from .versioning import SCHEMA_VERSION, assert_supported_schema_version


class Direction(str, Enum):
    """Side of the running accumulator on which a sibling digest sits."""

    LEFT = "left"
    RIGHT = "right"


class ProofStep(BaseModel):
    """
    One level of an inclusion path.

    Attributes:
        direction: LEFT means the verifier computes H(value + acc),
            RIGHT means H(acc + value)
        value: Sibling digest at this level
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    direction: Direction
    value: bytes

    def to_dict(self) -> dict[str, Any]:
        return {"direction": self.direction.value, "value": to_hex(self.value)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProofStep":
        return cls(
            direction=Direction(data["direction"]),
            value=from_hex(data["value"]),
        )


class MerkleProof(BaseModel):
    """
    Proof that a leaf is included in a tree with the given root.

    The path runs from the leaf level up to (not including) the root.
    For a tree with a single padded leaf the path is empty and
    leaf == root.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: str = Field(default=SCHEMA_VERSION)
    hash_algorithm: str = Field(
        default=DEFAULT_HASH_ALGORITHM,
        description="Registry name of the hasher the tree was built with",
    )
    leaf: bytes = Field(..., description="Digest of the proven leaf")
    root: bytes = Field(..., description="Root digest the proof commits to")
    path: tuple[ProofStep, ...] = Field(default=())

    @property
    def depth(self) -> int:
        """Number of levels between the leaf and the root."""
        return len(self.path)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready form with 0x-prefixed hex digests."""
        return {
            "schemaVersion": self.schema_version,
            "hashAlgorithm": self.hash_algorithm,
            "leaf": to_hex(self.leaf),
            "root": to_hex(self.root),
            "path": [step.to_dict() for step in self.path],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MerkleProof":
        """
        Rebuild a proof from its to_dict() form.

        Raises:
            UnsupportedSchemaVersionError: If the schema version is unknown
            ValueError: If a digest is not valid 0x hex
            KeyError: If a required field is missing
        """
        schema_version = data.get("schemaVersion", SCHEMA_VERSION)
        assert_supported_schema_version(schema_version)
        return cls(
            schema_version=schema_version,
            hash_algorithm=data.get("hashAlgorithm", DEFAULT_HASH_ALGORITHM),
            leaf=from_hex(data["leaf"]),
            root=from_hex(data["root"]),
            path=tuple(ProofStep.from_dict(step) for step in data.get("path", [])),
        )
