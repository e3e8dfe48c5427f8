"""
Merkle Proofs Convenience Wrappers
Thin wrappers around the tree and verifier for a class-based API.

This module provides:
- MerkleProver: Generate roots and proofs straight from values
- MerkleVerifier: Verify proofs, optionally against a raw leaf value
"""
from __future__ import annotations

from typing import Any, Optional, Sequence

from merkle_core.crypto.hashing import Hasher, get_hasher
from merkle_core.merkle.merkle_tree import MerkleTree, verify_merkle_proof
from merkle_core.schemas.errors import ErrorCodes, MerkleVerificationException
from merkle_core.schemas.proof import Direction, MerkleProof, ProofStep


class MerkleProver:
    """
    Convenience class for generating Merkle proofs without keeping a tree.

    Example:
        >>> proof = MerkleProver.prove([10, 20, 30], index=1)
        >>> MerkleVerifier.verify_value(20, proof)
        True
    """

    @staticmethod
    def prove(values: Sequence[Any], index: int, **tree_kwargs: Any) -> MerkleProof:
        """
        Generate a proof for the value at the given padded index.

        Raises:
            ProofIndexOutOfRangeException: If index is out of range
        """
        return MerkleTree(values, **tree_kwargs).get_proof(index)

    @staticmethod
    def compute_root(values: Sequence[Any], **tree_kwargs: Any) -> bytes:
        """Compute the root digest for a sequence of values."""
        return MerkleTree(values, **tree_kwargs).root()


class MerkleVerifier:
    """Convenience class for verifying Merkle proofs."""

    @staticmethod
    def verify(proof: MerkleProof, hasher: Optional[Hasher] = None) -> bool:
        """Verify a proof against its own recorded root."""
        return verify_merkle_proof(proof, hasher)

    @staticmethod
    def verify_value(
        value: Any,
        proof: MerkleProof,
        hasher: Optional[Hasher] = None,
    ) -> bool:
        """
        Verify that a raw value is the leaf the proof commits to.

        The value is hashed with the proof's hasher and must match
        proof.leaf before the path is checked.
        """
        if hasher is None:
            hasher = get_hasher(proof.hash_algorithm)
        if hasher.hash_leaf(value) != proof.leaf:
            return False
        return verify_merkle_proof(proof, hasher)

    @staticmethod
    def verify_against_root(
        proof: MerkleProof,
        trusted_root: bytes,
        hasher: Optional[Hasher] = None,
    ) -> bool:
        """
        Verify a proof and check it commits to a root the caller trusts.

        A proof always carries its own root, so a forged proof is
        internally consistent; only comparing with a root obtained
        elsewhere shows it belongs to the committed set.
        """
        return proof.root == trusted_root and verify_merkle_proof(proof, hasher)

    @staticmethod
    def verify_leaf_in_root(
        leaf: bytes,
        path: Sequence[tuple[Direction | str, bytes]],
        root: bytes,
        hasher: Optional[Hasher] = None,
    ) -> bool:
        """
        Verify a leaf digest is included in a root using raw components.

        Args:
            leaf: Leaf digest
            path: (direction, sibling digest) pairs from leaf level upward
            root: Claimed root digest
            hasher: Hasher; defaults to the default hash algorithm
        """
        hasher = hasher or get_hasher()
        proof = MerkleProof(
            hash_algorithm=hasher.name,
            leaf=leaf,
            root=root,
            path=tuple(
                ProofStep(direction=Direction(direction), value=value)
                for direction, value in path
            ),
        )
        return verify_merkle_proof(proof, hasher)

    @staticmethod
    def require_valid(
        proof: MerkleProof,
        trusted_root: Optional[bytes] = None,
        hasher: Optional[Hasher] = None,
    ) -> None:
        """
        Raise instead of returning False when verification fails.

        Raises:
            MerkleVerificationException: With ROOT_MISMATCH if the proof
                commits to a different root than trusted_root, or
                MERKLE_PROOF_INVALID if the path does not fold to the root
        """
        if trusted_root is not None and proof.root != trusted_root:
            raise MerkleVerificationException(
                "Proof commits to a different root",
                code=ErrorCodes.ROOT_MISMATCH,
                details={"depth": proof.depth},
            )
        if not verify_merkle_proof(proof, hasher):
            raise MerkleVerificationException(
                "Proof path does not reproduce the recorded root",
                details={"depth": proof.depth},
            )


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
