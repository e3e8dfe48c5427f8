"""
Merkle Tree and Commitments
Padded Merkle tree construction + proof generation/verification.

This module provides:
- MerkleTree: Append-only tree over arbitrary canonicalizable values
- MerkleProof / ProofStep / Direction: Detached inclusion proofs
- verify_merkle_proof: Verify a proof against its claimed root
- MerkleProver / MerkleVerifier: Class-based convenience API

Commitment Rules:
1. Leaf hashing: H(dumps_canonical(value).encode("utf-8"))
2. Parent hashing: H(left + right)
3. Padding: next power of two, filled with H(default value)
4. Empty tree: one padding leaf, root == leaf

Usage:
    from merkle_core.merkle import MerkleTree, verify_merkle_proof

    tree = MerkleTree([0, 1, 2, 3])
    tree.append(4)

    root = tree.root()
    proof = tree.get_proof(2)

    assert verify_merkle_proof(proof)
    assert proof.root == root
"""
from merkle_core.schemas.proof import (
    Direction,
    MerkleProof,
    ProofStep,
)

from .merkle_tree import (
    MerkleTree,
    compute_root,
    materialize_leaves,
    merkle_parents,
    next_power_of_two,
    padding_digest,
    reduce_to_root,
    verify_merkle_proof,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "MerkleTree",
    "MerkleProof",
    "ProofStep",
    "Direction",
    # Core functions
    "next_power_of_two",
    "merkle_parents",
    "reduce_to_root",
    "padding_digest",
    "materialize_leaves",
    "compute_root",
    "verify_merkle_proof",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
