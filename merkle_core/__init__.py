"""
Padded Merkle tree library.

    from merkle_core.merkle import MerkleTree, verify_merkle_proof
"""

__version__ = "0.1.0"
