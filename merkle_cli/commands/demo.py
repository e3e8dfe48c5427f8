"""
CLI Demo Command

Walks through the library on a small tree: five values (0..3 plus an
appended 4), their padded leaves, the root, the proof for index 2 and
its verification.

Usage:
    merkle demo [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace

from merkle_core.crypto.hashing import to_hex
from merkle_core.merkle import verify_merkle_proof
from merkle_cli.inputs import build_tree


logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_VERIFICATION_FAILED = 2


def demo_cmd(args: Namespace) -> int:
    """Execute the demo command."""
    tree = build_tree(args, list(range(4)))
    tree.append(4)

    leaves = tree.leaves()
    root = tree.root()
    proof = tree.get_proof(2)
    valid = verify_merkle_proof(proof)

    logger.info("Demo tree has %d values, %d leaves", len(tree), len(leaves))

    if args.json:
        print(json.dumps({
            "leaves": [to_hex(leaf) for leaf in leaves],
            "root": to_hex(root),
            "proof": proof.to_dict(),
            "valid": valid,
        }, indent=2))
    else:
        print("leaves:")
        for i, leaf in enumerate(leaves):
            print(f"  [{i}] {to_hex(leaf)}")
        print(f"root: {to_hex(root)}")
        print("proof:")
        print(f"  leaf: {to_hex(proof.leaf)}")
        for step in proof.path:
            print(f"  {step.direction.value:<5} {to_hex(step.value)}")
        print(f"valid: {str(valid).lower()}")

    return EXIT_SUCCESS if valid else EXIT_VERIFICATION_FAILED
