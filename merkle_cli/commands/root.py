"""
CLI Root Command

Print the root digest of a tree built from the given values.

Usage:
    merkle root 1 2 3
    merkle root --range 100000
    merkle root --from-file values.json [--json]
"""

from __future__ import annotations

import json
from argparse import Namespace

from merkle_core.crypto.hashing import to_hex
from merkle_cli.inputs import build_tree, load_values


EXIT_SUCCESS = 0


def root_cmd(args: Namespace) -> int:
    """Execute the root command."""
    values = load_values(args)
    tree = build_tree(args, values)
    root = tree.root()

    if args.json:
        print(json.dumps({
            "root": to_hex(root),
            "hashAlgorithm": tree.hasher.name,
            "padding": tree.padding.value,
            "valueCount": tree.leaf_count,
            "leafCount": tree.padded_leaf_count,
        }, indent=2))
    else:
        print(to_hex(root))

    return EXIT_SUCCESS
