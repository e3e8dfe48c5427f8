"""
CLI Prove Command

Generate an inclusion proof for one padded leaf index.

Usage:
    merkle prove 2 10 20 30 [--out proof.json]
    merkle prove 500 --range 100000 --out proof.json
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from merkle_core.schemas.errors import ProofIndexOutOfRangeException
from merkle_cli.inputs import build_tree, load_values


logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def prove_cmd(args: Namespace) -> int:
    """Execute the prove command."""
    values = load_values(args)
    tree = build_tree(args, values)

    try:
        proof = tree.get_proof(args.index)
    except ProofIndexOutOfRangeException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    document = json.dumps(proof.to_dict(), indent=2)

    if args.out:
        out_path = Path(args.out)
        out_path.write_text(document + "\n")
        logger.info("Wrote proof for index %d to %s", args.index, out_path)
        print(f"Wrote proof to {out_path}")
    else:
        print(document)

    return EXIT_SUCCESS
