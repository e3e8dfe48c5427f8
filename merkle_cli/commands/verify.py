"""
CLI Verify Command

Verify a proof file produced by `merkle prove`:
- the path folds from the leaf to the recorded root
- optionally, the leaf is the hash of a given value
- optionally, the recorded root equals a trusted root

Usage:
    merkle verify proof.json [--value 2] [--root 0x...] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from merkle_core.crypto.hashing import from_hex, get_hasher, to_hex
from merkle_core.merkle import MerkleProof, verify_merkle_proof
from merkle_core.schemas.errors import MerkleException
from merkle_core.schemas.versioning import UnsupportedSchemaVersionError
from merkle_cli.inputs import parse_value


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    proof_path: str = ""
    root: str = ""
    hash_algorithm: str = ""
    depth: int = 0
    path_ok: bool = False
    value_ok: bool | None = None
    root_ok: bool | None = None
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if self.value_ok is None:
            del d["value_ok"]
        if self.root_ok is None:
            del d["root_ok"]
        if not d["errors"]:
            del d["errors"]
        return d

    @property
    def all_ok(self) -> bool:
        """Check if all requested verifications passed."""
        return (
            self.path_ok
            and self.value_ok is not False
            and self.root_ok is not False
        )


def load_proof(proof_path: Path) -> MerkleProof:
    """Read a proof document written by the prove command."""
    return MerkleProof.from_dict(json.loads(proof_path.read_text()))


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"proof: {summary.proof_path}")
    print(f"root: {summary.root}")
    print(f"hash_algorithm: {summary.hash_algorithm}")
    print(f"depth: {summary.depth}")
    print(f"path_ok: {str(summary.path_ok).lower()}")
    if summary.value_ok is not None:
        print(f"value_ok: {str(summary.value_ok).lower()}")
    if summary.root_ok is not None:
        print(f"root_ok: {str(summary.root_ok).lower()}")

    if summary.errors:
        print(f"\nerrors ({len(summary.errors)}):")
        for err in summary.errors:
            print(f"  ✗ {err}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        Exit code (0=valid, 1=error, 2=invalid)
    """
    proof_path = Path(args.proof_path)

    if not proof_path.exists():
        print(f"Error: Proof not found: {proof_path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        proof = load_proof(proof_path)
    except (KeyError, ValueError, ValidationError, UnsupportedSchemaVersionError) as e:
        print(f"Error loading proof: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        hasher = get_hasher(proof.hash_algorithm)
    except MerkleException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary = VerifySummary(
        proof_path=str(proof_path),
        root=to_hex(proof.root),
        hash_algorithm=proof.hash_algorithm,
        depth=proof.depth,
        path_ok=verify_merkle_proof(proof, hasher),
    )
    if not summary.path_ok:
        summary.errors.append("Path does not reproduce the recorded root")

    if args.value is not None:
        summary.value_ok = hasher.hash_leaf(parse_value(args.value)) == proof.leaf
        if not summary.value_ok:
            summary.errors.append("Value does not hash to the proven leaf")

    if args.root is not None:
        summary.root_ok = from_hex(args.root) == proof.root
        if not summary.root_ok:
            summary.errors.append("Recorded root differs from the trusted root")

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    if summary.all_ok:
        logger.info("Verification passed")
        return EXIT_SUCCESS

    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED
