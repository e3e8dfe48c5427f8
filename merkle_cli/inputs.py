"""
CLI Inputs

Turns command-line arguments into leaf values and tree options.
"""

from __future__ import annotations

import json
from argparse import Namespace
from pathlib import Path
from typing import Any

from merkle_core.merkle import MerkleTree


def parse_value(raw: str) -> Any:
    """
    Parse a command-line value as JSON, falling back to the raw string.

    "7" becomes 7, '"7"' becomes "7", "apple" stays "apple".
    """
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def load_values(args: Namespace) -> list[Any]:
    """
    Collect leaf values from --range, --from-file or positional values.

    Raises:
        ValueError: If the file does not hold a JSON array, or more than
            one source is given
    """
    sources = [
        getattr(args, "range", None) is not None,
        getattr(args, "from_file", None) is not None,
        bool(getattr(args, "values", None)),
    ]
    if sum(sources) > 1:
        raise ValueError("Use only one of --range, --from-file or positional values")

    if getattr(args, "range", None) is not None:
        return list(range(args.range))

    if getattr(args, "from_file", None) is not None:
        data = json.loads(Path(args.from_file).read_text())
        if not isinstance(data, list):
            raise ValueError(f"{args.from_file} must contain a JSON array")
        return data

    return [parse_value(v) for v in getattr(args, "values", None) or []]


def build_tree(args: Namespace, values: list[Any]) -> MerkleTree:
    """
    Build a tree using --hash/--padding/--pad-value, falling back to the
    CLI config. Without --pad-value, padding hashes the int default 0
    whatever the value type.
    """
    config = args.cli_config
    kwargs: dict[str, Any] = {}
    if getattr(args, "pad_value", None) is not None:
        pad_value = parse_value(args.pad_value)
        kwargs["default_factory"] = lambda: pad_value
    return MerkleTree(
        values,
        hasher=getattr(args, "hash", None) or config.hash_algorithm,
        padding=getattr(args, "padding", None) or config.padding,
        **kwargs,
    )
