"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    merkle demo [--json]
    merkle root VALUES... | --range N | --from-file PATH [--json]
    merkle prove INDEX VALUES... | --range N | --from-file PATH [--out PATH]
    merkle verify PROOF_PATH [--value JSON] [--root HEX] [--json]
    merkle config --init | --show

Environment Variables:
    MERKLE_HASH_ALGORITHM     Hasher name (default: sha256)
    MERKLE_PADDING_POLICY     default_value or sentinel
    MERKLE_LOG_LEVEL          Log level (default: WARNING)
    MERKLE_LOG_FILE           Also log to this file
    MERKLE_DEBUG              true: log at DEBUG and print tracebacks
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from merkle_core.config.runtime import PaddingPolicy, get_default_config
from merkle_core.crypto.hashing import available_hashers
from merkle_cli import __version__
from merkle_cli.commands import demo, prove, root, verify
from merkle_cli.config import load_config, get_default_config_template


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.WARNING)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def _add_value_sources(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by commands that build a tree from values."""
    parser.add_argument(
        "values",
        nargs="*",
        help="Leaf values; each is parsed as JSON, else taken as a string",
    )
    parser.add_argument(
        "--range",
        type=int,
        default=None,
        metavar="N",
        help="Use the integers 0..N-1 as values",
    )
    parser.add_argument(
        "--from-file",
        type=str,
        default=None,
        metavar="PATH",
        help="Read values from a JSON array file",
    )


def _add_tree_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--hash",
        type=str,
        default=None,
        choices=available_hashers(),
        help="Hash algorithm (overrides config)",
    )
    parser.add_argument(
        "--padding",
        type=str,
        default=None,
        choices=[p.value for p in PaddingPolicy],
        help="Padding policy (overrides config)",
    )
    parser.add_argument(
        "--pad-value",
        type=str,
        default=None,
        metavar="JSON",
        help=(
            "Default value hashed into padding leaves under default_value "
            "padding (parsed as JSON, else a string; default: 0). "
            "Use '\"\"' for string values."
        ),
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="merkle",
        description="Build Merkle trees, compute roots, and generate or verify inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./merkle.json or ~/.config/merkle/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- demo command ---
    demo_parser = subparsers.add_parser(
        "demo",
        help="Show leaves, root and a verified proof for a small tree",
    )
    _add_tree_options(demo_parser)
    demo_parser.set_defaults(func=demo.demo_cmd)

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Print the root digest of a tree",
    )
    _add_value_sources(root_parser)
    _add_tree_options(root_parser)
    root_parser.set_defaults(func=root.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Generate an inclusion proof for a padded leaf index",
    )
    prove_parser.add_argument(
        "index",
        type=int,
        help="Padded leaf index to prove",
    )
    _add_value_sources(prove_parser)
    _add_tree_options(prove_parser)
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof JSON to this path instead of stdout",
    )
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a proof file",
        description="Check that a proof's path reproduces its root, optionally against a value and a trusted root.",
    )
    verify_parser.add_argument(
        "proof_path",
        type=str,
        help="Path to a proof JSON file",
    )
    verify_parser.add_argument(
        "--value",
        type=str,
        default=None,
        help="Leaf value the proof should commit to (parsed as JSON)",
    )
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Trusted root digest (0x-prefixed hex)",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="merkle.json",
        help="Path for config file (default: merkle.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (MERKLE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        config = args.cli_config
        print(json.dumps({
            "hash_algorithm": config.hash_algorithm,
            "padding": config.padding,
            "log_level": config.log_level,
            "log_file": config.log_file,
            "default_output_format": config.default_output_format,
        }, indent=2))
        return EXIT_SUCCESS

    print("Usage: merkle config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or (
        "DEBUG" if get_default_config().debug else config.log_level
    )
    setup_logging(level=log_level, log_file=config.log_file)

    if config.default_output_format == "json" and hasattr(args, "json"):
        args.json = True

    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if log_level.upper() == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
