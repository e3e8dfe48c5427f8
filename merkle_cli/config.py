"""
CLI Configuration

Configuration for the merkle CLI.
Supports environment variables and JSON configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from merkle_core.config.runtime import PaddingPolicy, parse_padding_policy
from merkle_core.crypto.hashing import DEFAULT_HASH_ALGORITHM


# Environment variable prefix
ENV_PREFIX = "MERKLE_"


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Tree settings
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM
    padding: str = PaddingPolicy.DEFAULT_VALUE.value

    # Logging
    log_level: str = "WARNING"
    log_file: str | None = None

    # Output
    default_output_format: str = "human"  # "human" or "json"


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    config = CLIConfig()

    config.hash_algorithm = data.get("hash_algorithm", config.hash_algorithm)
    config.padding = parse_padding_policy(data.get("padding", config.padding)).value

    config.log_level = data.get("log_level", config.log_level)
    config.log_file = data.get("log_file", config.log_file)

    config.default_output_format = data.get(
        "default_output_format", config.default_output_format
    )

    return config


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = CLIConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        default_paths = [
            Path.cwd() / "merkle.json",
            Path.cwd() / ".merkle.json",
            Path.home() / ".config" / "merkle" / "config.json",
        ]
        for default_path in default_paths:
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    if os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM"):
        config.hash_algorithm = os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM", config.hash_algorithm)
    if os.getenv(f"{ENV_PREFIX}PADDING_POLICY"):
        config.padding = parse_padding_policy(
            os.getenv(f"{ENV_PREFIX}PADDING_POLICY", config.padding)
        ).value
    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", config.log_level)
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")

    return config


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "hash_algorithm": "sha256",
  "padding": "default_value",
  "log_level": "WARNING",
  "log_file": null,
  "default_output_format": "human"
}
"""
