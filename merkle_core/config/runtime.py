"""
Runtime Configuration

Central configuration for hasher selection and tree padding.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from merkle_core.crypto.hashing import DEFAULT_HASH_ALGORITHM
from merkle_core.schemas.errors import ConfigurationException

load_dotenv()


class PaddingPolicy(str, Enum):
    """How the leaf list is filled up to the next power of two."""

    # Hash of the value type's default (e.g. 0 for int). Padding leaves are
    # indistinguishable from stored default values.
    DEFAULT_VALUE = "default_value"
    # A reserved digest, H(padding_tag), that no canonical leaf encoding produces.
    SENTINEL = "sentinel"


DEFAULT_PADDING_TAG = "merkle:padding"


def parse_padding_policy(value: Any) -> PaddingPolicy:
    """
    Interpret a padding policy name.

    Raises:
        ConfigurationException: If the name is not a known policy
    """
    if isinstance(value, PaddingPolicy):
        return value
    if not isinstance(value, str):
        raise ConfigurationException(
            f"Padding policy must be a string, got {type(value).__name__}",
            key="padding",
            details={"supported": [p.value for p in PaddingPolicy]},
        )
    try:
        return PaddingPolicy(value.strip().lower())
    except ValueError:
        raise ConfigurationException(
            f"Unknown padding policy: {value!r}",
            key="padding",
            details={"supported": [p.value for p in PaddingPolicy]},
        ) from None


@dataclass
class HashConfig:
    """Configuration for the digest function."""
    algorithm: str = DEFAULT_HASH_ALGORITHM


@dataclass
class TreeConfig:
    """Configuration for leaf materialization."""
    padding: PaddingPolicy = PaddingPolicy.DEFAULT_VALUE
    padding_tag: str = DEFAULT_PADDING_TAG

    def __post_init__(self):
        self.padding = parse_padding_policy(self.padding)


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for the Merkle library.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    hash: HashConfig = field(default_factory=HashConfig)
    tree: TreeConfig = field(default_factory=TreeConfig)
    debug: bool = False

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - MERKLE_HASH_ALGORITHM: Registered hasher name
        - MERKLE_PADDING_POLICY: default_value or sentinel
        - MERKLE_PADDING_TAG: Tag hashed for sentinel padding
        - MERKLE_DEBUG: Debug mode (true/false); the CLI logs at DEBUG and
          prints tracebacks unless --log-level is given
        """
        overrides: dict[str, Any] = {}

        if os.getenv("MERKLE_HASH_ALGORITHM"):
            overrides.setdefault("hash", {})["algorithm"] = os.getenv("MERKLE_HASH_ALGORITHM")

        if os.getenv("MERKLE_PADDING_POLICY"):
            overrides.setdefault("tree", {})["padding"] = os.getenv("MERKLE_PADDING_POLICY")
        if os.getenv("MERKLE_PADDING_TAG"):
            overrides.setdefault("tree", {})["padding_tag"] = os.getenv("MERKLE_PADDING_TAG")

        if os.getenv("MERKLE_DEBUG"):
            overrides["debug"] = os.getenv("MERKLE_DEBUG", "false").lower() == "true"

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        hash_data = data.get("hash", {}) or {}
        tree_data = data.get("tree", {}) or {}

        try:
            hash_config = HashConfig(**hash_data) if hash_data else HashConfig()
            tree_config = TreeConfig(**tree_data) if tree_data else TreeConfig()
        except TypeError as e:
            raise ConfigurationException(f"Invalid configuration: {e}") from e

        return cls(
            hash=hash_config,
            tree=tree_config,
            debug=bool(data.get("debug", False)),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "hash" in overrides:
            for key, value in overrides["hash"].items():
                setattr(new_config.hash, key, value)

        if "tree" in overrides:
            for key, value in overrides["tree"].items():
                if key == "padding":
                    value = parse_padding_policy(value)
                setattr(new_config.tree, key, value)

        if "debug" in overrides:
            new_config.debug = overrides["debug"]

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hash": {
                "algorithm": self.hash.algorithm,
            },
            "tree": {
                "padding": self.tree.padding.value,
                "padding_tag": self.tree.padding_tag,
            },
            "debug": self.debug,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set the default runtime configuration (None resets to env defaults)."""
    global _default_config
    _default_config = config
