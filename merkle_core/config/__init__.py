"""
Runtime Configuration Module

Provides configuration loading and management for the Merkle library.
"""

from .runtime import (
    DEFAULT_PADDING_TAG,
    HashConfig,
    PaddingPolicy,
    RuntimeConfig,
    TreeConfig,
    get_default_config,
    parse_padding_policy,
    set_default_config,
)

__all__ = [
    "DEFAULT_PADDING_TAG",
    "HashConfig",
    "PaddingPolicy",
    "RuntimeConfig",
    "TreeConfig",
    "get_default_config",
    "parse_padding_policy",
    "set_default_config",
]
