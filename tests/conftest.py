"""
Pytest configuration and shared fixtures for the Merkle tree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Isolates tests from MERKLE_* environment variables and the
   process-wide default configuration
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

import importlib

_trees = importlib.import_module("fixtures.trees")

make_tree = _trees.make_tree

from merkle_core.config.runtime import set_default_config


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

_ENV_VARS = [
    "MERKLE_HASH_ALGORITHM",
    "MERKLE_PADDING_POLICY",
    "MERKLE_PADDING_TAG",
    "MERKLE_DEBUG",
    "MERKLE_LOG_LEVEL",
    "MERKLE_LOG_FILE",
]


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Clear MERKLE_* env vars and reset the default config around each test."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def tree8():
    """Full tree of eight distinct values (no padding)."""
    return make_tree(8)


@pytest.fixture
def tree5():
    """Tree of five values padded to eight leaves."""
    return make_tree(5)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
