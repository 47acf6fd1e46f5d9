"""
Pytest configuration and shared fixtures for merklesum tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
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

_common = importlib.import_module("fixtures.common")

make_leaves = _common.make_leaves
make_value_leaves = _common.make_value_leaves
make_tree = _common.make_tree

from merklesum.config.runtime import set_default_config


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def reset_default_config():
    """Keep the process-wide default config from leaking between tests."""
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def leaves():
    """Provide the 100-leaf sequential input as (values, data)."""
    return make_leaves(100)


@pytest.fixture
def tree_100():
    """Provide (tree, values, data) for the 100-leaf sequential input."""
    return make_tree(100)


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
