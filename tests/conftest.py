"""
Pytest configuration and shared fixtures for CBMT tests.

This conftest.py:
1. Adds project root and tests root to sys.path for imports
2. Provides commonly-used leaf and root fixtures
3. Isolates tests from CBMT_* environment variables and cached config
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

from core.config.runtime import set_default_config

_common = importlib.import_module("fixtures.common")
make_leaf = _common.make_leaf


_CBMT_ENV_VARS = (
    "CBMT_HASH_ALGORITHM",
    "CBMT_HASH_PERSONALIZATION",
    "CBMT_PARITY_MODE",
    "CBMT_LOG_LEVEL",
    "CBMT_LOG_FILE",
    "CBMT_OUTPUT_FORMAT",
)


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Clear CBMT_* env vars, run from an empty directory, reset cached config."""
    for name in _CBMT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def abc_leaves():
    """Three leaves A, B, C (tree positions 2, 3, 4)."""
    return [make_leaf("A"), make_leaf("B"), make_leaf("C")]


@pytest.fixture
def secondary_root():
    """Independently committed witness root."""
    return make_leaf("witness")
