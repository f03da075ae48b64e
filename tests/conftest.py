"""
Pytest configuration and shared fixtures for beacon header proof tests.

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

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_chunk = _common.make_chunk
make_beacon_header = _common.make_beacon_header
make_header_data = _common.make_header_data
make_bundle = _common.make_bundle


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def beacon_header():
    """Provide the default typed header (slot 123456, proposer 42)."""
    return make_beacon_header()


@pytest.fixture
def header_data():
    """Provide the default header as raw API strings."""
    return make_header_data()


@pytest.fixture
def header_chunks():
    """Chunks c0..c4 of the default header."""
    from beacon_core.ssz.chunks import header_to_chunks
    return header_to_chunks(make_beacon_header())


@pytest.fixture
def state_root_bundle():
    """Provide a valid bundle for state_root."""
    return make_bundle("state_root")


@pytest.fixture(autouse=True)
def _clear_beacon_proof_env(monkeypatch):
    """Keep the developer's BEACON_PROOF_* settings out of the tests."""
    import os
    for name in list(os.environ):
        if name.startswith("BEACON_PROOF_"):
            monkeypatch.delenv(name, raising=False)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
