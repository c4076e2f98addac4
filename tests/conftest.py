"""
Pytest configuration and shared fixtures for beaconroot tests.

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

make_values = _common.make_values
make_record = _common.make_record
make_small_catalog = _common.make_small_catalog
make_publisher = _common.make_publisher


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def record():
    """Provide a fully populated default-catalog Record."""
    return make_record()


@pytest.fixture
def small_catalog():
    """Provide a 4-field catalog with 8-character tokens."""
    return make_small_catalog()


@pytest.fixture
def store():
    """Provide an empty in-memory CommitmentStore."""
    from orchestrator.commitment_store import CommitmentStore
    return CommitmentStore()


@pytest.fixture
def published():
    """Provide a publisher with five synthetic snapshots."""
    return make_publisher(blocks=5)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    """Keep BEACONROOT_* variables and config files in cwd out of tests."""
    import os
    for key in list(os.environ):
        if key.startswith("BEACONROOT_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


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


# =============================================================================
# Test Helpers (available to all tests via fixtures)
# =============================================================================

@pytest.fixture
def assert_check_passed():
    """Helper to assert a specific check passed in VerificationResult."""
    def _assert(result, check_id: str):
        checks = [c for c in result.checks if c.check_id == check_id]
        assert len(checks) == 1, f"Expected check '{check_id}' not found in {[c.check_id for c in result.checks]}"
        assert checks[0].ok, f"Check '{check_id}' failed: {checks[0].message}"
    return _assert
