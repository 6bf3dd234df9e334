"""
Pytest Configuration
====================

Automatically loaded by pytest. Adds src/ to sys.path
so core_algebra and omega are importable without installation.

Markers:
    slow - worker pools or Gröbner bases beyond the Gr(2,4) examples

Usage:
    cd src
    pytest tests/ -v
    pytest tests/ -m "not slow"
"""

import logging
import sys
from pathlib import Path

import pytest


def pytest_configure(config):
    """Add src/ to path and register markers before any imports happen."""
    src_root = Path(__file__).parent
    if str(src_root) not in sys.path:
        sys.path.insert(0, str(src_root))
    config.addinivalue_line("markers", "slow: worker pools or large Gröbner computations")


@pytest.fixture(autouse=True)
def _quiet_engine_logs():
    """Keep per-cone DEBUG lines out of failure reports."""
    logging.getLogger("core_algebra").setLevel(logging.INFO)
    yield


# Also do it at module level for non-pytest usage
src_root = Path(__file__).parent
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))
