"""Pytest configuration for omega tests."""
import sys
from pathlib import Path

import pytest


def pytest_configure(config):
    """Add src/ to path before any test imports."""
    src_root = Path(__file__).parent.parent.parent
    if str(src_root) not in sys.path:
        sys.path.insert(0, str(src_root))


# Also do it at module level for import ordering
src_root = Path(__file__).parent.parent.parent
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))


@pytest.fixture(scope="module")
def plucker_24():
    from core_algebra.builders import plucker_ideal_2
    return plucker_ideal_2(4)


@pytest.fixture(scope="module")
def square():
    from core_algebra.builders import square_ideal
    return square_ideal()
