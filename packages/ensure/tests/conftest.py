"""Pytest configuration for dataknobs_ensure tests."""

import sys
from pathlib import Path

import pytest

# Add the package source to path for testing
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from dataknobs_ensure import options  # noqa: E402


@pytest.fixture
def fail_fast():
    """Fail-fast validation options."""
    return options(collect_all_errors=False)


@pytest.fixture
def collect_all():
    """Collect-all validation options."""
    return options(collect_all_errors=True)
