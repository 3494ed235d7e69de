"""Pytest fixtures for windowstats tests."""

import pytest

from windowstats.clock import FixedClock, ManualClock


@pytest.fixture
def fixed_clock() -> FixedClock:
    """Clock pinned at t=1000."""
    return FixedClock(1000)


@pytest.fixture
def manual_clock() -> ManualClock:
    """Clock starting at t=2000, advanced by the test."""
    return ManualClock(now=2000)


@pytest.fixture
def config_file(tmp_path):
    """Write YAML text to a temporary config file and return its path."""
    def write(text: str):
        path = tmp_path / 'windowstats.yml'
        path.write_text(text)
        return path
    return write
