"""Tests for clock sources."""

import time

import pytest

from windowstats.clock import unix_timestamp, FixedClock, ManualClock


class TestClocks:

    def test_unix_timestamp(self):
        before = int(time.time())
        now = unix_timestamp()
        assert isinstance(now, int)
        assert before <= now <= int(time.time())

    def test_fixed_clock(self):
        clock = FixedClock(500)
        assert clock() == clock() == 500

    def test_manual_clock(self, manual_clock):
        assert manual_clock() == 2000
        assert manual_clock.advance() == 2001
        assert manual_clock.advance(59) == 2060
        assert manual_clock() == 2060

    def test_manual_clock_backwards(self):
        with pytest.raises(ValueError):
            ManualClock(now=10).advance(-1)
