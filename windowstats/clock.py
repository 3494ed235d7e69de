"""
Clock sources for sample timestamping.

A clock is any zero-argument callable returning the current UNIX time in
whole seconds. WindowStats only calls it when a value is added without an
explicit timestamp.

Example:
    clock = ManualClock(now=1000)
    stats = WindowStats(width=60, clock=clock)
    stats.add(1.5)           # stamped 1000
    clock.advance(30)
    stats.add(2.5)           # stamped 1030
"""

import time
from dataclasses import dataclass
from typing import Callable

Clock = Callable[[], int]


def unix_timestamp() -> int:
    """Current wall-clock UNIX timestamp, truncated to whole seconds."""
    return int(time.time())


@dataclass(frozen=True)
class FixedClock:
    """Clock that always returns the same timestamp."""
    timestamp: int

    def __call__(self) -> int:
        return self.timestamp


@dataclass
class ManualClock:
    """
    Clock advanced explicitly by the caller.

    Used by simulations and tests that need time to move without sleeping.
    """
    now: int = 0

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int = 1) -> int:
        """Move the clock forward and return the new time."""
        if seconds < 0:
            raise ValueError(f"cannot move clock backwards: {seconds}")
        self.now += seconds
        return self.now
