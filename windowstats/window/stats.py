"""
WindowStats: timestamped values over a trailing window of whole seconds.

This provides "P70 over the last 60 seconds" by keeping every sample of the
window and selecting the requested rank on demand.

Example:
    stats = WindowStats(width=60)
    for latency in latencies:
        stats.add(latency)              # stamped by the clock
    stats.add(1700000000, 12.5)         # explicit timestamp
    p70 = stats.p70()
    for ts, value in stats:             # oldest first
        ...

Not thread-safe: concurrent add/clear with any other call is the caller's
problem. Concurrent readers on an idle container are fine.
"""

import logging
from typing import Any, Dict, Generic, Iterable, List, TypeVar

from ..clock import Clock, unix_timestamp
from ..core.errors import EmptyWindowError, InvalidWidthError
from .percentile import percentile, percentiles
from .ring import BucketRing, Sample
from .view import WindowView

logger = logging.getLogger(__name__)

V = TypeVar('V')

DEFAULT_WIDTH = 60


class WindowStats(Generic[V]):
    """
    Sliding-window sample store with rank percentiles.

    Args:
        width: Window width in seconds (>= 1). Fixed for the container's life.
        clock: Zero-argument callable returning UNIX seconds, used by add(value).
    """

    def __init__(self, width: int = DEFAULT_WIDTH, clock: Clock = unix_timestamp):
        if isinstance(width, bool) or not isinstance(width, int) or width < 1:
            raise InvalidWidthError(context={'width': width})

        self._width = width
        self._clock = clock
        self._ring = BucketRing(width)

    @classmethod
    def from_config(cls, config, clock: Clock = unix_timestamp) -> 'WindowStats':
        """Build from a StatsConfig."""
        return cls(width=config.window.width_seconds, clock=clock)

    @property
    def width(self) -> int:
        return self._width

    @property
    def clock(self) -> Clock:
        return self._clock

    # === Insertion ===

    def add(self, *args) -> 'WindowStats[V]':
        """
        Add a sample. Accepts three forms:

            add(value)                  # timestamp from the clock
            add(timestamp, value)
            add((timestamp, value))     # any pair, including a Sample

        A single tuple argument is always read as (timestamp, value), never
        as a tuple value. Timestamps are truncated to whole seconds with
        int(), so float clocks such as time.time work.

        Complexity: O(1) amortized; O(k) when evicting a bucket of k samples.
        """
        if len(args) == 2:
            timestamp, value = args
        elif len(args) == 1 and isinstance(args[0], tuple):
            timestamp, value = args[0]
        elif len(args) == 1:
            timestamp, value = self._clock(), args[0]
        else:
            raise TypeError(f"add() takes 1 or 2 arguments ({len(args)} given)")

        self._ring.insert(Sample(int(timestamp), value))
        return self

    def extend(self, samples: Iterable[Any]) -> 'WindowStats[V]':
        """Add each item as add(item)."""
        for sample in samples:
            self.add(sample)
        return self

    def clear(self) -> None:
        """Drop every stored sample."""
        self._ring.clear()
        logger.debug("Cleared all buckets")

    # === Size ===

    def size(self) -> int:
        """
        Number of stored samples.

        Includes stale samples not yet evicted; use live_count() for the
        exact number inside the window.
        """
        return self._ring.size()

    def __len__(self) -> int:
        return self.size()

    def live_count(self) -> int:
        return sum(1 for _ in self.begin())

    # === Iteration ===

    def begin(self) -> WindowView:
        """View positioned on the oldest live sample."""
        return WindowView(self._ring)

    def end(self) -> WindowView:
        """View positioned past the newest live sample."""
        return WindowView(self._ring, at_end=True)

    def __iter__(self) -> WindowView:
        return self.begin()

    def samples(self) -> List[Sample]:
        """Live samples, oldest first."""
        return list(self.begin())

    def values(self) -> List[V]:
        """Live values, oldest first."""
        return [sample.value for sample in self.begin()]

    # === Percentiles ===

    def p(self, q: int) -> V:
        """
        Percentile q (integer 0-100) of live values.

        Raises:
            EmptyWindowError: no live samples
            InvalidPercentileError: q not an integer in [0, 100]

        Complexity: O(n) expected, O(n^2) worst case.
        """
        values = self.values()
        try:
            return percentile(values, q)
        except EmptyWindowError:
            logger.debug(f"P{q} requested on empty window")
            raise

    def p70(self) -> V:
        return self.p(70)

    def percentiles(self, qs: Iterable[int]) -> Dict[int, V]:
        """Several percentiles from a single pass over the window."""
        return percentiles(self.values(), qs)

    def __repr__(self) -> str:
        return f"WindowStats(width={self._width}, size={self.size()})"
