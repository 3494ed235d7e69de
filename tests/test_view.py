"""
Tests for the time-ordered window view.

CRITICAL TESTS:
1. test_wraparound_order - Oldest-first order across the ring seam
2. test_stale_bucket_skipped - Samples at t_max - W are never yielded
"""

import random

import pytest

from windowstats.window import WindowStats, WindowView, Sample


class TestEmptyView:
    """Views over an empty container."""

    def test_begin_equals_end(self):
        stats = WindowStats(width=60)
        assert stats.begin() == stats.end()
        assert list(stats) == []

    def test_next_raises_stop_iteration(self):
        view = WindowStats(width=5).begin()
        assert view.exhausted
        with pytest.raises(StopIteration):
            next(view)


class TestOrdering:
    """Oldest-first ordering, insertion order within a second."""

    def test_single_bucket(self):
        """Only one non-empty bucket: walk wraps through empty ones."""
        stats = WindowStats(width=10)
        stats.add(1005, 'a').add(1005, 'b')

        assert stats.samples() == [Sample(1005, 'a'), Sample(1005, 'b')]

    def test_wraparound_order(self):
        """
        CRITICAL TEST: Order follows time, not bucket index.

        Width 3: 101 -> bucket 2, 102 -> bucket 0, 103 -> bucket 1.
        """
        stats = WindowStats(width=3)
        stats.add(100, 'a').add(101, 'b').add(102, 'c').add(103, 'd')

        assert stats.samples() == [
            Sample(101, 'b'),
            Sample(102, 'c'),
            Sample(103, 'd'),
        ]
        assert stats.size() == 3

    def test_out_of_order_inserts(self):
        """Insertion order across seconds does not matter."""
        stats = WindowStats(width=60)
        stats.add(1030, 3).add(1000, 1).add(1010, 2).add(1000, 11)

        assert stats.values() == [1, 11, 2, 3]

    def test_randomized_order_and_freshness(self):
        """Non-decreasing timestamps, insertion order ties, nothing stale."""
        rng = random.Random(0xDEADBEEF)
        stats = WindowStats(width=13)
        seq = 0
        for _ in range(2000):
            stats.add(rng.randint(900, 1000), seq)
            seq += 1

        samples = stats.samples()
        assert samples
        t_max = max(s.timestamp for s in samples)
        for prev, cur in zip(samples, samples[1:]):
            assert prev.timestamp <= cur.timestamp
            if prev.timestamp == cur.timestamp:
                assert prev.value < cur.value
        assert all(s.timestamp > t_max - 13 for s in samples)


class TestStaleness:
    """Logical eviction during iteration."""

    def test_stale_bucket_skipped(self):
        """
        CRITICAL TEST: A bucket stamped exactly t_max - W is stale.
        """
        stats = WindowStats(width=10)
        stats.add(100, 'old')
        stats.add(110, 'new')  # same bucket as 100: evicts it
        assert stats.samples() == [Sample(110, 'new')]

        stats = WindowStats(width=10)
        stats.add(100, 'old')
        stats.add(109, 'edge')
        stats.add(111, 'new')

        # t_max = 111, t_min = 101: 100 is stale but still stored
        assert stats.size() == 3
        assert stats.values() == ['edge', 'new']
        assert stats.live_count() == 2

    def test_stale_tail(self):
        """(t, a) stays live until something at t + W arrives."""
        stats = WindowStats(width=60)
        stats.add(1000, 'a')
        stats.add(1059, 'b')
        assert stats.values() == ['a', 'b']

        stats.add(1060, 'c')
        assert stats.values() == ['b', 'c']

    def test_mixed_age_buckets(self):
        """Old buckets interleaved with live ones are skipped entirely."""
        stats = WindowStats(width=5)
        stats.add(10, 'x')   # bucket 0
        stats.add(12, 'y')   # bucket 2
        stats.add(18, 'z')   # bucket 3, t_max = 18, t_min = 13
        stats.add(16, 'w')   # bucket 1

        assert stats.values() == ['w', 'z']


class TestCursor:
    """begin()/end() cursor semantics."""

    def test_manual_walk(self):
        stats = WindowStats(width=60)
        for v in range(5):
            stats.add(2000 + v, v)

        view, end = stats.begin(), stats.end()
        seen = []
        while view != end:
            seen.append(next(view).value)

        assert seen == [0, 1, 2, 3, 4]
        assert view == end

    def test_views_are_independent(self):
        """Each begin() starts over; a drained view stays drained."""
        stats = WindowStats(width=60).add(1, 'a').add(2, 'b')
        first = stats.begin()
        assert list(first) == [Sample(1, 'a'), Sample(2, 'b')]
        assert list(first) == []
        assert list(stats.begin()) == [Sample(1, 'a'), Sample(2, 'b')]

    def test_view_bounds(self):
        stats = WindowStats(width=10).add(100, 1).add(105, 2)
        view = stats.begin()
        assert isinstance(view, WindowView)
        assert view.t_max == 105
        assert view.t_min == 95

    def test_clear_resets_view(self):
        stats = WindowStats(width=10)
        for t in range(30):
            stats.add(t, t)
        stats.clear()

        assert stats.size() == 0
        assert stats.begin() == stats.end()


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
