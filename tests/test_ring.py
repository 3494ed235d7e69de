"""
Tests for the bucket ring.

CRITICAL TESTS:
1. test_same_bucket_new_second_evicts - A bucket never mixes two seconds
2. test_size_counts_stale - size() reports stored samples, stale included
"""

import pytest

from windowstats.window.ring import Bucket, BucketRing, Sample


class TestBucket:
    """Test a single bucket."""

    def test_empty_bucket(self):
        bucket = Bucket()
        assert len(bucket) == 0
        assert bucket.timestamp is None

    def test_append_same_second(self):
        """Samples for one second accumulate in insertion order."""
        bucket = Bucket()
        assert bucket.append(Sample(10, 'a')) == 0
        assert bucket.append(Sample(10, 'b')) == 0

        assert [s.value for s in bucket.samples] == ['a', 'b']
        assert bucket.timestamp == 10

    def test_append_new_second_evicts(self):
        """A different second replaces the whole bucket."""
        bucket = Bucket()
        bucket.append(Sample(10, 'a'))
        bucket.append(Sample(10, 'b'))

        assert bucket.append(Sample(13, 'c')) == 2
        assert bucket.samples == [Sample(13, 'c')]


class TestBucketRing:
    """Test routing and eviction across the ring."""

    def test_routing(self):
        """Sample lands at timestamp mod width, at the tail."""
        ring = BucketRing(60)
        ring.insert(Sample(1000, 1.0))
        ring.insert(Sample(1000, 2.0))

        bucket = ring[1000 % 60]
        assert bucket[len(bucket) - 1] == Sample(1000, 2.0)
        assert ring.size() == 2

    def test_same_bucket_new_second_evicts(self):
        """
        CRITICAL TEST: (t, a) then (t + W, b) leaves only b.
        """
        ring = BucketRing(3)
        ring.insert(Sample(100, 'a'))
        evicted = ring.insert(Sample(103, 'b'))

        assert evicted == 1
        assert ring[1].samples == [Sample(103, 'b')]
        assert ring.size() == 1

    def test_size_counts_stale(self):
        """
        CRITICAL TEST: Lazy eviction keeps stale samples in size().
        """
        ring = BucketRing(10)
        ring.insert(Sample(100, 'old'))
        ring.insert(Sample(115, 'new'))  # 100 is now stale, bucket 5 untouched

        assert ring.size() == 2

    def test_every_bucket_holds_one_second(self):
        """All samples in a bucket share one timestamp at rest."""
        ring = BucketRing(7)
        for t in range(50, 120):
            for v in range(t % 4):
                ring.insert(Sample(t, v))

        for index in range(7):
            stamps = {s.timestamp for s in ring[index].samples}
            assert len(stamps) <= 1
            assert all(ts % 7 == index for ts in stamps)

    def test_newest(self):
        ring = BucketRing(5)
        assert ring.newest() is None

        ring.insert(Sample(21, 'x'))
        ring.insert(Sample(23, 'y'))
        ring.insert(Sample(22, 'z'))
        assert ring.newest() == (23, 3)

    def test_clear(self):
        ring = BucketRing(4)
        for t in range(10):
            ring.insert(Sample(t, t))
        ring.clear()

        assert ring.size() == 0
        assert ring.newest() is None

    def test_width_one(self):
        """A one-second window keeps only the latest second."""
        ring = BucketRing(1)
        ring.insert(Sample(5, 'a'))
        ring.insert(Sample(5, 'b'))
        ring.insert(Sample(6, 'c'))

        assert len(ring) == 1
        assert ring[0].samples == [Sample(6, 'c')]


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
