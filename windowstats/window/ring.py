"""
Bucket ring: per-second sample storage for a fixed-width window.

Bucket i holds the samples whose timestamp satisfies `timestamp % width == i`.
At rest a bucket holds samples for one second only. When a sample for a
different second lands in an occupied bucket, the old contents are discarded
first. This is the only eviction: nothing is swept on a timer.

Memory: O(width + samples added in the last `width` seconds)
"""

import logging
from typing import Any, List, NamedTuple, Optional, Tuple

logger = logging.getLogger(__name__)


class Sample(NamedTuple):
    """A (timestamp, value) pair. Timestamp is UNIX seconds."""
    timestamp: int
    value: Any


class Bucket:
    """Samples sharing one timestamp, in insertion order."""

    __slots__ = ('samples',)

    def __init__(self):
        self.samples: List[Sample] = []

    def __len__(self) -> int:
        return len(self.samples)

    def __getitem__(self, pos: int) -> Sample:
        return self.samples[pos]

    @property
    def timestamp(self) -> Optional[int]:
        """Timestamp shared by every sample, or None when empty."""
        if not self.samples:
            return None
        return self.samples[0].timestamp

    def append(self, sample: Sample) -> int:
        """
        Append a sample, evicting stale contents first.

        Returns:
            Number of samples discarded (0 unless the bucket held another second).
        """
        evicted = 0
        if self.samples and self.samples[0].timestamp != sample.timestamp:
            evicted = len(self.samples)
            self.samples = []
        self.samples.append(sample)
        return evicted

    def clear(self) -> None:
        self.samples = []


class BucketRing:
    """
    Fixed ring of `width` buckets indexed by timestamp modulo width.

    Example:
        ring = BucketRing(3)
        ring.insert(Sample(100, 'a'))   # bucket 1
        ring.insert(Sample(103, 'd'))   # bucket 1 again: evicts (100, 'a')
    """

    def __init__(self, width: int):
        self.width = width
        self.buckets: List[Bucket] = [Bucket() for _ in range(width)]

    def index_of(self, timestamp: int) -> int:
        """Bucket index for a timestamp."""
        return timestamp % self.width

    def insert(self, sample: Sample) -> int:
        """Route a sample to its bucket. Returns the number of samples evicted."""
        index = self.index_of(sample.timestamp)
        bucket = self.buckets[index]
        previous = bucket.timestamp

        evicted = bucket.append(sample)
        if evicted:
            logger.debug(
                f"Bucket {index}: evicted {evicted} samples "
                f"from t={previous} for t={sample.timestamp}"
            )
        return evicted

    def clear(self) -> None:
        for bucket in self.buckets:
            bucket.clear()

    def size(self) -> int:
        """Stored samples, stale ones included."""
        return sum(len(bucket) for bucket in self.buckets)

    def newest(self) -> Optional[Tuple[int, int]]:
        """
        Locate the newest non-empty bucket.

        Returns:
            (t_max, i_max), or None when every bucket is empty.
        """
        newest = None
        for index, bucket in enumerate(self.buckets):
            ts = bucket.timestamp
            if ts is not None and (newest is None or ts > newest[0]):
                newest = (ts, index)
        return newest

    def __getitem__(self, index: int) -> Bucket:
        return self.buckets[index]

    def __len__(self) -> int:
        return self.width
