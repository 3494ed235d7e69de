"""
Time-ordered view over the live samples of a bucket ring.

The view starts at the bucket right after the newest one in ring order
(the oldest second still inside the window) and walks forward until it has
drained the newest bucket. Buckets whose samples are at or below
`t_max - width` are stale leftovers of lazy eviction and are skipped.

The view is a single-pass, read-only cursor. Adding to or clearing the
container while a view is in use invalidates it; results from an
invalidated view are undefined. This is not checked at runtime.
"""

from typing import Iterator, Optional

from .ring import BucketRing, Sample


class WindowView(Iterator[Sample]):
    """
    Cursor over live samples, oldest first, insertion order within a second.

    Example:
        view = stats.begin()
        while view != stats.end():
            sample = next(view)

    or simply:
        for sample in stats:
            ...
    """

    def __init__(self, ring: BucketRing, at_end: bool = False):
        self._ring = ring
        self.t_max: Optional[int] = None
        self.t_min: Optional[int] = None
        self._index_max = 0
        self._index = 0
        self._pos = 0

        newest = ring.newest()
        if newest is None:
            # Empty ring: begin and end coincide at (0, 0)
            return

        self.t_max, self._index_max = newest
        self.t_min = self.t_max - ring.width

        if at_end:
            self._index = self._index_max
            self._pos = len(ring[self._index_max])
        else:
            self._index = self._next_index(self._index_max)
            self._seek()

    def _next_index(self, index: int) -> int:
        return (index + 1) % self._ring.width

    def _is_live(self, sample: Sample) -> bool:
        return sample.timestamp > self.t_min

    def _seek(self) -> None:
        """Skip exhausted and stale buckets, stopping at the newest one."""
        while self._index != self._index_max:
            bucket = self._ring[self._index]
            if self._pos < len(bucket) and self._is_live(bucket[self._pos]):
                return
            self._index = self._next_index(self._index)
            self._pos = 0

    @property
    def exhausted(self) -> bool:
        return (
            self._index == self._index_max
            and self._pos >= len(self._ring[self._index])
        )

    @property
    def position(self):
        """(bucket index, offset within bucket) of the next sample."""
        return self._index, self._pos

    def __iter__(self) -> 'WindowView':
        return self

    def __next__(self) -> Sample:
        if self.exhausted:
            raise StopIteration
        sample = self._ring[self._index][self._pos]
        self._pos += 1
        self._seek()
        return sample

    def __eq__(self, other) -> bool:
        if not isinstance(other, WindowView):
            return NotImplemented
        return self._ring is other._ring and self.position == other.position

    def __ne__(self, other) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"WindowView(position={self.position}, "
            f"t_min={self.t_min}, t_max={self.t_max})"
        )
