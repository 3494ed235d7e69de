"""
Rank-based percentile over a list of orderable values.

p(q) is the value at 0-based rank ceil(n * q / 100), clamped to n - 1,
in ascending order. For q = 100 the raw rank is n, one past the end,
so the clamp makes p(100) the maximum.

Selection uses quickselect with a random pivot and three-way partitioning:
expected O(n), worst case O(n^2). The pivot choice only affects running
time; the selected value is always the true k-th smallest. Values only need
to support `<`.
"""

import random
from typing import Dict, Iterable, List, MutableSequence, TypeVar

from ..core.errors import EmptyWindowError, InvalidPercentileError

V = TypeVar('V')

_rng = random.Random()


def validate_percentile(q) -> int:
    """Return q if it is an integer in [0, 100], else raise."""
    if isinstance(q, bool) or not isinstance(q, int) or not 0 <= q <= 100:
        raise InvalidPercentileError(context={'percentile': q})
    return q


def rank_index(n: int, q: int) -> int:
    """
    0-based rank for percentile q over n values.

    Examples:
        rank_index(10, 50) = 5     # ceil(5.0)
        rank_index(3, 70) = 2      # ceil(2.1) = 3, clamped to 2
        rank_index(100, 100) = 99  # clamped
    """
    return min((n * q + 99) // 100, n - 1)


def select(values: MutableSequence[V], k: int) -> V:
    """
    Partially reorder `values` in place so values[k] is the k-th smallest.

    Returns:
        values[k] after partitioning.
    """
    if not 0 <= k < len(values):
        raise IndexError(f"rank {k} out of range for {len(values)} values")

    lo, hi = 0, len(values) - 1
    while lo < hi:
        pivot = values[_rng.randint(lo, hi)]

        # Invariant: [lo, lt) < pivot, [lt, i) == pivot, (gt, hi] > pivot
        lt, i, gt = lo, lo, hi
        while i <= gt:
            v = values[i]
            if v < pivot:
                values[lt], values[i] = v, values[lt]
                lt += 1
                i += 1
            elif pivot < v:
                values[i], values[gt] = values[gt], v
                gt -= 1
            else:
                i += 1

        if k < lt:
            hi = lt - 1
        elif k > gt:
            lo = gt + 1
        else:
            break

    return values[k]


def percentile(values: List[V], q: int) -> V:
    """
    Percentile q of `values`. Reorders `values` in place.

    Raises:
        InvalidPercentileError: q is not an integer in [0, 100]
        EmptyWindowError: values is empty
    """
    validate_percentile(q)
    if not values:
        raise EmptyWindowError(context={'percentile': q})
    return select(values, rank_index(len(values), q))


def percentiles(values: List[V], qs: Iterable[int]) -> Dict[int, V]:
    """Several percentiles over the same values. Reorders `values` in place."""
    qs = [validate_percentile(q) for q in qs]
    if not values:
        raise EmptyWindowError(context={'percentiles': qs})
    n = len(values)
    return {q: select(values, rank_index(n, q)) for q in qs}
