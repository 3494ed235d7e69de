"""Sliding-window sample storage and percentile queries."""

from .ring import Sample, Bucket, BucketRing
from .view import WindowView
from .percentile import validate_percentile, rank_index, select, percentile, percentiles
from .stats import WindowStats, DEFAULT_WIDTH

__all__ = [
    'Sample',
    'Bucket',
    'BucketRing',
    'WindowView',
    'validate_percentile',
    'rank_index',
    'select',
    'percentile',
    'percentiles',
    'WindowStats',
    'DEFAULT_WIDTH',
]
