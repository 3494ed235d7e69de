"""
windowstats - percentiles over a trailing time window.

This package provides:
- window: Bucket ring, time-ordered view, percentile engine, WindowStats
- clock: Injectable timestamp sources
- config: YAML configuration with environment variable support
- core: Structured error codes and exceptions
- cli: Command-line front-end
"""

__version__ = "1.0.0"

from .clock import Clock, unix_timestamp, FixedClock, ManualClock
from .window import Sample, WindowStats, WindowView
from .config import StatsConfig, load_config
from .core import (
    ErrorCode,
    WindowStatsError,
    EmptyWindowError,
    InvalidPercentileError,
    InvalidWidthError,
    ConfigError,
)

__all__ = [
    # Version
    '__version__',
    # Clock
    'Clock',
    'unix_timestamp',
    'FixedClock',
    'ManualClock',
    # Window
    'Sample',
    'WindowStats',
    'WindowView',
    # Config
    'StatsConfig',
    'load_config',
    # Errors
    'ErrorCode',
    'WindowStatsError',
    'EmptyWindowError',
    'InvalidPercentileError',
    'InvalidWidthError',
    'ConfigError',
]
