"""Error catalogue for windowstats."""

from .errors import (
    ErrorCode,
    ERROR_METADATA,
    WindowStatsError,
    InvalidWidthError,
    EmptyWindowError,
    InvalidPercentileError,
    ConfigError,
)

__all__ = [
    'ErrorCode',
    'ERROR_METADATA',
    'WindowStatsError',
    'InvalidWidthError',
    'EmptyWindowError',
    'InvalidPercentileError',
    'ConfigError',
]
