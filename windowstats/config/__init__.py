"""Configuration management for windowstats."""

from .schema import (
    StatsConfig,
    WindowConfig,
    QueryConfig,
    LoggingConfig,
    load_config,
    generate_default_config,
)

__all__ = [
    'StatsConfig',
    'WindowConfig',
    'QueryConfig',
    'LoggingConfig',
    'load_config',
    'generate_default_config',
]
