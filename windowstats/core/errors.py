"""
Error codes for windowstats.

Structured error codes for machine-parseable failures.

Format: E{category}{number}
- E1xxx: Container construction errors
- E2xxx: Query errors
- E3xxx: Configuration errors
"""

from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    """Structured error codes."""

    # E1xxx: Container construction errors
    E1001_INVALID_WIDTH = "E1001"

    # E2xxx: Query errors
    E2001_EMPTY_WINDOW = "E2001"
    E2002_INVALID_PERCENTILE = "E2002"

    # E3xxx: Configuration errors
    E3001_INVALID_CONFIG = "E3001"
    E3002_CONFIG_NOT_FOUND = "E3002"
    E3003_VALIDATION_FAILED = "E3003"


# Error code metadata
ERROR_METADATA = {
    ErrorCode.E1001_INVALID_WIDTH: {
        'severity': 'error',
        'message': 'Window width must be an integer >= 1',
        'recoverable': False,
    },
    ErrorCode.E2001_EMPTY_WINDOW: {
        'severity': 'warning',
        'message': 'No live samples in window',
        'recoverable': True,
    },
    ErrorCode.E2002_INVALID_PERCENTILE: {
        'severity': 'error',
        'message': 'Percentile must be an integer in [0, 100]',
        'recoverable': False,
    },
    ErrorCode.E3001_INVALID_CONFIG: {
        'severity': 'error',
        'message': 'Invalid configuration',
        'recoverable': False,
    },
    ErrorCode.E3002_CONFIG_NOT_FOUND: {
        'severity': 'error',
        'message': 'Configuration file not found',
        'recoverable': False,
    },
    ErrorCode.E3003_VALIDATION_FAILED: {
        'severity': 'error',
        'message': 'Configuration validation failed',
        'recoverable': False,
    },
}


class WindowStatsError(Exception):
    """
    Base error carrying a structured code and context.

    Example:
        raise InvalidPercentileError(context={'percentile': 101})
    """

    code: Optional[ErrorCode] = None

    def __init__(self, context: Optional[dict] = None, code: Optional[ErrorCode] = None):
        if code is not None:
            self.code = code
        self.context = context
        super().__init__(self.message)

    @property
    def severity(self) -> str:
        return ERROR_METADATA.get(self.code, {}).get('severity', 'error')

    @property
    def message(self) -> str:
        base_msg = ERROR_METADATA.get(self.code, {}).get('message', 'Unknown error')
        if self.context:
            return f"{base_msg}: {self.context}"
        return base_msg

    @property
    def recoverable(self) -> bool:
        return ERROR_METADATA.get(self.code, {}).get('recoverable', False)

    def to_dict(self) -> dict:
        return {
            'code': self.code.value if self.code else None,
            'severity': self.severity,
            'message': self.message,
            'recoverable': self.recoverable,
            'context': self.context,
        }


class InvalidWidthError(WindowStatsError, ValueError):
    code = ErrorCode.E1001_INVALID_WIDTH


class EmptyWindowError(WindowStatsError, LookupError):
    """Percentile requested with no live samples."""
    code = ErrorCode.E2001_EMPTY_WINDOW


class InvalidPercentileError(WindowStatsError, ValueError):
    code = ErrorCode.E2002_INVALID_PERCENTILE


class ConfigError(WindowStatsError, ValueError):
    """Configuration could not be loaded or failed validation."""
    code = ErrorCode.E3001_INVALID_CONFIG
