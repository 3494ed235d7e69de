"""
Configuration schema for windowstats.

Supports:
- YAML file loading
- Environment variable substitution (${VAR_NAME}); integer fields accept
  substituted strings such as "30"
- Validation with error messages

Example config (windowstats.yml):
    version: 1

    window:
      width_seconds: 60

    query:
      percentiles: [50, 70, 99]

    logging:
      level: ${WINDOWSTATS_LOG_LEVEL}
"""

import logging
import os
import re
from pathlib import Path
from dataclasses import dataclass, field, asdict
from typing import Optional, List, Any

import yaml

from ..core.errors import ConfigError, ErrorCode


def _substitute_env_vars(value: Any) -> Any:
    """
    Substitute ${VAR_NAME} with environment variable values.

    Example:
        ${WINDOWSTATS_LOG_LEVEL} → os.environ.get('WINDOWSTATS_LOG_LEVEL')
    """
    if isinstance(value, str):
        pattern = r'\$\{([^}]+)\}'

        def replace(match):
            env_value = os.environ.get(match.group(1))
            if env_value is None:
                return match.group(0)  # Keep original if not found
            return env_value

        return re.sub(pattern, replace, value)

    elif isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [_substitute_env_vars(v) for v in value]

    return value


def _coerce_int(value: Any) -> Any:
    """
    Turn integer strings into ints; leave anything else unchanged.

    Substituted env vars are always strings, so `width_seconds: ${WIDTH}`
    arrives as "30".
    """
    if isinstance(value, str) and re.fullmatch(r'\s*-?\d+\s*', value):
        return int(value)
    return value


@dataclass
class WindowConfig:
    """Window settings."""
    width_seconds: int = 60


@dataclass
class QueryConfig:
    """Percentiles reported by the front-ends."""
    percentiles: List[int] = field(default_factory=lambda: [70])


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = 'WARNING'

    @property
    def level_no(self) -> int:
        return logging.getLevelName(self.level.upper())


@dataclass
class StatsConfig:
    """Root configuration."""

    version: int = 1
    window: WindowConfig = field(default_factory=WindowConfig)
    query: QueryConfig = field(default_factory=QueryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, path: Path) -> 'StatsConfig':
        """Load from YAML file with env var substitution."""
        path = Path(path)

        if not path.exists():
            raise ConfigError(
                context={'path': str(path)},
                code=ErrorCode.E3002_CONFIG_NOT_FOUND,
            )

        with open(path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(context={'path': str(path), 'error': str(e)}) from e

        if not isinstance(data, dict):
            raise ConfigError(context={'path': str(path), 'error': 'top level must be a mapping'})

        data = _substitute_env_vars(data)
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'StatsConfig':
        """Create from dictionary. Integer strings in numeric fields become ints."""
        try:
            window = dict(data.get('window') or {})
            if 'width_seconds' in window:
                window['width_seconds'] = _coerce_int(window['width_seconds'])

            query = dict(data.get('query') or {})
            if isinstance(query.get('percentiles'), list):
                query['percentiles'] = [_coerce_int(q) for q in query['percentiles']]

            return cls(
                version=_coerce_int(data.get('version', 1)),
                window=WindowConfig(**window),
                query=QueryConfig(**query),
                logging=LoggingConfig(**(data.get('logging') or {})),
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(context={'error': str(e)}) from e

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)

    def to_yaml(self) -> str:
        """Convert to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    def validate(self) -> List[str]:
        """Validate config. Returns list of errors (empty if valid)."""
        errors = []

        width = self.window.width_seconds
        if isinstance(width, bool) or not isinstance(width, int) or width < 1:
            errors.append(f"Invalid width_seconds: {width}")

        percentiles = self.query.percentiles
        if not isinstance(percentiles, list):
            errors.append(f"percentiles must be a list: {percentiles}")
        elif not percentiles:
            errors.append("At least one percentile is required")
        else:
            for q in percentiles:
                if isinstance(q, bool) or not isinstance(q, int) or not 0 <= q <= 100:
                    errors.append(f"Invalid percentile: {q}")

        if not isinstance(self.logging.level, str):
            errors.append(f"logging level must be a name: {self.logging.level}")
        elif not isinstance(self.logging.level_no, int):
            errors.append(f"Unknown logging level: {self.logging.level}")

        return errors

    def raise_if_invalid(self) -> 'StatsConfig':
        """Raise ConfigError listing every validation problem."""
        errors = self.validate()
        if errors:
            raise ConfigError(
                context={'errors': errors},
                code=ErrorCode.E3003_VALIDATION_FAILED,
            )
        return self


def load_config(path: Optional[Path] = None) -> StatsConfig:
    """Load config from file or return defaults."""
    if path:
        return StatsConfig.load(path)

    search_paths = [
        Path('./windowstats.yml'),
        Path('./windowstats.yaml'),
        Path.home() / '.windowstats' / 'config.yml',
    ]

    for p in search_paths:
        if p.exists():
            return StatsConfig.load(p)

    return StatsConfig()


def generate_default_config() -> str:
    """Generate default config as YAML."""
    return """# windowstats configuration
version: 1

window:
  # Trailing window width in whole seconds
  width_seconds: 60

query:
  # Integer percentiles (0-100) reported by the CLI
  percentiles: [70]

logging:
  level: WARNING
"""
