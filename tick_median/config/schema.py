"""
Configuration schema for tick-median.

Supports:
- YAML file loading
- Environment variable substitution (${VAR_NAME})
- Validation with error messages

Example config (tick_median.yml):
    version: 1

    main:
      input: ./data
      output: ./output
      filename_mask: [btc, eth]

    estimator:
      strategy: hybrid
      seed_threshold: 64
"""

import os
import re
from pathlib import Path
from dataclasses import dataclass, field, asdict
from typing import Optional, List, Any

import yaml

from ..core.errors import ConfigError, ErrorCode
from ..formats.writer import DEFAULT_OUTPUT_NAME
from ..streaming.base import EstimatorStrategy
from ..streaming.hybrid import DEFAULT_SEED_THRESHOLD


DEFAULT_OUTPUT_DIR = 'output'

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

SECTIONS = ('version', 'main', 'estimator', 'logging')

_ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')

SEARCH_PATHS = [
    Path('./tick_median.yml'),
    Path('./tick_median.yaml'),
    Path.home() / '.tick_median' / 'config.yml',
]


def _substitute_env_vars(value: Any) -> Any:
    """
    Substitute ${VAR_NAME} with environment variable values.

    Example:
        ${PRICE_DATA_DIR} → os.environ.get('PRICE_DATA_DIR')
    """
    if isinstance(value, str):
        def replace(match):
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                return match.group(0)  # Keep original if not found
            return env_value

        return _ENV_VAR_PATTERN.sub(replace, value)

    elif isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [_substitute_env_vars(v) for v in value]

    return value


@dataclass
class MainConfig:
    """Input and output locations."""
    input: Optional[str] = None
    output: Optional[str] = None
    filename_mask: List[str] = field(default_factory=list)
    output_file: str = DEFAULT_OUTPUT_NAME

    @property
    def input_dir(self) -> Optional[Path]:
        return Path(self.input) if self.input else None

    @property
    def output_dir(self) -> Path:
        """Configured output directory, or ./output when unset."""
        if self.output:
            return Path(self.output)
        return Path.cwd() / DEFAULT_OUTPUT_DIR

    @property
    def output_path(self) -> Path:
        return self.output_dir / self.output_file


@dataclass
class EstimatorConfig:
    """Median estimator settings."""
    strategy: str = EstimatorStrategy.exact.value
    seed_threshold: int = DEFAULT_SEED_THRESHOLD


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = 'INFO'


def _section(data: dict, name: str) -> dict:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(
            ErrorCode.E3002_CONFIG_PARSE_FAILED,
            context={'section': name, 'reason': 'expected a mapping'},
        )
    return section


@dataclass
class MedianConfig:
    """Root configuration."""

    version: int = 1
    main: MainConfig = field(default_factory=MainConfig)
    estimator: EstimatorConfig = field(default_factory=EstimatorConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, path: Path) -> 'MedianConfig':
        """Load from YAML file with env var substitution."""
        path = Path(path)

        if not path.is_file():
            raise ConfigError(ErrorCode.E3001_CONFIG_NOT_FOUND, context={'path': str(path)})

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(
                ErrorCode.E3002_CONFIG_PARSE_FAILED,
                context={'path': str(path), 'reason': str(e)},
            ) from e

        if not isinstance(data, dict):
            raise ConfigError(
                ErrorCode.E3002_CONFIG_PARSE_FAILED,
                context={'path': str(path), 'reason': 'top level must be a mapping'},
            )

        data = _substitute_env_vars(data)
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'MedianConfig':
        """Create from dictionary."""
        unknown = sorted(str(k) for k in set(data) - set(SECTIONS))
        if unknown:
            raise ConfigError(
                ErrorCode.E3002_CONFIG_PARSE_FAILED,
                context={'reason': f"unknown keys: {', '.join(unknown)}"},
            )

        try:
            return cls(
                version=data.get('version', 1),
                main=MainConfig(**_section(data, 'main')),
                estimator=EstimatorConfig(**_section(data, 'estimator')),
                logging=LoggingConfig(**_section(data, 'logging')),
            )
        except TypeError as e:
            raise ConfigError(
                ErrorCode.E3002_CONFIG_PARSE_FAILED, context={'reason': str(e)}
            ) from e

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)

    def to_yaml(self) -> str:
        """Convert to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    def validate(self) -> List[str]:
        """Validate config. Returns list of errors (empty if valid)."""
        errors = []

        if not self.main.input:
            errors.append("'main.input' is required")
        elif not isinstance(self.main.input, str):
            errors.append(f"'main.input' must be a string, got {self.main.input!r}")
        elif _ENV_VAR_PATTERN.search(self.main.input):
            errors.append(f"'main.input' references an unset environment variable: {self.main.input}")

        if self.main.output is not None and not isinstance(self.main.output, str):
            errors.append(f"'main.output' must be a string, got {self.main.output!r}")

        masks = self.main.filename_mask
        if not isinstance(masks, list) or not all(isinstance(m, str) for m in masks):
            errors.append(f"'main.filename_mask' must be a list of strings, got {masks!r}")

        if not isinstance(self.main.output_file, str) or not self.main.output_file:
            errors.append(f"Invalid output_file: {self.main.output_file!r}")

        valid_strategies = [s.value for s in EstimatorStrategy]
        if self.estimator.strategy not in valid_strategies:
            errors.append(
                f"Unknown estimator strategy: {self.estimator.strategy!r} "
                f"(expected one of {', '.join(valid_strategies)})"
            )

        threshold = self.estimator.seed_threshold
        if isinstance(threshold, bool) or not isinstance(threshold, int) or threshold < 0:
            errors.append(f"Invalid seed_threshold: {threshold!r}")

        if not isinstance(self.logging.level, str) or self.logging.level.upper() not in LOG_LEVELS:
            errors.append(f"Invalid logging level: {self.logging.level!r}")

        return errors

    def ensure_valid(self) -> 'MedianConfig':
        """Raise ConfigError if validate() reports anything."""
        errors = self.validate()
        if errors:
            raise ConfigError(
                ErrorCode.E3003_VALIDATION_FAILED, context={'errors': '; '.join(errors)}
            )
        return self


def load_config(path: Optional[Path] = None) -> MedianConfig:
    """
    Load config from an explicit file or the first file on the search path.

    Raises:
        ConfigError: If no config file can be found or it cannot be parsed
    """
    if path is not None:
        return MedianConfig.load(path)

    for p in SEARCH_PATHS:
        if p.exists():
            return MedianConfig.load(p)

    raise ConfigError(
        ErrorCode.E3001_CONFIG_NOT_FOUND,
        context={'searched': ', '.join(str(p) for p in SEARCH_PATHS)},
    )


def generate_default_config() -> str:
    """Generate default config as YAML."""
    return """# tick-median configuration
version: 1

main:
  input: ${PRICE_DATA_DIR}
  output: ./output
  filename_mask: []
  output_file: median_result.csv

estimator:
  strategy: exact        # exact | hybrid
  seed_threshold: 64     # hybrid only: samples kept exactly before streaming

logging:
  level: INFO
"""
