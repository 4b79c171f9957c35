"""Configuration management for tick-median."""

from .schema import (
    MedianConfig,
    MainConfig,
    EstimatorConfig,
    LoggingConfig,
    load_config,
    generate_default_config,
)

__all__ = [
    'MedianConfig',
    'MainConfig',
    'EstimatorConfig',
    'LoggingConfig',
    'load_config',
    'generate_default_config',
]
