"""
tick-median - running median over timestamped price files.

This package provides:
- adapters: Semicolon CSV reader and directory scan
- streaming: Exact and hybrid median estimators, change-gated emitter
- formats: Median output writer
- config: YAML configuration with environment variable support
- core: Error codes and the end-to-end pipeline
- cli: Command-line interface
"""

__version__ = "1.0.0"

from .adapters import Observation, SemicolonCSVAdapter, discover_files
from .streaming import (
    MedianEstimator,
    EstimatorStrategy,
    TwoHeapMedian,
    HybridMedian,
    P2Quantile,
    create_estimator,
    sequence_observations,
    replay_medians,
    ChangeGatedEmitter,
    EmissionRecord,
    format_median,
)
from .config import MedianConfig, load_config
from .core import ExitCode, ErrorCode, TickMedianError

__all__ = [
    # Version
    '__version__',
    # Adapters
    'Observation',
    'SemicolonCSVAdapter',
    'discover_files',
    # Streaming
    'MedianEstimator',
    'EstimatorStrategy',
    'TwoHeapMedian',
    'HybridMedian',
    'P2Quantile',
    'create_estimator',
    'sequence_observations',
    'replay_medians',
    'ChangeGatedEmitter',
    'EmissionRecord',
    'format_median',
    # Config
    'MedianConfig',
    'load_config',
    # Core
    'ExitCode',
    'ErrorCode',
    'TickMedianError',
]
