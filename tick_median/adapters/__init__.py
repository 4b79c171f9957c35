"""Observation adapters."""

from .base import Observation, ObservationAdapter, U64_MAX
from .csv_adapter import SemicolonCSVAdapter, discover_files, matches_mask

__all__ = [
    'Observation',
    'ObservationAdapter',
    'U64_MAX',
    'SemicolonCSVAdapter',
    'discover_files',
    'matches_mask',
]
