"""Error taxonomy and pipeline orchestration for tick-median."""

from .errors import (
    ExitCode,
    ErrorCode,
    ERROR_METADATA,
    TickMedianError,
    ConfigError,
    InputReadError,
    OutputDirectoryError,
    OutputFileError,
)

__all__ = [
    'ExitCode',
    'ErrorCode',
    'ERROR_METADATA',
    'TickMedianError',
    'ConfigError',
    'InputReadError',
    'OutputDirectoryError',
    'OutputFileError',
]
