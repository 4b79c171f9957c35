"""
Error codes for tick-median.

Structured error codes for machine-parseable failures, plus the exceptions
raised by the I/O collaborators around the median core.

Format: E{category}{number}
- E1xxx: Input errors
- E2xxx: Output errors
- E3xxx: Configuration errors

The median core itself never raises: an empty estimator answers None.
"""

from enum import Enum, IntEnum
from typing import Optional


class ExitCode(IntEnum):
    """Process exit codes of the CLI."""
    OK = 0
    CONFIG_ERROR = 2
    INPUT_READ_ERROR = 3
    OUTPUT_DIR_ERROR = 4
    OUTPUT_FILE_ERROR = 5
    UNHANDLED = 10


class ErrorCode(Enum):
    """Structured error codes."""

    # E1xxx: Input errors
    E1001_INPUT_DIR_MISSING = "E1001"
    E1002_INPUT_NOT_DIRECTORY = "E1002"
    E1003_FILE_READ_FAILED = "E1003"
    E1004_MISSING_COLUMNS = "E1004"
    E1005_MALFORMED_ROW = "E1005"
    E1006_INVALID_TIMESTAMP = "E1006"
    E1007_INVALID_PRICE = "E1007"

    # E2xxx: Output errors
    E2001_OUTPUT_DIR_FAILED = "E2001"
    E2002_OUTPUT_FILE_FAILED = "E2002"
    E2003_OUTPUT_WRITE_FAILED = "E2003"

    # E3xxx: Configuration errors
    E3001_CONFIG_NOT_FOUND = "E3001"
    E3002_CONFIG_PARSE_FAILED = "E3002"
    E3003_VALIDATION_FAILED = "E3003"


# Error code metadata
ERROR_METADATA = {
    ErrorCode.E1001_INPUT_DIR_MISSING: {
        'severity': 'error',
        'message': 'Input directory does not exist',
        'exit_code': ExitCode.INPUT_READ_ERROR,
    },
    ErrorCode.E1002_INPUT_NOT_DIRECTORY: {
        'severity': 'error',
        'message': 'Input path is not a directory',
        'exit_code': ExitCode.INPUT_READ_ERROR,
    },
    ErrorCode.E1003_FILE_READ_FAILED: {
        'severity': 'error',
        'message': 'Failed to read CSV file',
        'exit_code': ExitCode.INPUT_READ_ERROR,
    },
    ErrorCode.E1004_MISSING_COLUMNS: {
        'severity': 'error',
        'message': 'CSV missing required columns (receive_ts, price)',
        'exit_code': ExitCode.INPUT_READ_ERROR,
    },
    ErrorCode.E1005_MALFORMED_ROW: {
        'severity': 'error',
        'message': 'Malformed CSV row (not enough columns)',
        'exit_code': ExitCode.INPUT_READ_ERROR,
    },
    ErrorCode.E1006_INVALID_TIMESTAMP: {
        'severity': 'error',
        'message': 'Invalid receive_ts',
        'exit_code': ExitCode.INPUT_READ_ERROR,
    },
    ErrorCode.E1007_INVALID_PRICE: {
        'severity': 'error',
        'message': 'Invalid price',
        'exit_code': ExitCode.INPUT_READ_ERROR,
    },
    ErrorCode.E2001_OUTPUT_DIR_FAILED: {
        'severity': 'error',
        'message': 'Failed to create output directory',
        'exit_code': ExitCode.OUTPUT_DIR_ERROR,
    },
    ErrorCode.E2002_OUTPUT_FILE_FAILED: {
        'severity': 'error',
        'message': 'Failed to open output file',
        'exit_code': ExitCode.OUTPUT_FILE_ERROR,
    },
    ErrorCode.E2003_OUTPUT_WRITE_FAILED: {
        'severity': 'error',
        'message': 'Failed to write output file',
        'exit_code': ExitCode.OUTPUT_FILE_ERROR,
    },
    ErrorCode.E3001_CONFIG_NOT_FOUND: {
        'severity': 'error',
        'message': 'Config file not found',
        'exit_code': ExitCode.CONFIG_ERROR,
    },
    ErrorCode.E3002_CONFIG_PARSE_FAILED: {
        'severity': 'error',
        'message': 'Failed to parse config',
        'exit_code': ExitCode.CONFIG_ERROR,
    },
    ErrorCode.E3003_VALIDATION_FAILED: {
        'severity': 'error',
        'message': 'Configuration validation failed',
        'exit_code': ExitCode.CONFIG_ERROR,
    },
}


class TickMedianError(Exception):
    """
    Structured error with context.

    Example:
        raise InputReadError(
            ErrorCode.E1006_INVALID_TIMESTAMP,
            context={'file': 'btc.csv', 'line': 17},
        )
    """

    def __init__(self, code: ErrorCode, context: Optional[dict] = None):
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
            details = ', '.join(f"{k}={v}" for k, v in self.context.items())
            return f"{base_msg}: {details}"
        return base_msg

    @property
    def exit_code(self) -> ExitCode:
        return ERROR_METADATA.get(self.code, {}).get('exit_code', ExitCode.UNHANDLED)

    def to_dict(self) -> dict:
        return {
            'code': self.code.value,
            'severity': self.severity,
            'message': self.message,
            'exit_code': int(self.exit_code),
            'context': self.context,
        }


class ConfigError(TickMedianError):
    """Configuration could not be loaded or is invalid."""


class InputReadError(TickMedianError):
    """An input directory or CSV file could not be read."""


class OutputDirectoryError(TickMedianError):
    """The output directory could not be created."""


class OutputFileError(TickMedianError):
    """The output file could not be opened or written."""
