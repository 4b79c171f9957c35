"""
Writer for median output files.

Layout:
    receive_ts;price_median
    <timestamp>;<median with 8 decimal places>
"""

import logging
from pathlib import Path
from typing import Iterable, Optional, TextIO

from ..core.errors import ErrorCode, OutputDirectoryError, OutputFileError
from ..streaming.emitter import EmissionRecord


logger = logging.getLogger(__name__)

OUTPUT_HEADER = 'receive_ts;price_median'
DEFAULT_OUTPUT_NAME = 'median_result.csv'


class EmissionWriter:
    """
    Context manager that writes emission records to a file.

    The output directory is created on open.

    Example:
        with EmissionWriter(Path('output') / 'median_result.csv') as writer:
            for record in records:
                writer.write(record)
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self.rows_written: int = 0
        self._file: Optional[TextIO] = None

    def open(self) -> 'EmissionWriter':
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputDirectoryError(
                ErrorCode.E2001_OUTPUT_DIR_FAILED,
                context={'path': str(directory), 'reason': e.strerror or str(e)},
            ) from e

        try:
            self._file = open(self.path, 'w', newline='')
            self._file.write(OUTPUT_HEADER + '\n')
        except OSError as e:
            raise OutputFileError(
                ErrorCode.E2002_OUTPUT_FILE_FAILED,
                context={'path': str(self.path), 'reason': e.strerror or str(e)},
            ) from e

        logger.debug(f"Opened output file {self.path}")
        return self

    def write(self, record: EmissionRecord) -> None:
        if self._file is None:
            raise RuntimeError("EmissionWriter is not open")
        try:
            self._file.write(record.to_row() + '\n')
        except OSError as e:
            raise OutputFileError(
                ErrorCode.E2003_OUTPUT_WRITE_FAILED,
                context={'path': str(self.path), 'reason': e.strerror or str(e)},
            ) from e
        self.rows_written += 1

    def write_all(self, records: Iterable[EmissionRecord]) -> int:
        """Write every record; returns the number written by this call."""
        before = self.rows_written
        for record in records:
            self.write(record)
        return self.rows_written - before

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None
            logger.debug(f"Wrote {self.rows_written} row(s) to {self.path}")

    def __enter__(self) -> 'EmissionWriter':
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
