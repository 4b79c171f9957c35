"""
Adapter for semicolon-delimited price files.

Expected layout:
- First row is a header; it must contain `receive_ts` and `price`
  (any position, surrounding whitespace ignored, other columns ignored)
- Fields are separated by `;`
- receive_ts: unsigned 64-bit integer timestamp
- price: decimal number, parsed without loss of precision

Empty files are skipped. Blank lines are skipped. Any other malformed
row aborts the read with an InputReadError naming the file and line.
"""

import csv
import logging
import math
import re
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

from .base import ObservationAdapter, Observation, U64_MAX
from ..core.errors import ErrorCode, InputReadError


logger = logging.getLogger(__name__)

DELIMITER = ';'
TIMESTAMP_COLUMN = 'receive_ts'
PRICE_COLUMN = 'price'

_U64_PATTERN = re.compile(r'[0-9]+')


def parse_u64(text: str) -> Optional[int]:
    """Parse an unsigned 64-bit integer, returning None if invalid."""
    text = text.strip()
    if not _U64_PATTERN.fullmatch(text):
        return None
    value = int(text)
    if value > U64_MAX:
        return None
    return value


def parse_price(text: str) -> Optional[Decimal]:
    """
    Parse a finite decimal price, returning None if invalid.

    Values too large to narrow to a double (e.g. 1e400) are invalid too.
    """
    try:
        value = Decimal(text.strip())
    except InvalidOperation:
        return None
    if not value.is_finite() or math.isinf(float(value)):
        return None
    return value


def matches_mask(filename: str, masks: Sequence[str]) -> bool:
    """A file is selected if any mask is a substring of its name, or no masks are set."""
    if not masks:
        return True
    return any(mask in filename for mask in masks)


def discover_files(directory: Path, masks: Sequence[str] = ()) -> List[Path]:
    """
    List the CSV files of a directory that pass the filename masks.

    Only regular files with a `.csv` extension (case-insensitive) are
    considered. Subdirectories are not scanned. The result is sorted by
    file name so origin order is deterministic.

    Raises:
        InputReadError: If the directory is missing or not a directory
    """
    directory = Path(directory)

    if not directory.exists():
        raise InputReadError(
            ErrorCode.E1001_INPUT_DIR_MISSING, context={'path': str(directory)}
        )
    if not directory.is_dir():
        raise InputReadError(
            ErrorCode.E1002_INPUT_NOT_DIRECTORY, context={'path': str(directory)}
        )

    selected = []
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        if not entry.is_file():
            continue
        if entry.suffix.lower() != '.csv':
            continue
        if not matches_mask(entry.name, masks):
            logger.debug(f"Skipping {entry.name}: no mask matched")
            continue
        selected.append(entry)

    logger.debug(f"Selected {len(selected)} file(s) in {directory}")
    return selected


class SemicolonCSVAdapter(ObservationAdapter):
    """Adapter for `;`-separated files with receive_ts and price columns."""

    def decode_file(self, path: Path) -> Iterator[Observation]:
        """
        Decode observations from a CSV file.

        Args:
            path: Path to CSV file

        Yields:
            Observation per data row, with origin set to the file path and
            sequence set to the 1-based line number (header is line 1)
        """
        path = Path(path)
        origin = str(path)

        try:
            f = open(path, 'r', newline='', encoding='utf-8-sig')
        except OSError as e:
            raise InputReadError(
                ErrorCode.E1003_FILE_READ_FAILED,
                context={'file': origin, 'reason': e.strerror or str(e)},
            ) from e

        with f:
            try:
                yield from self._decode_rows(f, origin)
            except (UnicodeDecodeError, csv.Error) as e:
                raise InputReadError(
                    ErrorCode.E1003_FILE_READ_FAILED,
                    context={'file': origin, 'reason': str(e)},
                ) from e

    def _decode_rows(self, f, origin: str) -> Iterator[Observation]:
        reader = csv.reader(f, delimiter=DELIMITER)

        header = next(reader, None)
        if header is None:
            logger.warning(f"Skipping empty file: {origin}")
            return

        columns = [c.strip() for c in header]
        if TIMESTAMP_COLUMN not in columns or PRICE_COLUMN not in columns:
            raise InputReadError(
                ErrorCode.E1004_MISSING_COLUMNS, context={'file': origin}
            )
        # Duplicate header names: the last one wins
        idx_ts = len(columns) - 1 - columns[::-1].index(TIMESTAMP_COLUMN)
        idx_price = len(columns) - 1 - columns[::-1].index(PRICE_COLUMN)
        needed = max(idx_ts, idx_price) + 1

        for row in reader:
            line_no = reader.line_num
            if not row or (len(row) == 1 and not row[0].strip()):
                continue

            if len(row) < needed:
                raise InputReadError(
                    ErrorCode.E1005_MALFORMED_ROW,
                    context={'file': origin, 'line': line_no},
                )

            timestamp = parse_u64(row[idx_ts])
            if timestamp is None:
                raise InputReadError(
                    ErrorCode.E1006_INVALID_TIMESTAMP,
                    context={'file': origin, 'line': line_no},
                )

            price = parse_price(row[idx_price])
            if price is None:
                raise InputReadError(
                    ErrorCode.E1007_INVALID_PRICE,
                    context={'file': origin, 'line': line_no},
                )

            yield Observation(
                timestamp=timestamp,
                value=price,
                origin=origin,
                sequence=line_no,
            )

