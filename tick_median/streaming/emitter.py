"""
Change-gated emission of median values.

A row is emitted only when the median, as it will be written, differs
from the last emitted row. Comparison is done on the formatted string so
that values differing below the eighth decimal place never produce a
duplicate-looking row.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

from .base import Number


DECIMAL_PLACES = 8


def format_median(value: Number) -> str:
    """
    Render a median with exactly eight decimal places.

    The value is narrowed to a double first; digits beyond double precision
    are lost. Rounding is Python's correctly rounded float formatting.
    Negative zero is written as zero.
    """
    text = f"{float(value):.{DECIMAL_PLACES}f}"
    if text.startswith('-') and float(text) == 0:
        text = text[1:]
    return text


@dataclass(frozen=True)
class EmissionRecord:
    """One output row."""
    timestamp: int
    formatted_median: str

    def to_row(self, delimiter: str = ';') -> str:
        return f"{self.timestamp}{delimiter}{self.formatted_median}"


class ChangeGatedEmitter:
    """
    Forward (timestamp, median) pairs only when the formatted median changes.

    The only state is the last emitted string; each pipeline owns its own
    emitter.

    Example:
        emitter = ChangeGatedEmitter()
        for record in emitter.emit(replay_medians(observations, estimator)):
            writer.write(record)
    """

    def __init__(self):
        self._last: Optional[str] = None

    def offer(self, timestamp: int, median: Optional[Number]) -> Optional[EmissionRecord]:
        """
        Consider one pair.

        Returns:
            EmissionRecord if the pair is emitted, None if it is suppressed
            (no median yet, or same formatted median as last time)
        """
        if median is None:
            return None

        formatted = format_median(median)
        if formatted == self._last:
            return None

        self._last = formatted
        return EmissionRecord(timestamp=timestamp, formatted_median=formatted)

    def emit(self, pairs: Iterable[Tuple[int, Optional[Number]]]) -> Iterator[EmissionRecord]:
        """Filter a stream of pairs, preserving order."""
        for timestamp, median in pairs:
            record = self.offer(timestamp, median)
            if record is not None:
                yield record

    @property
    def last_emitted(self) -> Optional[str]:
        return self._last

    def reset(self) -> None:
        self._last = None
