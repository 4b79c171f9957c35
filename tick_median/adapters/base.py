"""
Base classes for observation adapters.

ObservationAdapter is the abstract base class that all source-format adapters inherit.
Observation is the normalized record consumed by the sequencer and estimators.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Iterator


U64_MAX = 0xFFFFFFFFFFFFFFFF


@dataclass(frozen=True)
class Observation:
    """
    A single timestamped price observation.

    All adapters convert their native format to Observation objects.

    Attributes:
        timestamp: Receive timestamp (unsigned 64-bit)
        value: Observed price, kept at full source precision
        origin: Identifier of the source (file path for CSV input)
        sequence: Position within the origin (line number for CSV input)
    """
    timestamp: int
    value: Decimal
    origin: str = ''
    sequence: int = 0

    @property
    def sort_key(self):
        """Total replay order: timestamp, then origin, then sequence."""
        return (self.timestamp, self.origin, self.sequence)

    def __repr__(self) -> str:
        return (
            f"Observation(ts={self.timestamp}, "
            f"value={self.value}, "
            f"origin={self.origin!r}:{self.sequence})"
        )


class ObservationAdapter(ABC):
    """
    Abstract base class for observation source adapters.

    Adapters are stateless - they just decode a source into Observation objects.
    """

    @abstractmethod
    def decode_file(self, path: Path) -> Iterator[Observation]:
        """
        Decode all observations from a file.

        Args:
            path: Path to the source file

        Yields:
            Decoded Observation objects in file order

        Raises:
            InputReadError: If the file cannot be read or decoded
        """
        pass
