"""
Estimator contract shared by the median strategies.

MedianEstimator is the capability every strategy implements, so the
replay loop and the emitter never depend on a concrete strategy.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Union
from decimal import Decimal


Number = Union[int, float, Decimal]


class EstimatorStrategy(str, Enum):
    exact = "exact"
    hybrid = "hybrid"


class MedianEstimator(ABC):
    """
    Online median over a stream of values.

    Instances are owned by a single caller and are not thread-safe.
    """

    @abstractmethod
    def add(self, value: Number) -> None:
        """Add one value."""
        pass

    @abstractmethod
    def median(self) -> Optional[Number]:
        """
        Current median, or None if nothing has been added.

        Read-only: never changes estimator state.
        """
        pass

    @abstractmethod
    def reset(self) -> None:
        """Discard all values."""
        pass

    @property
    @abstractmethod
    def count(self) -> int:
        """Number of values added since construction or the last reset."""
        pass

    def __len__(self) -> int:
        return self.count
