"""
Exact running median with two heaps.

The lower half of the values lives in a max-heap and the upper half in a
min-heap, so the median is always read from the heap tops.
"""

import heapq
from typing import List, Optional

from .base import MedianEstimator, Number


class TwoHeapMedian(MedianEstimator):
    """
    Exact streaming median.

    add() is O(log n), median() is O(1). The result equals the median of
    the fully sorted input for any order and any distribution, so this is
    the reference strategy.

    Example:
        estimator = TwoHeapMedian()
        for price in [1, 2, 3, 4]:
            estimator.add(price)
        estimator.median()  # 2.5
    """

    def __init__(self):
        # heapq only provides a min-heap; the lower half stores negated values
        self._lower: List[Number] = []
        self._upper: List[Number] = []

    def add(self, value: Number) -> None:
        if not self._lower or value <= -self._lower[0]:
            heapq.heappush(self._lower, -value)
        else:
            heapq.heappush(self._upper, value)
        self._rebalance()

    def _rebalance(self) -> None:
        if len(self._lower) > len(self._upper) + 1:
            heapq.heappush(self._upper, -heapq.heappop(self._lower))
        elif len(self._upper) > len(self._lower) + 1:
            heapq.heappush(self._lower, -heapq.heappop(self._upper))

    def median(self) -> Optional[Number]:
        if not self._lower and not self._upper:
            return None
        if len(self._lower) == len(self._upper):
            return (-self._lower[0] + self._upper[0]) / 2
        if len(self._lower) > len(self._upper):
            return -self._lower[0]
        return self._upper[0]

    def reset(self) -> None:
        self._lower.clear()
        self._upper.clear()

    @property
    def count(self) -> int:
        return len(self._lower) + len(self._upper)

    @property
    def lower_size(self) -> int:
        """Values in the lower (max) heap."""
        return len(self._lower)

    @property
    def upper_size(self) -> int:
        """Values in the upper (min) heap."""
        return len(self._upper)
