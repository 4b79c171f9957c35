"""
Hybrid running median: exact while small, constant memory when large.

The estimator starts in the Buffering state, where every value is kept and
the median is exact. Once the buffer holds `seed_threshold` values the next
add() switches, irreversibly, to the Streaming state: a P-square tracker
is seeded with the buffered values (in arrival order) and the buffer is
dropped. From then on add() is O(1) and median() is an approximation.

Callers that need exact results on arbitrarily long streams should use
TwoHeapMedian instead.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from .base import MedianEstimator, Number
from .quantiles import P2Quantile


DEFAULT_SEED_THRESHOLD = 64


@dataclass
class Buffering:
    """Initial state: all values kept, exact median."""
    buffer: List[Number] = field(default_factory=list)


@dataclass
class Streaming:
    """Terminal state: values only reach the quantile tracker."""
    tracker: P2Quantile


def select(values: List[Number], k: int) -> Number:
    """
    Quickselect: reorder `values` in place so values[k] is the k-th smallest.

    Uses a three-way partition around the middle element, so every element
    left of index k is <= values[k] and every element right of it is >=.
    Expected O(n).
    """
    lo, hi = 0, len(values) - 1
    while lo < hi:
        pivot = values[(lo + hi) // 2]
        lt, i, gt = lo, lo, hi
        while i <= gt:
            if values[i] < pivot:
                values[lt], values[i] = values[i], values[lt]
                lt += 1
                i += 1
            elif values[i] > pivot:
                values[i], values[gt] = values[gt], values[i]
                gt -= 1
            else:
                i += 1
        # [lo, lt) < pivot, [lt, gt] == pivot, (gt, hi] > pivot
        if k < lt:
            hi = lt - 1
        elif k > gt:
            lo = gt + 1
        else:
            break
    return values[k]


def exact_median(values: List[Number]) -> Optional[Number]:
    """
    Exact median of an unordered list without sorting it.

    The input is not modified.
    """
    if not values:
        return None

    scratch = list(values)
    mid = len(scratch) // 2
    upper = select(scratch, mid)
    if len(scratch) % 2:
        return upper

    # Everything left of mid is <= upper, so its maximum is the lower middle
    lower = max(scratch[:mid])
    return (lower + upper) / 2


class HybridMedian(MedianEstimator):
    """
    Bounded-buffer median that degrades to a streaming quantile estimate.

    For the first `seed_threshold` values median() is exact. After that it
    returns the P-square estimate of the 0.5 quantile, which trades exactness
    for O(1) memory and O(1) updates.

    Example:
        estimator = HybridMedian(seed_threshold=64)
        for price in prices:
            estimator.add(price)
            print(estimator.median())
    """

    def __init__(self, seed_threshold: int = DEFAULT_SEED_THRESHOLD):
        if seed_threshold < 0:
            raise ValueError(f"seed_threshold must be >= 0, got {seed_threshold}")

        self.seed_threshold = seed_threshold
        self._state: Union[Buffering, Streaming] = Buffering()

    def add(self, value: Number) -> None:
        state = self._state
        if isinstance(state, Buffering):
            if len(state.buffer) < self.seed_threshold:
                state.buffer.append(value)
                return
            state = self._start_streaming(state)
        state.tracker.add(value)

    def _start_streaming(self, state: Buffering) -> Streaming:
        tracker = P2Quantile(0.5)
        for value in state.buffer:
            tracker.add(value)
        streaming = Streaming(tracker=tracker)
        self._state = streaming
        return streaming

    def median(self) -> Optional[Number]:
        state = self._state
        if isinstance(state, Buffering):
            return exact_median(state.buffer)
        return state.tracker.value()

    def reset(self) -> None:
        self._state = Buffering()

    @property
    def count(self) -> int:
        state = self._state
        if isinstance(state, Buffering):
            return len(state.buffer)
        return state.tracker.count()

    @property
    def is_streaming(self) -> bool:
        return isinstance(self._state, Streaming)

    @property
    def tracker(self) -> Optional[P2Quantile]:
        """The quantile tracker, or None while still buffering."""
        state = self._state
        if isinstance(state, Streaming):
            return state.tracker
        return None
