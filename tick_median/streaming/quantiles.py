"""
Streaming quantile estimation.

This module provides constant-memory quantile tracking:
- P2Quantile: the P-square algorithm, five markers, O(1) update

P-square reference: Jain & Chlamtac, "The P² algorithm for dynamic
calculation of quantiles and histograms without storing observations",
CACM 28(10), 1985.
"""

import math
from typing import List


MARKERS = 5


class P2Quantile:
    """
    P-square estimator for a single quantile.

    Keeps five markers (min, q/2, q, (1+q)/2, max) whose heights are
    adjusted with piecewise-parabolic interpolation as samples arrive.
    The estimate is deterministic for a given input sequence but is an
    approximation: its error depends on the data distribution.

    Memory usage: O(1)

    Until five samples have been seen the estimate is computed exactly
    from the stored samples.

    Example:
        tracker = P2Quantile(0.5)
        for price in prices:
            tracker.add(price)
        median = tracker.value()
    """

    def __init__(self, q: float = 0.5):
        """
        Initialize tracker.

        Args:
            q: Target quantile in (0, 1)
        """
        if not 0 < q < 1:
            raise ValueError(f"q must be in (0, 1), got {q}")

        self.q = q

        # Marker heights, actual positions (1-based), desired positions and
        # desired-position increments
        self._heights: List[float] = []
        self._positions: List[int] = [1, 2, 3, 4, 5]
        self._desired: List[float] = [1, 1 + 2 * q, 1 + 4 * q, 3 + 2 * q, 5]
        self._increments: List[float] = [0.0, q / 2, q, (1 + q) / 2, 1.0]

        self._count: int = 0
        self._min: float = float('inf')
        self._max: float = float('-inf')

    def add(self, value) -> None:
        """Add a value. Values are narrowed to float."""
        x = float(value)
        self._count += 1
        self._min = min(self._min, x)
        self._max = max(self._max, x)

        h = self._heights
        if self._count <= MARKERS:
            h.append(x)
            if self._count == MARKERS:
                h.sort()
            return

        n = self._positions
        nd = self._desired

        # Find cell k with h[k] <= x < h[k+1], stretching the extremes
        if x < h[0]:
            h[0] = x
            k = 0
        elif x >= h[4]:
            h[4] = x
            k = 3
        else:
            k = 0
            while x >= h[k + 1]:
                k += 1

        for i in range(k + 1, MARKERS):
            n[i] += 1
        for i in range(MARKERS):
            nd[i] += self._increments[i]

        # Move interior markers that drifted from their desired position
        for i in range(1, 4):
            d = nd[i] - n[i]
            if (d >= 1 and n[i + 1] - n[i] > 1) or (d <= -1 and n[i - 1] - n[i] < -1):
                step = 1 if d > 0 else -1
                candidate = self._parabolic(i, step)
                if h[i - 1] < candidate < h[i + 1]:
                    h[i] = candidate
                else:
                    h[i] = self._linear(i, step)
                n[i] += step

    def _parabolic(self, i: int, d: int) -> float:
        h = self._heights
        n = self._positions
        return h[i] + d / (n[i + 1] - n[i - 1]) * (
            (n[i] - n[i - 1] + d) * (h[i + 1] - h[i]) / (n[i + 1] - n[i])
            + (n[i + 1] - n[i] - d) * (h[i] - h[i - 1]) / (n[i] - n[i - 1])
        )

    def _linear(self, i: int, d: int) -> float:
        h = self._heights
        n = self._positions
        return h[i] + d * (h[i + d] - h[i]) / (n[i + d] - n[i])

    def value(self) -> float:
        """
        Current quantile estimate.

        Returns NaN if no value has been added.
        """
        if self._count == 0:
            return math.nan

        if self._count < MARKERS:
            data = sorted(self._heights)
            idx = self.q * (len(data) - 1)
            lo = int(idx)
            hi = min(len(data) - 1, lo + 1)
            return data[lo] + (data[hi] - data[lo]) * (idx - lo)

        return self._heights[2]

    def count(self) -> int:
        """Number of values added."""
        return self._count

    @property
    def min(self) -> float:
        return self._min if self._count > 0 else 0.0

    @property
    def max(self) -> float:
        return self._max if self._count > 0 else 0.0
