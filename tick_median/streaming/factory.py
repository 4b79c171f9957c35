"""Build a median estimator from its strategy name."""

from typing import Union

from .base import EstimatorStrategy, MedianEstimator
from .hybrid import HybridMedian, DEFAULT_SEED_THRESHOLD
from .two_heap import TwoHeapMedian


def create_estimator(
    strategy: Union[EstimatorStrategy, str] = EstimatorStrategy.exact,
    seed_threshold: int = DEFAULT_SEED_THRESHOLD,
) -> MedianEstimator:
    """
    Create a fresh estimator.

    Args:
        strategy: 'exact' (two heaps) or 'hybrid' (buffer, then P-square)
        seed_threshold: Buffered samples before the hybrid strategy streams.
            Ignored by the exact strategy.
    """
    strategy = EstimatorStrategy(strategy)
    if strategy == EstimatorStrategy.hybrid:
        return HybridMedian(seed_threshold=seed_threshold)
    return TwoHeapMedian()
