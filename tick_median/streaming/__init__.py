"""Online median estimation and change-gated emission."""

from .base import MedianEstimator, EstimatorStrategy
from .two_heap import TwoHeapMedian
from .quantiles import P2Quantile
from .hybrid import HybridMedian, Buffering, Streaming, exact_median, DEFAULT_SEED_THRESHOLD
from .factory import create_estimator
from .sequence import sequence_observations, replay_medians
from .emitter import ChangeGatedEmitter, EmissionRecord, format_median

__all__ = [
    'MedianEstimator',
    'EstimatorStrategy',
    'TwoHeapMedian',
    'P2Quantile',
    'HybridMedian',
    'Buffering',
    'Streaming',
    'exact_median',
    'DEFAULT_SEED_THRESHOLD',
    'create_estimator',
    'sequence_observations',
    'replay_medians',
    'ChangeGatedEmitter',
    'EmissionRecord',
    'format_median',
]
