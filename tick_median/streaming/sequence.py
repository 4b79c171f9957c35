"""
Observation sequencing and replay.

Replay order is total: timestamp ascending, then origin, then sequence
number within the origin. Every median downstream depends on this order,
so two runs over the same files always produce the same output.
"""

from typing import Iterable, Iterator, List, Optional, Tuple

from .base import MedianEstimator, Number
from ..adapters.base import Observation


def sequence_observations(observations: Iterable[Observation]) -> List[Observation]:
    """Return observations in replay order. The input is not modified."""
    return sorted(observations, key=lambda o: o.sort_key)


def replay_medians(
    observations: Iterable[Observation],
    estimator: MedianEstimator,
) -> Iterator[Tuple[int, Optional[Number]]]:
    """
    Feed observations to an estimator, yielding (timestamp, median) after each add.

    Observations must already be in replay order.
    """
    for observation in observations:
        estimator.add(observation.value)
        yield observation.timestamp, estimator.median()
