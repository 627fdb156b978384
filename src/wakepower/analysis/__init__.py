"""Wakeup power analysis pipeline."""

from wakepower.analysis.estimator import PowerEstimator
from wakepower.analysis.types import (
    GlobalSummary,
    MatchedRange,
    Occurrence,
    ReasonEnergy,
    StatisticsTables,
)

__all__ = [
    "GlobalSummary",
    "MatchedRange",
    "Occurrence",
    "PowerEstimator",
    "ReasonEnergy",
    "StatisticsTables",
]
