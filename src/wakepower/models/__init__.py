"""Input data models."""

from wakepower.models.timeline import (
    AnalysisInput,
    PowerSample,
    RunningEvent,
    ServiceEntry,
    TimeInterval,
)

__all__ = [
    "AnalysisInput",
    "PowerSample",
    "RunningEvent",
    "ServiceEntry",
    "TimeInterval",
]
