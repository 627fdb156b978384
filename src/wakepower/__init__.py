"""
wakepower: wakeup reason power attribution

Correlates device running events with a power-monitor trace to estimate
how much energy each wakeup reason cost.
"""

from wakepower.analysis import PowerEstimator
from wakepower.models import PowerSample, RunningEvent, ServiceEntry

__all__ = ["PowerEstimator", "PowerSample", "RunningEvent", "ServiceEntry"]
