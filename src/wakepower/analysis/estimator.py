"""
Wakeup power estimator.

This module provides the main interface for attributing power-monitor
energy to wakeup reasons: it runs occurrence extraction, matching, reason
aggregation and statistics once per input batch and answers queries from
the result.
"""

import logging
import time

from collections.abc import Sequence

from wakepower.analysis.aggregation import ReasonAggregator
from wakepower.analysis.matching import PowerMatcher
from wakepower.analysis.occurrences import (
    extract_occurrences,
    select_events_in_trace,
)
from wakepower.analysis.statistics import (
    build_statistics_tables,
    calculate_global_summary,
)
from wakepower.analysis.types import (
    GlobalSummary,
    MatchedRange,
    Occurrence,
    ReasonEnergy,
    ReasonRecord,
    StatisticsTables,
)
from wakepower.constants import EstimatorConstants as EC
from wakepower.models.timeline import PowerSample, RunningEvent, TimeInterval
from wakepower.utils.validation import validate_chronological

logger = logging.getLogger(__name__)

__all__ = ["PowerEstimator"]

EventKey = tuple[float, float, tuple[str, ...]]


def _event_key(event: RunningEvent) -> EventKey:
    return (event.start_ms, event.end_ms, tuple(event.reason_labels))


class PowerEstimator:
    """
    Estimates the energy spent on each wakeup reason.

    All work happens in the constructor; the instance is then an immutable
    result that can be queried any number of times. The result depends
    only on the arguments; separate instances share no state.

    Example:
        >>> estimator = PowerEstimator(running_events, power_samples)
        >>> for row in estimator.ranked_reasons():
        ...     print(f"{row.label}: {row.energy_mah:.3f} mAh")
        >>> estimator.global_summary().avg_wakeup_current_ma
    """

    def __init__(
        self,
        running_events: Sequence[RunningEvent],
        power_samples: Sequence[PowerSample],
        baseline_threshold_ma: float = EC.BASELINE_THRESHOLD_MA,
    ):
        """
        Run the analysis.

        Args:
            running_events: Running events, ascending by start time
            power_samples: Power-monitor samples, ascending by start time
            baseline_threshold_ma: Idle current threshold (mA)

        Raises:
            ValueError: If either sequence is not sorted by start time, or
                the threshold is not positive
        """
        validate_chronological(running_events, "Running events")
        validate_chronological(power_samples, "Power samples")

        if baseline_threshold_ma <= 0:
            raise ValueError(
                f"Invalid baseline threshold: {baseline_threshold_ma}. "
                "Must be greater than 0 mA"
            )

        self.running_events = list(running_events)
        self.power_samples = list(power_samples)
        self.baseline_threshold_ma = baseline_threshold_ma

        start_time = time.time()

        selected = select_events_in_trace(self.running_events, self.power_samples)

        self._occurrences: list[Occurrence] = []
        for event_index in selected:
            self._occurrences.extend(
                extract_occurrences(self.running_events[event_index], event_index)
            )

        windows = {
            event_index: TimeInterval(
                start_ms=self.running_events[event_index].start_ms,
                end_ms=self.running_events[event_index].end_ms,
            )
            for event_index in selected
        }
        matcher = PowerMatcher(self.power_samples, baseline_threshold_ma)
        self._matches = matcher.match_all(windows)

        self._event_lookup: dict[EventKey, int] = {}
        for event_index in selected:
            self._event_lookup.setdefault(
                _event_key(self.running_events[event_index]), event_index
            )

        aggregator = ReasonAggregator(self.power_samples)
        self._records: dict[str, ReasonRecord] = aggregator.aggregate(
            self._occurrences, self._matches
        )
        self._ranking = aggregator.rank(self._records)
        self._tables = build_statistics_tables(self._records, self._ranking)
        self._summary = calculate_global_summary(self.power_samples, self._records)

        processing_time_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"Analyzed {len(self.running_events)} running events "
            f"({len(selected)} within trace) against {len(self.power_samples)} "
            f"power samples: {len(self._records)} wakeup reasons "
            f"in {processing_time_ms}ms"
        )

    @property
    def occurrences(self) -> list[Occurrence]:
        """Occurrences analyzed, in input order."""
        return list(self._occurrences)

    def reason_records(self) -> dict[str, ReasonRecord]:
        """Label -> ReasonRecord, in first-seen order."""
        return dict(self._records)

    def ranked_reasons(self) -> list[ReasonEnergy]:
        """
        Get wakeup reasons ranked by energy.

        Returns:
            (label, energy) rows, descending energy; ties keep first-seen order
        """
        return list(self._ranking)

    def matched_ranges_for(self, label: str) -> list[MatchedRange | None]:
        """
        Get the matched ranges of one wakeup reason.

        Args:
            label: Wakeup reason label

        Returns:
            One slot per occurrence in input order, None where the
            occurrence overlapped no power sample. Empty for unknown labels.
        """
        record = self._records.get(label)
        if record is None:
            return []
        return list(record.ranges)

    def match_for(self, event: RunningEvent) -> MatchedRange | None:
        """
        Look up the matched range of a running event without re-matching.

        The event is identified by its interval and reason labels, so an
        equal copy of an analyzed event finds the same match.

        Args:
            event: Running event

        Returns:
            MatchedRange, or None if the event was not analyzed or matched
            no power sample
        """
        event_index = self._event_lookup.get(_event_key(event))
        if event_index is None:
            return None
        return self._matches.get(event_index)

    def statistics_tables(self) -> StatisticsTables:
        """Get the per-reason duration, current and energy tables."""
        return self._tables

    def global_summary(self) -> GlobalSummary:
        """Get the suspend/wakeup summary over the whole trace."""
        return self._summary
