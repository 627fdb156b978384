"""
Power matching and edge extension.

Each running event is matched against the power trace in two steps:

1. Core match: every sample overlapping the event window, taken whole.
2. Edge extension: the power monitor lags the device, so current ramps up
   before the logged wakeup and decays after it. The core match is widened
   backward across the rising edge until current drops to the baseline
   threshold, and forward across the falling edge until current settles at
   or below baseline and stops decreasing.

Ownership: a sample in another event's core match is never pulled into an
extension. Core matches for all events are computed before any extension.
Extensions are claimed in input order; a backward extension may take one
sample already claimed by an earlier event's extension as its boundary,
but no further. A backward extension also never reaches a sample that
starts before an earlier event has ended.
"""

import logging

import numpy as np

from wakepower.analysis.types import MatchedRange
from wakepower.constants import EstimatorConstants as EC
from wakepower.models.timeline import PowerSample, TimeInterval

logger = logging.getLogger(__name__)


class SampleIndex:
    """
    Chronological index over a power trace.

    Samples may overlap or duplicate each other, so end times are not
    sorted. A running maximum of end times gives a sorted array that
    bounds the search for overlaps from below.

    Attributes:
        samples: Power samples in chronological order
        starts: Sample start times (ms)
        ends: Sample end times (ms)
        currents: Sample current draw (mA)
    """

    def __init__(self, samples: list[PowerSample]):
        self.samples = list(samples)
        self.starts = np.array([s.start_ms for s in self.samples], dtype=np.float64)
        self.ends = np.array([s.end_ms for s in self.samples], dtype=np.float64)
        self.currents = np.array(
            [s.current_ma for s in self.samples], dtype=np.float64
        )
        self._max_end_so_far = (
            np.maximum.accumulate(self.ends) if len(self.ends) else self.ends
        )

    def __len__(self) -> int:
        return len(self.samples)

    def overlapping(self, window: TimeInterval) -> list[int]:
        """
        Find samples overlapping a window.

        Args:
            window: Half-open time window

        Returns:
            Indices of overlapping samples, ascending
        """
        if len(self.samples) == 0 or window.duration_ms <= 0:
            return []

        # Samples at or past hi start at or after the window end
        hi = int(np.searchsorted(self.starts, window.end_ms, side="left"))
        # Samples before lo all end at or before the window start
        lo = int(np.searchsorted(self._max_end_so_far, window.start_ms, side="right"))
        if lo >= hi:
            return []

        candidates = np.arange(lo, hi)
        mask = (self.ends[lo:hi] > window.start_ms) & (
            self.ends[lo:hi] > self.starts[lo:hi]
        )
        return [int(i) for i in candidates[mask]]


class PowerMatcher:
    """
    Matches running event windows to power samples with edge extension.

    One matcher instance handles one analysis run; claim tables are built
    by match_all() and not shared between runs.

    Example:
        >>> matcher = PowerMatcher(samples, baseline_threshold_ma=50.0)
        >>> matches = matcher.match_all({0: window_a, 1: window_b})
        >>> matches[0].interval
    """

    def __init__(
        self,
        samples: list[PowerSample],
        baseline_threshold_ma: float = EC.BASELINE_THRESHOLD_MA,
    ):
        """
        Initialize matcher.

        Args:
            samples: Power samples in chronological order
            baseline_threshold_ma: Current at or below which the device is idle
        """
        self.index = SampleIndex(samples)
        self.baseline_threshold_ma = baseline_threshold_ma
        self._core_owners: dict[int, set[int]] = {}
        self._extension_owners: dict[int, set[int]] = {}

    def match_all(
        self, windows: dict[int, TimeInterval]
    ) -> dict[int, MatchedRange | None]:
        """
        Match every event window against the trace.

        Args:
            windows: Event index -> event window, in chronological order

        Returns:
            Event index -> matched range, or None if no sample overlaps
        """
        self._core_owners = {}
        self._extension_owners = {}

        cores: dict[int, list[int]] = {}
        for event_index, window in windows.items():
            cores[event_index] = self.index.overlapping(window)
            for sample_index in cores[event_index]:
                self._core_owners.setdefault(sample_index, set()).add(event_index)

        matches: dict[int, MatchedRange | None] = {}
        earlier_end = -np.inf
        for event_index, core in cores.items():
            floor_ms = earlier_end
            earlier_end = max(earlier_end, windows[event_index].end_ms)
            if not core:
                logger.debug(f"Event {event_index}: no overlapping power samples")
                matches[event_index] = None
                continue

            leading = self._extend_leading(core[0], event_index, floor_ms)
            trailing = self._extend_trailing(core[-1], event_index)
            for sample_index in leading + trailing:
                self._extension_owners.setdefault(sample_index, set()).add(
                    event_index
                )

            matched = self._build_range(
                sorted(set(leading) | set(core) | set(trailing))
            )
            matches[event_index] = matched
            logger.debug(
                f"Event {event_index}: {len(core)} core samples, "
                f"{len(leading)} leading, {len(trailing)} trailing -> "
                f"[{matched.interval.start_ms}, {matched.interval.end_ms})"
            )

        return matches

    def _claimed_core_by_other(self, sample_index: int, event_index: int) -> bool:
        owners = self._core_owners.get(sample_index, set())
        return any(owner != event_index for owner in owners)

    def _claimed_extension_by_other(
        self, sample_index: int, event_index: int
    ) -> bool:
        owners = self._extension_owners.get(sample_index, set())
        return any(owner != event_index for owner in owners)

    def _extend_leading(
        self, first_core: int, event_index: int, floor_ms: float
    ) -> list[int]:
        """
        Walk backward across the rising edge before the core match.

        Only the current level matters here, not monotonicity: the ramp
        may dip and rise again as long as it stays above baseline.

        Args:
            first_core: Index of the earliest core sample
            event_index: Event being matched
            floor_ms: Latest end of any earlier event; samples starting
                before it are not folded in

        Returns:
            Folded-in sample indices, ascending
        """
        currents = self.index.currents
        folded: list[int] = []
        current = first_core

        while currents[current] > self.baseline_threshold_ma:
            previous = current - 1
            if previous < 0 or self._claimed_core_by_other(previous, event_index):
                break
            if self.index.starts[previous] < floor_ms:
                break
            folded.append(previous)
            if self._claimed_extension_by_other(previous, event_index):
                # Shared boundary with an earlier event's falling edge
                break
            current = previous

        folded.reverse()
        return folded

    def _extend_trailing(self, last_core: int, event_index: int) -> list[int]:
        """
        Walk forward across the falling edge after the core match.

        Until baseline is reached every sample is folded in, tolerating a
        temporary rise. Once at or below baseline, folding continues only
        while current does not increase. A core match that already ends at
        baseline is not extended.

        Args:
            last_core: Index of the latest core sample
            event_index: Event being matched

        Returns:
            Folded-in sample indices, ascending
        """
        currents = self.index.currents
        if currents[last_core] <= self.baseline_threshold_ma:
            return []

        folded: list[int] = []
        current = last_core
        reached_baseline = False

        while True:
            following = current + 1
            if following >= len(self.index):
                break
            if self._claimed_core_by_other(following, event_index):
                break
            if reached_baseline and currents[following] > currents[current]:
                break

            folded.append(following)
            if not reached_baseline:
                reached_baseline = bool(
                    currents[following] <= self.baseline_threshold_ma
                )
            current = following

        return folded

    def _build_range(self, sample_indices: list[int]) -> MatchedRange:
        samples = tuple(self.index.samples[i] for i in sample_indices)
        interval = TimeInterval(
            start_ms=min(sample.start_ms for sample in samples),
            end_ms=max(sample.end_ms for sample in samples),
        )
        return MatchedRange(
            interval=interval, samples=samples, sample_indices=tuple(sample_indices)
        )
