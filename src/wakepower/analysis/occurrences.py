"""
Occurrence extraction.

Turns running events into (interval, reason) occurrences. Abort service
entries are not wakeup reasons; an event whose entries are all aborts (or
that has none) is attributed to a fallback label instead.
"""

import logging

from wakepower.analysis.types import Occurrence
from wakepower.constants import NO_NON_ABORT_REASON
from wakepower.models.timeline import PowerSample, RunningEvent, TimeInterval

logger = logging.getLogger(__name__)


def trace_span(samples: list[PowerSample]) -> TimeInterval | None:
    """
    Get the time span covered by a power trace.

    Args:
        samples: Power samples in chronological order

    Returns:
        [first sample start, latest sample end), or None for an empty trace
    """
    if not samples:
        return None
    return TimeInterval(
        start_ms=samples[0].start_ms,
        end_ms=max(sample.end_ms for sample in samples),
    )


def extract_occurrences(event: RunningEvent, event_index: int) -> list[Occurrence]:
    """
    Derive the occurrences of a single running event.

    Args:
        event: Running event
        event_index: Position of the event in the input sequence

    Returns:
        One occurrence per distinct non-abort reason, or a single
        fallback-labelled occurrence
    """
    interval = TimeInterval(start_ms=event.start_ms, end_ms=event.end_ms)
    labels = event.reason_labels or [NO_NON_ABORT_REASON]

    return [
        Occurrence(event_index=event_index, interval=interval, label=label)
        for label in labels
    ]


def _within_span(event: RunningEvent, span: TimeInterval) -> bool:
    if event.duration_ms <= 0:
        return span.start_ms <= event.start_ms < span.end_ms
    return event.overlaps(span)


def select_events_in_trace(
    events: list[RunningEvent], samples: list[PowerSample]
) -> list[int]:
    """
    Find running events that fall within the power trace.

    Events entirely outside the trace span have no power data to compare
    against and are excluded from analysis altogether. Events inside the
    span that happen to overlap no sample are kept, including zero-length
    events whose instant lies inside the span.

    Args:
        events: Running events in chronological order
        samples: Power samples in chronological order

    Returns:
        Indices of events overlapping the trace span
    """
    span = trace_span(samples)
    if span is None:
        return []

    selected = [i for i, event in enumerate(events) if _within_span(event, span)]

    skipped = len(events) - len(selected)
    if skipped:
        logger.debug(
            f"Skipped {skipped} running events outside trace span "
            f"[{span.start_ms}, {span.end_ms})"
        )
    return selected
