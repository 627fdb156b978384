"""Input validation utilities for wakepower."""

from collections.abc import Sequence

from wakepower.models.timeline import TimeInterval


def validate_chronological(intervals: Sequence[TimeInterval], name: str) -> bool:
    """
    Validate that intervals are sorted by start time.

    Equal start times are allowed; overlapping or duplicate intervals are
    not an error.

    Args:
        intervals: Intervals in supplied order
        name: Name of the sequence, used in the error message

    Returns:
        True if valid

    Raises:
        ValueError: If any interval starts before its predecessor
    """
    for i in range(1, len(intervals)):
        if intervals[i].start_ms < intervals[i - 1].start_ms:
            raise ValueError(
                f"{name} must be sorted by start time: item {i} starts at "
                f"{intervals[i].start_ms} ms, before item {i - 1} at "
                f"{intervals[i - 1].start_ms} ms"
            )
    return True
