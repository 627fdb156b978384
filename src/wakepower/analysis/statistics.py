"""Statistical calculations for wakeup power analysis."""

import numpy as np

from wakepower.analysis.types import (
    DistributionStats,
    GlobalSummary,
    ReasonEnergy,
    ReasonRecord,
    ReasonStatistics,
    StatisticsTables,
    TableRow,
)
from wakepower.constants import MILLISECONDS_PER_HOUR
from wakepower.constants import StatisticsColumns as SC
from wakepower.models.timeline import PowerSample


def calculate_distribution(values: list[float]) -> DistributionStats:
    """
    Calculate distribution statistics for a list of values.

    The median is the element at index n // 2 of the sorted values, i.e.
    the upper of the two middle values for an even count.

    Args:
        values: Values to summarize

    Returns:
        DistributionStats, all zero for an empty list
    """
    if not values:
        return DistributionStats(
            mean=0.0, median=0.0, min=0.0, max=0.0, sum=0.0, count=0
        )

    data = np.sort(np.asarray(values, dtype=np.float64))
    return DistributionStats(
        mean=float(np.mean(data)),
        median=float(data[len(data) // 2]),
        min=float(data[0]),
        max=float(data[-1]),
        sum=float(np.sum(data)),
        count=len(data),
    )


def average_current(energy_mah: float, duration_ms: float) -> float:
    """
    Calculate average current from energy and time.

    Args:
        energy_mah: Energy in mAh
        duration_ms: Time in milliseconds

    Returns:
        Average current in mA (0 if duration is 0)
    """
    if duration_ms <= 0:
        return 0.0
    return energy_mah / (duration_ms / MILLISECONDS_PER_HOUR)


def calculate_reason_statistics(record: ReasonRecord) -> ReasonStatistics:
    """
    Calculate duration, current and energy distributions for one reason.

    Only occurrences with power data contribute. Energies here are per
    range and not deduplicated, so the energy sum can exceed the reason's
    ranked energy when its ranges share samples.

    Args:
        record: Reason record

    Returns:
        ReasonStatistics for the reason
    """
    ranges = [matched for matched in record.ranges if matched is not None]

    return ReasonStatistics(
        label=record.label,
        duration_ms=calculate_distribution([m.duration_ms for m in ranges]),
        current_ma=calculate_distribution([m.current_ma for m in ranges]),
        energy_mah=calculate_distribution([m.energy_mah for m in ranges]),
    )


def _row(label: str, stats: DistributionStats, columns: tuple[str, ...]) -> TableRow:
    return TableRow(label=label, values=[getattr(stats, column) for column in columns])


def build_statistics_tables(
    records: dict[str, ReasonRecord], ranking: list[ReasonEnergy]
) -> StatisticsTables:
    """
    Build the per-reason duration, current and energy tables.

    Args:
        records: Label -> ReasonRecord
        ranking: Reason ranking giving row order

    Returns:
        StatisticsTables with one row per ranked reason
    """
    per_reason = [calculate_reason_statistics(records[row.label]) for row in ranking]

    return StatisticsTables(
        duration=[_row(s.label, s.duration_ms, SC.DURATION) for s in per_reason],
        current=[_row(s.label, s.current_ma, SC.CURRENT) for s in per_reason],
        energy=[_row(s.label, s.energy_mah, SC.ENERGY) for s in per_reason],
    )


def calculate_global_summary(
    samples: list[PowerSample], records: dict[str, ReasonRecord]
) -> GlobalSummary:
    """
    Split the power trace into wakeup and suspend samples.

    A sample in any reason's matched range is wakeup, otherwise suspend.
    Each sample is counted exactly once, however many reasons claim it.

    Args:
        samples: Full power trace
        records: Label -> ReasonRecord

    Returns:
        GlobalSummary with time, energy and average current for each side
    """
    claimed = np.zeros(len(samples), dtype=bool)
    for record in records.values():
        for matched in record.ranges:
            if matched is not None:
                claimed[list(matched.sample_indices)] = True

    durations = np.array([s.duration_ms for s in samples], dtype=np.float64)
    energies = np.array([s.energy_mah for s in samples], dtype=np.float64)

    wakeup_time = float(durations[claimed].sum())
    suspend_time = float(durations[~claimed].sum())
    wakeup_energy = float(energies[claimed].sum())
    suspend_energy = float(energies[~claimed].sum())

    return GlobalSummary(
        suspend_time_ms=suspend_time,
        wakeup_time_ms=wakeup_time,
        suspend_energy_mah=suspend_energy,
        wakeup_energy_mah=wakeup_energy,
        avg_suspend_current_ma=average_current(suspend_energy, suspend_time),
        avg_wakeup_current_ma=average_current(wakeup_energy, wakeup_time),
    )
