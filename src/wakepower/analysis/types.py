"""Analysis pipeline type definitions."""

from pydantic import BaseModel, ConfigDict, Field

from wakepower.constants import MILLISECONDS_PER_HOUR
from wakepower.models.timeline import PowerSample, TimeInterval

# ============================================================================
# Matching Types
# ============================================================================


class Occurrence(BaseModel):
    """
    One (interval, reason) instance derived from a running event.

    The interval is always the parent running event's full interval, not the
    interval of the service entry the label came from.

    Attributes:
        event_index: Position of the parent running event in the input
        interval: Matching window
        label: Wakeup reason
    """

    model_config = ConfigDict(frozen=True)

    event_index: int = Field(ge=0, description="Index of parent running event")
    interval: TimeInterval = Field(description="Matching window")
    label: str = Field(description="Wakeup reason label")


class MatchedRange(BaseModel):
    """
    Power samples attributed to one running event after edge extension.

    Attributes:
        interval: [leading boundary, trailing boundary)
        samples: Constituent samples in chronological order
        sample_indices: Trace positions of the samples (sample identity)
    """

    model_config = ConfigDict(frozen=True)

    interval: TimeInterval = Field(description="Matched time range")
    samples: tuple[PowerSample, ...] = Field(description="Samples in the range")
    sample_indices: tuple[int, ...] = Field(description="Trace index of each sample")

    @property
    def duration_ms(self) -> float:
        return self.interval.duration_ms

    @property
    def energy_mah(self) -> float:
        """Energy of this range alone (mAh)."""
        return sum(sample.energy_mah for sample in self.samples)

    @property
    def current_ma(self) -> float:
        """Average current over the range (mA), 0 for an empty range."""
        if self.duration_ms <= 0:
            return 0.0
        return self.energy_mah / (self.duration_ms / MILLISECONDS_PER_HOUR)


# ============================================================================
# Aggregation Types
# ============================================================================


class ReasonRecord(BaseModel):
    """
    All matches for a single wakeup reason.

    Attributes:
        label: Wakeup reason
        ranges: One slot per occurrence in input order (None = no power data)
        energy_mah: Energy over the distinct samples of all ranges
        first_seen: Order in which the label first appeared
    """

    label: str = Field(description="Wakeup reason label")
    ranges: list[MatchedRange | None] = Field(description="Per-occurrence matches")
    energy_mah: float = Field(description="Deduplicated energy (mAh)")
    first_seen: int = Field(ge=0, description="First-occurrence order")


class ReasonEnergy(BaseModel):
    """One row of the wakeup reason ranking."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(description="Wakeup reason label")
    energy_mah: float = Field(description="Total energy (mAh)")


# ============================================================================
# Statistics Types
# ============================================================================


class DistributionStats(BaseModel):
    """
    Distribution of one quantity over a reason's matched ranges.

    Median is the upper middle value for an even count. All fields are 0
    when the reason has no matched ranges.
    """

    mean: float = Field(description="Arithmetic mean")
    median: float = Field(description="Median (upper middle for even counts)")
    min: float = Field(description="Minimum")
    max: float = Field(description="Maximum")
    sum: float = Field(description="Total")
    count: int = Field(ge=0, description="Number of matched ranges")


class ReasonStatistics(BaseModel):
    """Duration, current and energy distributions for one wakeup reason."""

    label: str = Field(description="Wakeup reason label")
    duration_ms: DistributionStats = Field(description="Range durations (ms)")
    current_ma: DistributionStats = Field(description="Range currents (mA)")
    energy_mah: DistributionStats = Field(description="Range energies (mAh)")


class TableRow(BaseModel):
    """One reason's row in a statistics table."""

    label: str = Field(description="Wakeup reason label")
    values: list[float] = Field(description="Column values, see StatisticsColumns")


class StatisticsTables(BaseModel):
    """
    Duration, current and energy tables, rows ordered by the energy ranking.

    Columns follow StatisticsColumns: duration and energy carry
    (mean, median, min, max, sum); current omits the sum since it is not
    additive.
    """

    duration: list[TableRow] = Field(description="Duration table (ms)")
    current: list[TableRow] = Field(description="Current table (mA)")
    energy: list[TableRow] = Field(description="Energy table (mAh)")


class GlobalSummary(BaseModel):
    """Partition of the whole power trace into suspend and wakeup time."""

    suspend_time_ms: float = Field(ge=0, description="Unclaimed sample time (ms)")
    wakeup_time_ms: float = Field(ge=0, description="Claimed sample time (ms)")
    suspend_energy_mah: float = Field(description="Unclaimed sample energy (mAh)")
    wakeup_energy_mah: float = Field(description="Claimed sample energy (mAh)")
    avg_suspend_current_ma: float = Field(description="Average suspend current (mA)")
    avg_wakeup_current_ma: float = Field(description="Average wakeup current (mA)")
