"""
Timeline data model for wakeup power estimation.

These are the inputs produced by an upstream log/report parser: running
events (device activity, annotated with wakeup reasons) and power-monitor
samples. All times are milliseconds; all intervals are half-open [start, end).

Field aliases accept the camelCase keys (startTime, endTime, value) used by
Battery Historian style report exports.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from wakepower.constants import ABORT_PREFIX, MILLISECONDS_PER_HOUR


class TimeInterval(BaseModel):
    """Half-open time interval [start_ms, end_ms)."""

    model_config = ConfigDict(frozen=True)

    start_ms: float = Field(
        validation_alias=AliasChoices("start_ms", "startTime"),
        description="Interval start (ms, inclusive)",
    )
    end_ms: float = Field(
        validation_alias=AliasChoices("end_ms", "endTime"),
        description="Interval end (ms, exclusive)",
    )

    @model_validator(mode="after")
    def check_ordering(self) -> "TimeInterval":
        """Reject intervals that end before they start."""
        if self.end_ms < self.start_ms:
            raise ValueError(
                f"Interval end ({self.end_ms}) must not precede start ({self.start_ms})"
            )
        return self

    @property
    def duration_ms(self) -> float:
        """Length of the interval in milliseconds."""
        return self.end_ms - self.start_ms

    def overlaps(self, other: "TimeInterval") -> bool:
        """
        Check whether two half-open intervals share any time.

        Zero-length and touching-only intervals never overlap.
        """
        if self.duration_ms <= 0 or other.duration_ms <= 0:
            return False
        return self.start_ms < other.end_ms and other.start_ms < self.end_ms


class PowerSample(TimeInterval):
    """
    One power-monitor reading: constant current draw over the interval.

    Samples are compared by position in the trace, never by value; two
    samples with identical fields are still distinct readings.
    """

    current_ma: float = Field(
        validation_alias=AliasChoices("current_ma", "value"),
        description="Average current draw (mA)",
    )

    @property
    def energy_mah(self) -> float:
        """Energy consumed over the sample (mAh)."""
        return self.current_ma * self.duration_ms / MILLISECONDS_PER_HOUR


class ServiceEntry(TimeInterval):
    """Labelled sub-interval of a running event describing why it was awake."""

    value: str = Field(description="Wakeup reason")

    @property
    def is_abort(self) -> bool:
        """Abort entries record failed suspends rather than wakeup reasons."""
        return self.value.startswith(ABORT_PREFIX)


class RunningEvent(TimeInterval):
    """Interval during which the device was awake, with its wakeup reasons."""

    services: tuple[ServiceEntry, ...] = Field(
        default=(), description="Service entries in log order"
    )

    @property
    def reason_labels(self) -> list[str]:
        """Distinct non-abort service values, in first-seen order."""
        labels: list[str] = []
        for service in self.services:
            if not service.is_abort and service.value not in labels:
                labels.append(service.value)
        return labels


class AnalysisInput(BaseModel):
    """Batch of already-parsed inputs for one analysis run."""

    running_events: list[RunningEvent] = Field(
        default_factory=list,
        validation_alias=AliasChoices("running_events", "runningEvents"),
        description="Running events, ascending by start time",
    )
    power_samples: list[PowerSample] = Field(
        default_factory=list,
        validation_alias=AliasChoices(
            "power_samples", "powerSamples", "powermonitorEvents"
        ),
        description="Power-monitor samples, ascending by start time",
    )
    baseline_threshold_ma: float | None = Field(
        default=None,
        gt=0,
        validation_alias=AliasChoices("baseline_threshold_ma", "baselineThreshold"),
        description="Override for the idle current threshold (mA)",
    )
