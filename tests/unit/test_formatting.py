"""Tests for report formatting."""

from wakepower.analysis.types import (
    GlobalSummary,
    ReasonEnergy,
    StatisticsTables,
    TableRow,
)
from wakepower.utils.formatting import (
    format_current,
    format_duration_ms,
    format_energy,
    format_fixed,
    format_text_table,
    render_ranking,
    render_statistics_tables,
    render_summary,
)


class TestValueFormatting:
    """Test single value formatting."""

    def test_duration_rounds_to_whole_ms(self):
        assert format_duration_ms(350.0) == "350ms"
        assert format_duration_ms(349.5) == "350ms"
        assert format_duration_ms(0) == "0ms"

    def test_fixed_three_decimals(self):
        assert format_fixed(3000) == "3000.000"
        assert format_fixed(0.0105555) == "0.011"
        assert format_fixed(0.000277) == "0.000"

    def test_units(self):
        assert format_current(160) == "160.000 mA"
        assert format_energy(0.0222222) == "0.022 mAh"


class TestRendering:
    """Test rendering of estimator results."""

    def test_statistics_tables(self):
        tables = StatisticsTables(
            duration=[TableRow(label="r1", values=[100, 100, 100, 100, 100])],
            current=[TableRow(label="r1", values=[10, 10, 10, 10])],
            energy=[TableRow(label="r1", values=[0.0003] * 5)],
        )

        rendered = render_statistics_tables(tables)

        assert list(rendered) == ["Duration", "Current (mA)", "Energy (mAh)"]
        assert rendered["Duration"] == [["r1", "100ms", "100ms", "100ms", "100ms", "100ms"]]
        assert rendered["Current (mA)"] == [["r1", "10.000", "10.000", "10.000", "10.000"]]
        assert rendered["Energy (mAh)"] == [["r1"] + ["0.000"] * 5]

    def test_summary(self):
        summary = GlobalSummary(
            suspend_time_ms=200,
            wakeup_time_ms=800,
            suspend_energy_mah=0.1,
            wakeup_energy_mah=0.5,
            avg_suspend_current_ma=1800,
            avg_wakeup_current_ma=2250,
        )

        assert render_summary(summary) == {
            "suspendTime": "200ms",
            "wakeupTime": "800ms",
            "suspendEnergy": "0.100 mAh",
            "wakeupEnergy": "0.500 mAh",
            "avgWakeupCurrent": "2250.000 mA",
            "avgSuspendCurrent": "1800.000 mA",
        }

    def test_ranking(self):
        ranking = [ReasonEnergy(label="r2", energy_mah=1.0)]
        assert render_ranking(ranking) == [["r2", "1.000 mAh"]]


class TestTextTable:
    """Test plain-text table layout."""

    def test_alignment(self):
        text = format_text_table(["Reason", "Energy"], [["r1", "1.000 mAh"]])
        lines = text.splitlines()

        assert lines[0] == "Reason     Energy"
        assert lines[1] == "------  ---------"
        assert lines[2] == "r1      1.000 mAh"

    def test_no_rows(self):
        text = format_text_table(["Reason", "Energy"], [])
        assert len(text.splitlines()) == 2
