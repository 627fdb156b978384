"""Formatting utilities for wakepower reports."""

import math

from wakepower.analysis.types import (
    GlobalSummary,
    ReasonEnergy,
    StatisticsTables,
    TableRow,
)
from wakepower.constants import (
    CURRENT_UNIT,
    DECIMAL_PLACES,
    DURATION_UNIT,
    ENERGY_UNIT,
    TABLE_CURRENT,
    TABLE_DURATION,
    TABLE_ENERGY,
)


def format_duration_ms(duration_ms: float) -> str:
    """
    Format a duration as whole milliseconds.

    Args:
        duration_ms: Duration in milliseconds

    Returns:
        Formatted string (e.g., "350ms")
    """
    return f"{math.floor(duration_ms + 0.5)}{DURATION_UNIT}"


def format_fixed(value: float) -> str:
    """Format a current or energy value with fixed precision (e.g., "0.022")."""
    return f"{value:.{DECIMAL_PLACES}f}"


def format_current(current_ma: float) -> str:
    """Format a current with its unit (e.g., "160.000 mA")."""
    return f"{format_fixed(current_ma)} {CURRENT_UNIT}"


def format_energy(energy_mah: float) -> str:
    """Format an energy with its unit (e.g., "0.022 mAh")."""
    return f"{format_fixed(energy_mah)} {ENERGY_UNIT}"


def _render_rows(rows: list[TableRow], formatter) -> list[list[str]]:
    return [[row.label, *(formatter(v) for v in row.values)] for row in rows]


def render_statistics_tables(tables: StatisticsTables) -> dict[str, list[list[str]]]:
    """
    Render statistics tables as rows of strings.

    Args:
        tables: Statistics tables from the estimator

    Returns:
        Table title -> rows of [label, *formatted values]
    """
    return {
        TABLE_DURATION: _render_rows(tables.duration, format_duration_ms),
        TABLE_CURRENT: _render_rows(tables.current, format_fixed),
        TABLE_ENERGY: _render_rows(tables.energy, format_fixed),
    }


def render_summary(summary: GlobalSummary) -> dict[str, str]:
    """
    Render the suspend/wakeup summary.

    Args:
        summary: Global summary from the estimator

    Returns:
        Dictionary of formatted values keyed by report field name
    """
    return {
        "suspendTime": format_duration_ms(summary.suspend_time_ms),
        "wakeupTime": format_duration_ms(summary.wakeup_time_ms),
        "suspendEnergy": format_energy(summary.suspend_energy_mah),
        "wakeupEnergy": format_energy(summary.wakeup_energy_mah),
        "avgWakeupCurrent": format_current(summary.avg_wakeup_current_ma),
        "avgSuspendCurrent": format_current(summary.avg_suspend_current_ma),
    }


def render_ranking(ranking: list[ReasonEnergy]) -> list[list[str]]:
    """Render the reason ranking as [label, energy] rows."""
    return [[row.label, format_energy(row.energy_mah)] for row in ranking]


def format_text_table(headers: list[str], rows: list[list[str]]) -> str:
    """
    Lay out rows as a plain-text table.

    The first column is left aligned, the rest right aligned.

    Args:
        headers: Column headers
        rows: Rows of already formatted cells

    Returns:
        Table text without trailing newline
    """
    widths = [len(header) for header in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def layout(cells: list[str]) -> str:
        parts = [cells[0].ljust(widths[0])]
        parts.extend(cell.rjust(widths[i]) for i, cell in enumerate(cells) if i > 0)
        return "  ".join(parts).rstrip()

    lines = [layout(headers), "  ".join("-" * width for width in widths)]
    lines.extend(layout(row) for row in rows)
    return "\n".join(lines)
