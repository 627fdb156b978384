"""
Constants for wakeup power estimation.

Thresholds and labels used when correlating running events with a
power-monitor trace.
"""

from pathlib import Path

# ============================================================================
# Wakeup Reasons
# ============================================================================

# Service entries with this prefix describe aborted suspends, not wakeup reasons
ABORT_PREFIX = "Abort:"

# Label used when a running event has no usable (non-abort) reason
NO_NON_ABORT_REASON = "No non abort events found"


# ============================================================================
# Analysis Algorithm Constants
# ============================================================================


class EstimatorConstants:
    """Constants for power matching and edge extension (matching.py)."""

    # Quiescent current; samples at or below are considered idle (mA)
    BASELINE_THRESHOLD_MA = 50.0


class StatisticsColumns:
    """Column order of the per-wakeup statistics tables (statistics.py)."""

    DURATION = ("mean", "median", "min", "max", "sum")
    ENERGY = ("mean", "median", "min", "max", "sum")
    CURRENT = ("mean", "median", "min", "max")


# ============================================================================
# Units
# ============================================================================

MILLISECONDS_PER_HOUR = 3_600_000

DURATION_UNIT = "ms"
CURRENT_UNIT = "mA"
ENERGY_UNIT = "mAh"

# Fixed-point precision for currents and energies
DECIMAL_PLACES = 3

TABLE_DURATION = "Duration"
TABLE_CURRENT = "Current (mA)"
TABLE_ENERGY = "Energy (mAh)"

# ============================================================================
# Default Settings
# ============================================================================

CONFIG_DIR = Path.home() / ".wakepower"
CONFIG_FILE = "config.toml"

# Logging configuration
DEFAULT_LOG_DIR = CONFIG_DIR / "logs"
DEFAULT_LOG_FILE = "wakepower.log"
DEFAULT_LOG_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
DEFAULT_LOG_BACKUP_COUNT = 5
