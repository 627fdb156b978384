"""Configuration management for wakepower."""

import logging
import os
import tomllib

from pathlib import Path
from typing import Any

import tomli_w

from wakepower.constants import CONFIG_DIR, CONFIG_FILE
from wakepower.constants import EstimatorConstants as EC

logger = logging.getLogger(__name__)


def get_config_path() -> Path:
    """
    Get the path to the configuration file.

    Returns:
        Path to ~/.wakepower/config.toml
    """
    return CONFIG_DIR / CONFIG_FILE


def load_config() -> dict[str, Any]:
    """
    Load configuration from TOML file.

    Returns:
        Configuration dictionary. Returns empty dict if file doesn't exist
        or is corrupted.
    """
    config_path = get_config_path()

    if not config_path.exists():
        return {}

    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except Exception as e:
        logger.warning(f"Failed to load config from {config_path}: {e}")
        logger.warning("Treating config as empty. Fix or delete the file to resolve.")
        return {}


def save_config(config: dict[str, Any]) -> None:
    """
    Save configuration to TOML file using atomic write.

    Creates the parent directory if it doesn't exist.
    Uses temp file + rename for atomic operation.

    Args:
        config: Configuration dictionary to save

    Raises:
        PermissionError: If directory cannot be created or file cannot be written
    """
    config_path = get_config_path()

    config_dir = config_path.parent
    try:
        os.makedirs(config_dir, exist_ok=True)
    except PermissionError as e:
        raise PermissionError(
            f"Cannot create config directory {config_dir}: {e}"
        ) from e

    temp_path = config_path.with_suffix(".toml.tmp")

    try:
        with open(temp_path, "wb") as f:
            tomli_w.dump(config, f)

        os.replace(temp_path, config_path)

    except Exception:
        if temp_path.exists():
            temp_path.unlink()
        raise


def get_baseline_threshold() -> float:
    """
    Get the baseline current threshold used for edge extension.

    Falls back to the built-in default when the setting is absent or invalid.

    Returns:
        Baseline threshold in mA
    """
    config = load_config()
    value = config.get("analysis", {}).get("baseline_threshold_ma")

    if value is None:
        return EC.BASELINE_THRESHOLD_MA

    if isinstance(value, bool) or not isinstance(value, int | float) or value <= 0:
        logger.warning(
            f"Ignoring invalid baseline_threshold_ma={value!r} in config, "
            f"using default {EC.BASELINE_THRESHOLD_MA} mA"
        )
        return EC.BASELINE_THRESHOLD_MA

    return float(value)


def set_baseline_threshold(threshold_ma: float) -> None:
    """
    Set the baseline current threshold in config.

    Args:
        threshold_ma: Threshold in mA, must be positive

    Raises:
        ValueError: If threshold is not positive
    """
    if threshold_ma <= 0:
        raise ValueError(
            f"Invalid baseline threshold: {threshold_ma}. Must be greater than 0 mA"
        )

    config = load_config()

    if "analysis" not in config:
        config["analysis"] = {}

    config["analysis"]["baseline_threshold_ma"] = float(threshold_ma)
    save_config(config)


def unset_baseline_threshold() -> None:
    """
    Remove the baseline threshold setting from config.

    If this was the only setting in the analysis section, removes the section.
    If config becomes empty, deletes the config file.
    """
    config = load_config()

    if "analysis" in config and "baseline_threshold_ma" in config["analysis"]:
        del config["analysis"]["baseline_threshold_ma"]

        if not config["analysis"]:
            del config["analysis"]

        if not config:
            config_path = get_config_path()
            if config_path.exists():
                config_path.unlink()
        else:
            save_config(config)
