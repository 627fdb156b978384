"""
Tests for configuration management.

All tests run against a temporary config file (see the autouse
isolated_config fixture).
"""

import logging

import pytest
import tomli_w

from wakepower.config import (
    get_baseline_threshold,
    load_config,
    save_config,
    set_baseline_threshold,
    unset_baseline_threshold,
)
from wakepower.constants import EstimatorConstants as EC
from wakepower.logging_config import _build_logging_config


class TestBaselineThreshold:
    """Test reading and writing the baseline threshold."""

    def test_default_without_config(self, config_path):
        assert not config_path.exists()
        assert get_baseline_threshold() == EC.BASELINE_THRESHOLD_MA

    def test_set_and_get(self, config_path):
        set_baseline_threshold(75)

        assert config_path.exists()
        assert get_baseline_threshold() == 75.0
        assert load_config() == {"analysis": {"baseline_threshold_ma": 75.0}}

    def test_set_rejects_non_positive(self, config_path):
        with pytest.raises(ValueError, match="greater than 0"):
            set_baseline_threshold(0)
        assert not config_path.exists()

    def test_unset_deletes_empty_config(self, config_path):
        set_baseline_threshold(75)
        unset_baseline_threshold()

        assert not config_path.exists()
        assert get_baseline_threshold() == EC.BASELINE_THRESHOLD_MA

    def test_unset_keeps_other_sections(self, config_path):
        save_config(
            {
                "analysis": {"baseline_threshold_ma": 75.0},
                "logging": {"enabled": False},
            }
        )

        unset_baseline_threshold()

        assert load_config() == {"logging": {"enabled": False}}

    def test_invalid_value_falls_back_to_default(self, config_path, caplog):
        save_config({"analysis": {"baseline_threshold_ma": "high"}})

        with caplog.at_level(logging.WARNING):
            assert get_baseline_threshold() == EC.BASELINE_THRESHOLD_MA
        assert "Ignoring invalid baseline_threshold_ma" in caplog.text

    def test_corrupted_file_treated_as_empty(self, config_path, caplog):
        config_path.parent.mkdir(parents=True)
        config_path.write_text("[analysis\nbaseline_threshold_ma = ")

        with caplog.at_level(logging.WARNING):
            assert load_config() == {}
        assert "Failed to load config" in caplog.text

    def test_save_is_atomic(self, config_path):
        save_config({"analysis": {"baseline_threshold_ma": 60.0}})

        assert not config_path.with_suffix(".toml.tmp").exists()
        assert config_path.read_bytes() == tomli_w.dumps(
            {"analysis": {"baseline_threshold_ma": 60.0}}
        ).encode()


class TestLoggingConfig:
    """Test the logging dictConfig built from settings."""

    def test_console_and_file_handlers(self, config_path):
        config = _build_logging_config(
            verbose=False, log_to_file=True, console_format=None
        )

        assert set(config["handlers"]) == {"console", "file"}
        assert config["handlers"]["console"]["level"] == "INFO"
        assert config["handlers"]["file"]["filename"].endswith("wakepower.log")

    def test_verbose_console(self, config_path):
        config = _build_logging_config(
            verbose=True, log_to_file=False, console_format="%(message)s"
        )

        assert set(config["handlers"]) == {"console"}
        assert config["handlers"]["console"]["level"] == "DEBUG"
        assert config["formatters"]["console"]["format"] == "%(message)s"

    def test_file_logging_disabled_in_config(self, config_path):
        save_config({"logging": {"enabled": False}})

        config = _build_logging_config(
            verbose=False, log_to_file=True, console_format=None
        )

        assert "file" not in config["handlers"]

    def test_file_settings_from_config(self, config_path):
        save_config({"logging": {"level": "info", "max_size_mb": 2, "backup_count": 1}})

        handler = _build_logging_config(
            verbose=False, log_to_file=True, console_format=None
        )["handlers"]["file"]

        assert handler["level"] == "INFO"
        assert handler["maxBytes"] == 2 * 1024 * 1024
        assert handler["backupCount"] == 1
