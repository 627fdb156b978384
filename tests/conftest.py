"""Pytest configuration and fixtures for wakepower tests."""

import pytest


def pytest_configure(config):
    """Register custom test markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that do not require external dependencies"
    )
    config.addinivalue_line(
        "markers", "business_logic: Tests for core business logic and algorithms"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests combining multiple components"
    )
    config.addinivalue_line(
        "markers", "fixtures: Recorded running event / power trace scenarios"
    )


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config and log files at a temporary directory.

    Logging setup is marked as done so CLI invocations don't attach
    handlers to streams that CliRunner closes afterwards.
    """
    config_dir = tmp_path / "wakepower_home"
    monkeypatch.setattr(
        "wakepower.config.get_config_path", lambda: config_dir / "config.toml"
    )
    monkeypatch.setattr(
        "wakepower.cli.get_config_path", lambda: config_dir / "config.toml"
    )
    monkeypatch.setattr("wakepower.logging_config.DEFAULT_LOG_DIR", config_dir / "logs")
    monkeypatch.setattr("wakepower.logging_config._logging_configured", True)
    return config_dir / "config.toml"


@pytest.fixture
def config_path(isolated_config):
    """Return path of the (temporary) config file."""
    return isolated_config
