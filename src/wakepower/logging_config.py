"""Centralized logging configuration for wakepower."""

import logging
import logging.config
import os
import sys

from pathlib import Path
from typing import Any

from wakepower.constants import (
    DEFAULT_LOG_BACKUP_COUNT,
    DEFAULT_LOG_DIR,
    DEFAULT_LOG_FILE,
    DEFAULT_LOG_MAX_BYTES,
)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_logging_configured = False


def get_log_path() -> Path:
    """
    Get path to the active log file, creating the log directory if needed.

    Returns:
        Path to wakepower.log
    """
    os.makedirs(DEFAULT_LOG_DIR, mode=0o700, exist_ok=True)
    return DEFAULT_LOG_DIR / DEFAULT_LOG_FILE


def _file_handler_settings() -> dict[str, Any] | None:
    """
    Read the [logging] section of the config file.

    Returns:
        Handler settings for the rotating log file, or None if file
        logging is disabled
    """
    from wakepower.config import load_config

    section = load_config().get("logging", {})
    if not isinstance(section, dict):
        section = {}

    if not section.get("enabled", True):
        return None

    max_size_mb = section.get("max_size_mb")
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "level": str(section.get("level", "DEBUG")).upper(),
        "formatter": "file",
        "filename": str(get_log_path()),
        "maxBytes": max_size_mb * 1024 * 1024
        if max_size_mb
        else DEFAULT_LOG_MAX_BYTES,
        "backupCount": section.get("backup_count", DEFAULT_LOG_BACKUP_COUNT),
        "encoding": "utf-8",
    }


def _build_logging_config(
    verbose: bool, log_to_file: bool, console_format: str | None
) -> dict[str, Any]:
    """
    Build the dictConfig configuration dictionary.

    Args:
        verbose: If True, set console to DEBUG level
        log_to_file: Whether to attach the rotating file handler
        console_format: Override console format string

    Returns:
        Dictionary suitable for logging.config.dictConfig()
    """
    handlers: dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": "DEBUG" if verbose else "INFO",
            "formatter": "console",
            "stream": "ext://sys.stderr",
        },
    }

    if log_to_file:
        file_handler = _file_handler_settings()
        if file_handler is not None:
            handlers["file"] = file_handler

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {"format": console_format or LOG_FORMAT},
            "file": {"format": LOG_FORMAT},
        },
        "handlers": handlers,
        "root": {
            "level": "DEBUG",
            "handlers": list(handlers),
        },
    }


def setup_logging(
    *,
    verbose: bool = False,
    log_to_file: bool = True,
    console_format: str | None = None,
) -> None:
    """
    Configure logging for the wakepower CLI.

    Safe to call more than once; only the first call takes effect.

    Args:
        verbose: If True, set console to DEBUG level
        log_to_file: Whether to also log to ~/.wakepower/logs/wakepower.log
        console_format: Override console format string. If None, uses full format.
    """
    global _logging_configured

    if _logging_configured:
        return

    try:
        logging.config.dictConfig(
            _build_logging_config(verbose, log_to_file, console_format)
        )
    except Exception as e:
        sys.stderr.write(f"WARNING: Failed to configure logging: {e}\n")
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.INFO,
            format=console_format or "%(levelname)s: %(message)s",
        )

    _logging_configured = True
