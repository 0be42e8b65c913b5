"""Logging configuration for gitcoach.

The TUI owns stdout and stderr, so every run logs to a per-run file in the
platform log directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "gitcoach"
LOG_FILENAME = "gitcoach.log"


def default_log_path() -> Path:
    """Return the default log file location."""
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def setup_logging(debug: bool = False, log_path: Path | None = None) -> Path | None:
    """Configure the root logger and return the log file path, if any.

    Args:
        debug: Log DEBUG records instead of INFO.
        log_path: Override for the log file location (tests).
    """
    level = logging.DEBUG if debug else logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    target = log_path if log_path is not None else default_log_path()
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(target, mode="w", encoding="utf-8")
    except OSError:
        # Unwritable log dir: continue without a file log.
        root_logger.addHandler(logging.NullHandler())
        return None

    file_handler.setLevel(level)
    file_handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(file_handler)
    return target


def get_logger(name: str) -> logging.Logger:
    """Return a logger with the package prefix stripped from ``name``."""
    if name.startswith("gitcoach."):
        name = name[len("gitcoach."):]
    return logging.getLogger(name)
