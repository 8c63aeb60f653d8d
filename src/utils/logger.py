"""Logging setup for the life tracker.

Call setup_logger once from an entry point (app.py, watch_age.py); modules
grab the shared logger with get_logger() at import time.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def level_from_name(name: str, default: int = logging.INFO) -> int:
    """Map a level name such as 'DEBUG' to its logging constant."""
    value = logging.getLevelName((name or "").strip().upper())
    return value if isinstance(value, int) else default


def setup_logger(
    name: str = "life_tracker",
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Configure and return a logger.

    Args:
        name: Logger name.
        level: Logging level, as a constant or a name ("DEBUG", "info", ...).
        log_file: Optional path to log file. If None, logs to stderr only.

    Returns:
        Configured logger. Already-configured loggers are returned unchanged.
    """
    log = logging.getLogger(name)
    if log.handlers:
        return log

    log.setLevel(level_from_name(level) if isinstance(level, str) else level)
    fmt = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    h = logging.StreamHandler(sys.stderr)
    h.setFormatter(fmt)
    log.addHandler(h)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(fmt)
        log.addHandler(fh)

    return log


def get_logger(name: str = "life_tracker") -> logging.Logger:
    """Return the application logger. Use after setup_logger has been called."""
    return logging.getLogger(name)
