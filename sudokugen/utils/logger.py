"""Logging utilities tailored for board generation."""

from __future__ import annotations

import logging
from typing import Optional, TextIO

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def parse_level(name: str, default: int = logging.INFO) -> int:
    """Map a level name such as ``"debug"`` to its numeric value."""

    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def configure_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> None:
    """Send package logs to ``stream`` (stderr by default).

    The enumerators produce boards far faster than anyone can read log lines,
    so per-board events are never logged; only run milestones and time-outs
    are. Board output itself goes to stdout and stays separate from the log.
    """

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a namespaced logger, configuring defaults if needed."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or "sudokugen")
