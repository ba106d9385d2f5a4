"""Shared constants and enumerations for the board generator."""

from __future__ import annotations

from enum import Enum

EMPTY = 0

DEFAULT_SIZE = 9
DEFAULT_BOX_SIZE = 3
DEFAULT_TIME_BUDGET_MS = 30.0
DEFAULT_CHUNK_SIZE = 1000
DEFAULT_TABLE = "string_solutions"


class OutcomeStatus(str, Enum):
    """Result of a single resumable search step."""

    FOUND = "FOUND"
    EXHAUSTED = "EXHAUSTED"
    TIMED_OUT = "TIMED_OUT"
