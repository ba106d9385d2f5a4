"""Custom exception hierarchy for board generation."""

from __future__ import annotations

from typing import Iterable, List


class SudokuError(Exception):
    """Base exception for generator failures."""


class InvalidGeometry(SudokuError):
    """Raised when the grid, box and alphabet sizes cannot tile a board."""

    def __init__(self, messages: Iterable[str]) -> None:
        self.messages: List[str] = list(messages)
        super().__init__(" ".join(self.messages))


class BoardCacheError(SudokuError):
    """Raised when a staged board cannot be read back from the cache."""


class BoardStoreError(SudokuError):
    """Raised when the durable board table cannot be written or queried."""


class ValidationError(SudokuError):
    """Raised when a board breaks the row, column or box rules."""
