"""Deterministic rule validation for generated boards."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Set

from ..core.exceptions import ValidationError
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class BoardValidator:
    """Checks a finished board against the row, column and box rules."""

    def __init__(self, size: int, box_size: int, max_value: int) -> None:
        self.size = size
        self.box_size = box_size
        self.max_value = max_value

    def validate(self, board: Sequence[Sequence[int]]) -> ValidationResult:
        try:
            self.ensure_valid(board)
        except ValidationError as exc:
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[])

    def ensure_valid(self, board: Sequence[Sequence[int]]) -> None:
        self._check_shape(board)
        self._check_values(board)
        self._check_rows(board)
        self._check_columns(board)
        self._check_boxes(board)

    def _check_shape(self, board: Sequence[Sequence[int]]) -> None:
        if len(board) != self.size or any(len(row) != self.size for row in board):
            raise ValidationError(f"Board is not {self.size}x{self.size}")

    def _check_values(self, board: Sequence[Sequence[int]]) -> None:
        for r, row in enumerate(board):
            for c, value in enumerate(row):
                if not 1 <= value <= self.max_value:
                    raise ValidationError(
                        f"Value {value} at ({r},{c}) outside 1..{self.max_value}"
                    )

    def _check_rows(self, board: Sequence[Sequence[int]]) -> None:
        for r, row in enumerate(board):
            self._check_unique(row, f"row {r}")

    def _check_columns(self, board: Sequence[Sequence[int]]) -> None:
        for c in range(self.size):
            self._check_unique([board[r][c] for r in range(self.size)], f"column {c}")

    def _check_boxes(self, board: Sequence[Sequence[int]]) -> None:
        b = self.box_size
        for box_row in range(0, self.size, b):
            for box_col in range(0, self.size, b):
                values = [
                    board[r][c]
                    for r in range(box_row, box_row + b)
                    for c in range(box_col, box_col + b)
                ]
                self._check_unique(values, f"box at ({box_row},{box_col})")

    @staticmethod
    def _check_unique(values: Sequence[int], label: str) -> None:
        seen: Set[int] = set()
        for value in values:
            if value in seen:
                raise ValidationError(f"Duplicate value {value} in {label}")
            seen.add(value)
