"""Data models supporting the board generator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Sequence, Tuple

from .constants import EMPTY, OutcomeStatus

Board = Tuple[Tuple[int, ...], ...]
WorkingBoard = List[List[int]]


class CellCoords(NamedTuple):
    """Coordinates of one linear position; box fields name the box's top-left cell."""

    row: int
    col: int
    box_row: int
    box_col: int


@dataclass(frozen=True)
class Outcome:
    """What a single ``advance()`` call produced."""

    status: OutcomeStatus
    board: Optional[Board] = None

    @classmethod
    def found(cls, board: Board) -> "Outcome":
        return cls(OutcomeStatus.FOUND, board)

    @classmethod
    def exhausted(cls) -> "Outcome":
        return cls(OutcomeStatus.EXHAUSTED)

    @classmethod
    def timed_out(cls) -> "Outcome":
        return cls(OutcomeStatus.TIMED_OUT)

    @property
    def is_found(self) -> bool:
        return self.status == OutcomeStatus.FOUND

    @property
    def is_exhausted(self) -> bool:
        return self.status == OutcomeStatus.EXHAUSTED

    @property
    def is_timed_out(self) -> bool:
        return self.status == OutcomeStatus.TIMED_OUT


def empty_board(size: int) -> WorkingBoard:
    return [[EMPTY] * size for _ in range(size)]


def snapshot(board: Sequence[Sequence[int]]) -> Board:
    """Freeze a working board so later mutation cannot leak into consumers."""

    return tuple(tuple(row) for row in board)


def flatten(board: Sequence[Sequence[int]]) -> Tuple[int, ...]:
    return tuple(value for row in board for value in row)


def serialize_board(board: Sequence[Sequence[int]], max_value: int) -> str:
    """Return the table representation of a board.

    Single-digit alphabets are concatenated (``"1234341221434321"``); wider
    alphabets are comma separated so the string stays unambiguous.
    """

    cells = (str(value) for value in flatten(board))
    if max_value <= 9:
        return "".join(cells)
    return ",".join(cells)


def deserialize_board(text: str, size: int, max_value: int) -> Board:
    values = [int(ch) for ch in text] if max_value <= 9 else [int(part) for part in text.split(",")]
    if len(values) != size * size:
        raise ValueError(f"Expected {size * size} cells, got {len(values)}")
    return tuple(tuple(values[r * size:(r + 1) * size]) for r in range(size))
