"""Pretty-print helpers for boards and run summaries."""

from __future__ import annotations

import sys
from typing import List, Sequence

CLEAR_LINE = "\x1b[1G\x1b[2K"


def format_board(board: Sequence[Sequence[int]], box_size: int, max_value: int) -> str:
    """Render a board with ``+---+`` box boundaries and ``|`` separators.

    Every cell is left-aligned to the width of the largest value, so a
    4x4 board over ``1..4`` looks like::

        +-----+-----+
        | 1 2 | 3 4 |
        | 3 4 | 1 2 |
        +-----+-----+
        ...
    """

    size = len(board)
    cell_width = len(str(max_value))
    boxes = size // box_size
    boundary = ("+" + "-" * (box_size * cell_width + box_size + 1)) * boxes + "+"

    lines: List[str] = []
    for r, row in enumerate(board):
        if r % box_size == 0:
            lines.append(boundary)
        segments = []
        for start in range(0, size, box_size):
            cells = " ".join(f"{value:<{cell_width}}" for value in row[start:start + box_size])
            segments.append(f"| {cells} ")
        lines.append("".join(segments) + "|")
    lines.append(boundary)
    return "\n".join(lines)


def print_board(
    board: Sequence[Sequence[int]],
    box_size: int,
    max_value: int,
    *,
    label: str | None = None,
    stream=None,
) -> None:
    """Print the board in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_board(board, box_size, max_value), file=stream)


def progress_line(message: str, *, stream=None) -> None:
    """Overwrite the current terminal line with ``message``."""

    stream = stream or sys.stdout
    stream.write(CLEAR_LINE + message)
    stream.flush()


def format_ms(ms: float) -> str:
    return f"{ms:.2f}ms"
