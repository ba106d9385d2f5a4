"""Legal value lookup for a single cell.

Both helpers only look at cells that precede the target in row-major order:
the row to its left, the column above it, and the box rows above it. Cells
further along are either still ``EMPTY`` or about to be overwritten, so they
never need to be consulted.
"""

from __future__ import annotations

from typing import List, Sequence, Set

from ..core.models import CellCoords


def _used_values(board: Sequence[Sequence[int]], coords: CellCoords, box_size: int) -> Set[int]:
    row, col, box_row, box_col = coords
    used = set(board[row][:col])
    used.update(board[r][col] for r in range(row))
    for r in range(box_row, row):
        used.update(board[r][box_col:box_col + box_size])
    return used


def legal_values(
    board: Sequence[Sequence[int]],
    coords: CellCoords,
    alphabet: Sequence[int],
    box_size: int,
) -> List[int]:
    """Return the alphabet values not yet used by the cell's predecessors, ascending."""

    used = _used_values(board, coords, box_size)
    return [value for value in alphabet if value not in used]


def remaining_values(
    board: Sequence[Sequence[int]],
    coords: CellCoords,
    alphabet: Sequence[int],
    box_size: int,
) -> List[int]:
    """Like :func:`legal_values`, but only values above the cell's current content.

    The value already sitting in the cell marks how far the search got on a
    previous visit, so the result is the list of options not tried yet. An
    ``EMPTY`` cell keeps every legal value.
    """

    current = board[coords.row][coords.col]
    used = _used_values(board, coords, box_size)
    return [value for value in alphabet if value > current and value not in used]
