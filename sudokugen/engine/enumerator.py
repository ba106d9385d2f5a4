"""Exhaustive depth-first board enumeration."""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Tuple

from ..core.models import Board, empty_board, snapshot
from ..utils.logger import get_logger
from .candidates import legal_values
from .geometry import GeometryIndex, check_alphabet


LOGGER = get_logger(__name__)


class BoardEnumerator:
    """Lazily yield every complete board for a geometry and alphabet.

    Every call to ``iter()`` restarts the search from an empty board, so the
    same instance can be drained more than once with identical results.
    Boards come out as frozen snapshots in ascending row-major order.

    The traversal keeps an explicit stack of ``(position, candidates)`` frames
    instead of recursing, which keeps large grids clear of the interpreter's
    recursion limit.
    """

    def __init__(self, geometry: GeometryIndex, alphabet: Sequence[int]) -> None:
        self.geometry = geometry
        self.alphabet = tuple(alphabet)
        check_alphabet(geometry, self.alphabet)

    def __iter__(self) -> Iterator[Board]:
        return self._search()

    def _search(self) -> Iterator[Board]:
        geometry = self.geometry
        box_size = geometry.box_size
        last = geometry.last
        board = empty_board(geometry.size)

        stack: List[Tuple[int, Iterator[int]]] = [
            (0, iter(legal_values(board, geometry[0], self.alphabet, box_size)))
        ]
        produced = 0
        while stack:
            position, candidates = stack[-1]
            value: Optional[int] = next(candidates, None)
            if value is None:
                stack.pop()
                continue

            coords = geometry[position]
            board[coords.row][coords.col] = value
            if position == last:
                produced += 1
                yield snapshot(board)
                continue

            following = position + 1
            stack.append(
                (following, iter(legal_values(board, geometry[following], self.alphabet, box_size)))
            )

        LOGGER.debug("Enumeration of %r finished after %d boards", geometry, produced)
