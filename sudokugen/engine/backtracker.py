"""Steppable backtracking search that hands out one board per call."""

from __future__ import annotations

import time
from typing import Callable, Iterator, Optional, Sequence

from ..core.constants import DEFAULT_TIME_BUDGET_MS, EMPTY
from ..core.models import Board, Outcome, empty_board, snapshot
from ..utils.logger import get_logger
from .candidates import remaining_values
from .geometry import GeometryIndex, check_alphabet


LOGGER = get_logger(__name__)

EXHAUSTED_POSITION = -1


class ResumableBacktracker:
    """Walk the board space in ascending lexicographic order, one board per step.

    The working board lives as long as the instance. Each cell's current value
    doubles as the marker of which candidates were already tried there, so a
    later :meth:`advance` picks up exactly where the previous one stopped.

    ``time_budget_ms`` bounds the wall-clock time of a single :meth:`advance`
    call; the timer restarts on every call. ``None`` disables the budget.
    """

    def __init__(
        self,
        geometry: GeometryIndex,
        alphabet: Sequence[int],
        time_budget_ms: Optional[float] = DEFAULT_TIME_BUDGET_MS,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.geometry = geometry
        self.alphabet = tuple(alphabet)
        check_alphabet(geometry, self.alphabet)
        self.time_budget_ms = time_budget_ms
        self._clock = clock
        self._board = empty_board(geometry.size)
        self._position = 0
        self._found = 0
        self._timeouts = 0

    @property
    def position(self) -> int:
        """Linear index under consideration; ``-1`` once exhausted."""
        return self._position

    @property
    def exhausted(self) -> bool:
        return self._position == EXHAUSTED_POSITION

    @property
    def board(self) -> Board:
        return snapshot(self._board)

    @property
    def found_count(self) -> int:
        return self._found

    @property
    def timeout_count(self) -> int:
        return self._timeouts

    def advance(self) -> Outcome:
        """Search for the next board.

        Returns ``FOUND`` with a frozen copy of the board, ``TIMED_OUT`` when
        the budget ran out first (call again to resume), or ``EXHAUSTED`` once
        no boards remain. Calls after exhaustion change nothing.
        """

        if self.exhausted:
            return Outcome.exhausted()

        started = self._clock()
        geometry = self.geometry
        box_size = geometry.box_size
        board = self._board

        while True:
            coords = geometry[self._position]
            candidates = remaining_values(board, coords, self.alphabet, box_size)

            while not candidates:
                if self._position != 0:
                    board[coords.row][coords.col] = EMPTY
                self._position -= 1
                if self._position == EXHAUSTED_POSITION:
                    LOGGER.debug("Search space exhausted after %d boards", self._found)
                    return Outcome.exhausted()
                coords = geometry[self._position]
                candidates = remaining_values(board, coords, self.alphabet, box_size)

            if self._over_budget(started):
                self._timeouts += 1
                LOGGER.debug(
                    "Step timed out at position %d after %.0f ms budget",
                    self._position,
                    self.time_budget_ms,
                )
                return Outcome.timed_out()

            board[coords.row][coords.col] = candidates[0]

            if self._position == geometry.last:
                self._found += 1
                return Outcome.found(snapshot(board))

            self._position += 1

    def __iter__(self) -> Iterator[Board]:
        """Drain the remaining boards, resuming through any time-outs."""

        while True:
            outcome = self.advance()
            if outcome.is_exhausted:
                return
            if outcome.is_found and outcome.board is not None:
                yield outcome.board

    def _over_budget(self, started: float) -> bool:
        if self.time_budget_ms is None:
            return False
        return (self._clock() - started) * 1000.0 > self.time_budget_ms
