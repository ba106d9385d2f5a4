"""CP-SAT board counting using OR-Tools.

Gives an independent count of the board space (and optionally the boards
themselves) to cross-check the enumerators against.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ortools.sat.python import cp_model

from ..core.models import Board
from ..utils.logger import get_logger
from .geometry import GeometryIndex

LOGGER = get_logger(__name__)


@dataclass
class SolverCount:
    count: int
    complete: bool
    boards: List[Board] = field(default_factory=list)


class _BoardCollector(cp_model.CpSolverSolutionCallback):
    """Counts solutions, optionally keeping them, and stops at ``limit``."""

    def __init__(
        self,
        cells: List[List[cp_model.IntVar]],
        limit: Optional[int],
        collect: bool,
    ) -> None:
        super().__init__()
        self._cells = cells
        self._limit = limit
        self._collect = collect
        self.count = 0
        self.boards: List[Board] = []
        self.stopped = False

    def on_solution_callback(self) -> None:
        self.count += 1
        if self._collect:
            self.boards.append(
                tuple(tuple(self.value(var) for var in row) for row in self._cells)
            )
        if self._limit is not None and self.count >= self._limit:
            self.stopped = True
            self.stop_search()


def count_boards(
    geometry: GeometryIndex,
    max_value: int,
    *,
    limit: Optional[int] = None,
    timeout: float = 30.0,
    collect: bool = False,
) -> SolverCount:
    """Enumerate boards for ``geometry`` over ``1..max_value`` via CP-SAT.

    Args:
        geometry: Grid and box layout to model.
        max_value: Largest value of the alphabet.
        limit: Stop after this many boards. ``None`` enumerates them all.
        timeout: Solver time limit in seconds.
        collect: Keep every board found (in solver order, not sorted).

    Returns:
        A :class:`SolverCount`; ``complete`` is True only when the solver
        proved it saw the whole space.
    """
    size = geometry.size
    box_size = geometry.box_size
    model = cp_model.CpModel()

    cells: List[List[cp_model.IntVar]] = [
        [model.new_int_var(1, max_value, f"C_{r}_{c}") for c in range(size)]
        for r in range(size)
    ]

    for r in range(size):
        model.add_all_different(cells[r])
    for c in range(size):
        model.add_all_different([cells[r][c] for r in range(size)])

    boxes: Dict[Tuple[int, int], List[cp_model.IntVar]] = {}
    for coords in geometry:
        boxes.setdefault((coords.box_row, coords.box_col), []).append(
            cells[coords.row][coords.col]
        )
    for members in boxes.values():
        model.add_all_different(members)

    solver = cp_model.CpSolver()
    solver.parameters.enumerate_all_solutions = True
    solver.parameters.num_workers = 1
    solver.parameters.max_time_in_seconds = timeout

    collector = _BoardCollector(cells, limit, collect)
    LOGGER.info(
        "CP-SAT: %d cells, %d boxes, values 1..%d, counting (timeout=%0.1fs)...",
        size * size,
        len(boxes),
        max_value,
        timeout,
    )
    status = solver.solve(model, collector)

    complete = status in (cp_model.OPTIMAL, cp_model.INFEASIBLE) and not collector.stopped
    if not complete:
        LOGGER.warning(
            "CP-SAT: stopped before covering the space (status=%s, %d boards)",
            solver.status_name(status),
            collector.count,
        )
    else:
        LOGGER.info("CP-SAT: %d boards in %.2fs", collector.count, solver.wall_time)
    return SolverCount(count=collector.count, complete=complete, boards=collector.boards)
