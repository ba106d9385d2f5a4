"""Board generator orchestration.

Two ways to consume the same board space:
  1. ``boards()``: drain every complete board (bulk persistence).
  2. ``session()``: a resumable search handing out one board per step.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple

from ..core.constants import DEFAULT_BOX_SIZE, DEFAULT_SIZE, DEFAULT_TIME_BUDGET_MS
from ..core.exceptions import InvalidGeometry
from ..core.models import Board
from ..utils.logger import get_logger
from .backtracker import ResumableBacktracker
from .enumerator import BoardEnumerator
from .geometry import GeometryIndex, alphabet_errors, geometry_errors


LOGGER = get_logger(__name__)


@dataclass
class GeneratorConfig:
    size: int = DEFAULT_SIZE
    box_size: int = DEFAULT_BOX_SIZE
    max_value: Optional[int] = None
    time_budget_ms: Optional[float] = DEFAULT_TIME_BUDGET_MS

    @property
    def resolved_max_value(self) -> int:
        """Alphabet size; falls back to the grid size when unset."""
        return self.size if self.max_value is None else self.max_value

    def alphabet(self) -> Tuple[int, ...]:
        return tuple(range(1, self.resolved_max_value + 1))

    def errors(self) -> List[str]:
        errors = geometry_errors(self.size, self.box_size)
        errors.extend(alphabet_errors(self.resolved_max_value, self.box_size))
        if self.time_budget_ms is not None and self.time_budget_ms <= 0:
            errors.append("Time budget should be a positive number of milliseconds.")
        return errors

    def validate(self) -> None:
        errors = self.errors()
        if errors:
            raise InvalidGeometry(errors)

    def cache_prefix(self) -> str:
        return f"{self.size}_{self.box_size}_{self.resolved_max_value}_"


class BoardGenerator:
    """Validate a configuration once and hand out enumerators over it."""

    def __init__(self, config: GeneratorConfig) -> None:
        config.validate()
        self.config = config
        self.geometry = GeometryIndex(config.size, config.box_size)
        self.alphabet = config.alphabet()
        LOGGER.info(
            "Board space ready: %sx%s grid, %sx%s boxes, values 1..%s",
            config.size,
            config.size,
            config.box_size,
            config.box_size,
            config.resolved_max_value,
        )

    def boards(self) -> Iterator[Board]:
        """Yield every complete board, restarting from scratch on each call."""
        return iter(BoardEnumerator(self.geometry, self.alphabet))

    def session(self, clock: Callable[[], float] = time.perf_counter) -> ResumableBacktracker:
        return ResumableBacktracker(
            self.geometry,
            self.alphabet,
            time_budget_ms=self.config.time_budget_ms,
            clock=clock,
        )


def generate(size: int, box_size: int, max_value: Optional[int] = None) -> Iterator[Board]:
    """Shortcut for ``BoardGenerator(GeneratorConfig(...)).boards()``."""

    config = GeneratorConfig(size=size, box_size=box_size, max_value=max_value)
    return BoardGenerator(config).boards()
