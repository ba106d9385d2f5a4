"""Generalized Sudoku board generator.

This package exposes the public API surface via:

- ``sudokugen.engine.generator.BoardGenerator``: validates a configuration and
  hands out enumerators over its board space.
- ``sudokugen.engine.enumerator.BoardEnumerator``: drains every complete board.
- ``sudokugen.engine.backtracker.ResumableBacktracker``: one board per step,
  in ascending order, with a per-step time budget.
"""

from .core.exceptions import InvalidGeometry
from .core.models import Outcome
from .engine.backtracker import ResumableBacktracker
from .engine.enumerator import BoardEnumerator
from .engine.generator import BoardGenerator, GeneratorConfig, generate

__all__ = [
    "BoardEnumerator",
    "BoardGenerator",
    "GeneratorConfig",
    "InvalidGeometry",
    "Outcome",
    "ResumableBacktracker",
    "generate",
]

__version__ = "0.1.0"
