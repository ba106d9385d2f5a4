"""Precomputed cell coordinates for a square grid split into square boxes."""

from __future__ import annotations

from typing import Iterator, List, Sequence, Tuple

from ..core.exceptions import InvalidGeometry
from ..core.models import CellCoords


def geometry_errors(size: int, box_size: int) -> List[str]:
    errors: List[str] = []
    if size <= 0:
        errors.append("Size should be a positive integer.")
    if box_size <= 0:
        errors.append("Box size should be a positive integer.")
    if errors:
        return errors
    if size % box_size != 0:
        errors.append("Size should be a multiple of box size.")
    if size < box_size:
        errors.append("Size should be greater than or equal to Box size.")
    return errors


def alphabet_errors(max_value: int, box_size: int) -> List[str]:
    if box_size > 0 and max_value < box_size ** 2:
        return ["Max value should be greater than or equal to the square of the Box size."]
    return []


def check_alphabet(geometry: GeometryIndex, alphabet: Sequence[int]) -> None:
    """Raise :class:`InvalidGeometry` when ``alphabet`` cannot fill one box."""

    errors = alphabet_errors(len(alphabet), geometry.box_size)
    if errors:
        raise InvalidGeometry(errors)


def build_geometry(size: int, box_size: int) -> Tuple[CellCoords, ...]:
    """Return one :class:`CellCoords` per linear position ``row * size + col``."""

    errors = geometry_errors(size, box_size)
    if errors:
        raise InvalidGeometry(errors)

    entries = []
    for index in range(size * size):
        row, col = divmod(index, size)
        entries.append(CellCoords(row, col, row - row % box_size, col - col % box_size))
    return tuple(entries)


class GeometryIndex:
    """Read-only coordinate lookup shared by both enumerators."""

    def __init__(self, size: int, box_size: int) -> None:
        self.size = size
        self.box_size = box_size
        self._entries = build_geometry(size, box_size)

    @property
    def last(self) -> int:
        """Linear index of the final cell."""
        return len(self._entries) - 1

    def __getitem__(self, index: int) -> CellCoords:
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CellCoords]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"GeometryIndex(size={self.size}, box_size={self.box_size})"
