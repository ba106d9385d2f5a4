"""Exhaustive persistence path: stage every board, then batch it into the table."""

from __future__ import annotations

from typing import Callable, Iterable, Optional, Sequence

from ..core.constants import DEFAULT_CHUNK_SIZE
from ..core.exceptions import BoardCacheError
from ..core.models import serialize_board
from ..data.board_cache import BoardCache
from ..engine.board_store import BoardStore
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

ProgressCallback = Callable[[int], None]


class BoardPersister:
    """Move boards from an enumerator through the cache into the board table.

    Staging keeps the exact production order: board ``i`` lands under
    ``prefix + str(i)``, and :meth:`flush` reads the keys back in that order.
    """

    def __init__(
        self,
        cache: BoardCache,
        store: BoardStore,
        max_value: int,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.cache = cache
        self.store = store
        self.max_value = max_value
        self.chunk_size = chunk_size

    def stage(
        self,
        boards: Iterable[Sequence[Sequence[int]]],
        prefix: str,
        progress: Optional[ProgressCallback] = None,
    ) -> int:
        """Put every board into the cache and return how many were staged."""
        total = 0
        for board in boards:
            self.cache.put(f"{prefix}{total}", board)
            total += 1
            if progress is not None:
                progress(total)
        LOGGER.info("Staged %d boards under prefix %r", total, prefix)
        return total

    def flush(
        self,
        prefix: str,
        total: int,
        progress: Optional[ProgressCallback] = None,
    ) -> int:
        """Move ``total`` staged boards into the table, one chunk at a time.

        A chunk leaves the cache only after the store accepted it, so a failed
        insert keeps that chunk and every later one staged.
        """
        saved = 0
        for start in range(0, total, self.chunk_size):
            stop = min(start + self.chunk_size, total)
            keys = [f"{prefix}{index}" for index in range(start, stop)]
            rows = []
            for key in keys:
                board = self.cache.get(key)
                if board is None:
                    raise BoardCacheError(f"Staged board {key!r} is missing")
                rows.append(serialize_board(board, self.max_value))
            saved += self.store.insert_boards(rows, run_key=prefix)
            for key in keys:
                self.cache.delete(key)
            if progress is not None:
                progress(saved)
        LOGGER.info("Saved %d boards to table %s", saved, self.store.table)
        return saved

