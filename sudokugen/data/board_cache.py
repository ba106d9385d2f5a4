"""Local staging cache for generated boards.

Boards produced by the exhaustive enumerator are parked here as JSON files
under ``local_db/collections/board_cache/`` before being batched into the
durable board table. Entries stay until they are pulled.
"""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence

from ..core.exceptions import BoardCacheError
from ..core.models import Board, snapshot
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

DEFAULT_CACHE_DIR = Path("local_db/collections/board_cache")


class BoardCache:
    """Key/value store of boards, one JSON document per key.

    Key strategy
    ------------
    Keys are run-scoped strings such as ``"4_2_4_17"``. Anything outside
    ``[A-Za-z0-9_.-]`` is replaced with ``_`` to form the filename, so keys
    should stick to that alphabet to stay distinct.
    """

    def __init__(self, cache_dir: Path | str = DEFAULT_CACHE_DIR) -> None:
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def put(self, key: str, board: Sequence[Sequence[int]]) -> None:
        """Store ``board`` under ``key``, replacing any previous entry."""
        doc = {
            "key": key,
            "created_at": datetime.now(timezone.utc).isoformat(),
            "board": [list(row) for row in board],
        }
        self._path(key).write_text(json.dumps(doc), encoding="utf-8")

    def get(self, key: str) -> Optional[Board]:
        path = self._path(key)
        if not path.exists():
            LOGGER.debug("Board cache miss: %s", path.name)
            return None
        try:
            doc = json.loads(path.read_text(encoding="utf-8"))
            return snapshot(doc["board"])
        except (json.JSONDecodeError, OSError, KeyError, TypeError) as exc:
            raise BoardCacheError(f"Unreadable cache entry {path.name}: {exc}") from exc

    def pull(self, key: str) -> Optional[Board]:
        """Return the board stored under ``key`` and remove the entry."""
        board = self.get(key)
        if board is not None:
            self.delete(key)
        return board

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)

    def has(self, key: str) -> bool:
        return self._path(key).exists()

    def clear(self, prefix: str = "") -> int:
        """Delete every entry whose filename starts with ``prefix``."""
        removed = 0
        for path in self.cache_dir.glob(f"{self._slug(prefix)}*.json"):
            path.unlink(missing_ok=True)
            removed += 1
        if removed:
            LOGGER.info("Board cache cleared: %d entries (prefix=%r)", removed, prefix)
        return removed

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _path(self, key: str) -> Path:
        return self.cache_dir / f"{self._slug(key)}.json"

    @staticmethod
    def _slug(key: str) -> str:
        return re.sub(r"[^A-Za-z0-9_.-]", "_", key)
