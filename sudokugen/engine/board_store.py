"""Persistent board table.

Finished boards end up as rows of the ``string_solutions`` table in a local
SQLite database (``local_db/boards.sqlite3``). Each row keeps the flattened
board string plus the run key it was generated under.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

import pandas as pd

from ..core.constants import DEFAULT_TABLE
from ..core.exceptions import BoardStoreError
from ..core.models import Board, deserialize_board
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

DEFAULT_DB_PATH = Path("local_db/boards.sqlite3")


class BoardStore:
    """Append-only table of serialized boards."""

    def __init__(self, db_path: Path | str = DEFAULT_DB_PATH, table: str = DEFAULT_TABLE) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.table = table
        self._ensure_table()

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def insert_boards(self, boards: Iterable[str], run_key: str) -> int:
        """Insert one chunk of serialized boards and return the row count."""
        frame = pd.DataFrame({"board": list(boards)})
        if frame.empty:
            return 0
        frame.insert(0, "run_key", run_key)
        frame["created_at"] = datetime.now(timezone.utc).isoformat()

        try:
            with self._connect() as conn:
                frame.to_sql(self.table, conn, if_exists="append", index=False, chunksize=len(frame))
        except (sqlite3.Error, ValueError) as exc:
            raise BoardStoreError(f"Failed to insert {len(frame)} boards: {exc}") from exc
        LOGGER.debug("Inserted %d boards into %s", len(frame), self.table)
        return len(frame)

    def count(self, run_key: Optional[str] = None) -> int:
        query = f"SELECT COUNT(*) AS total FROM {self.table}"
        params: tuple = ()
        if run_key is not None:
            query += " WHERE run_key = ?"
            params = (run_key,)
        frame = self._read(query, params)
        return int(frame["total"].iloc[0])

    def fetch(self, run_key: str, limit: Optional[int] = None) -> pd.DataFrame:
        """Return the boards of one run in insertion order."""
        query = f"SELECT id, run_key, board, created_at FROM {self.table} WHERE run_key = ? ORDER BY id"
        params: tuple = (run_key,)
        if limit is not None:
            query += " LIMIT ?"
            params = (run_key, limit)
        return self._read(query, params)

    def load_boards(
        self, run_key: str, size: int, max_value: int, limit: Optional[int] = None
    ) -> List[Board]:
        """Read one run back as boards, in insertion order."""
        frame = self.fetch(run_key, limit=limit)
        return [deserialize_board(text, size, max_value) for text in frame["board"]]

    def delete_run(self, run_key: str) -> int:
        """Remove every row of one run and return how many were dropped."""
        try:
            with self._connect() as conn:
                removed = conn.execute(
                    f"DELETE FROM {self.table} WHERE run_key = ?", (run_key,)
                ).rowcount
        except sqlite3.Error as exc:
            raise BoardStoreError(f"Failed to delete run {run_key!r}: {exc}") from exc
        if removed:
            LOGGER.info("Dropped %d rows of run %r from %s", removed, run_key, self.table)
        return removed

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self.db_path)
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def _read(self, query: str, params: tuple) -> pd.DataFrame:
        try:
            with self._connect() as conn:
                return pd.read_sql_query(query, conn, params=params)
        except (sqlite3.Error, pd.errors.DatabaseError) as exc:
            raise BoardStoreError(f"Board table query failed: {exc}") from exc

    def _ensure_table(self) -> None:
        try:
            with self._connect() as conn:
                conn.execute(
                    f"""
                    CREATE TABLE IF NOT EXISTS {self.table} (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        run_key TEXT NOT NULL,
                        board TEXT NOT NULL,
                        created_at TEXT NOT NULL
                    )
                    """
                )
        except sqlite3.Error as exc:
            raise BoardStoreError(f"Cannot prepare table {self.table}: {exc}") from exc
