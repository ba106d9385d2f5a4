import tempfile
import unittest
from pathlib import Path

from sudokugen.core.exceptions import BoardCacheError, BoardStoreError
from sudokugen.core.models import serialize_board
from sudokugen.data.board_cache import BoardCache
from sudokugen.engine.board_store import BoardStore
from sudokugen.engine.generator import BoardGenerator, GeneratorConfig
from sudokugen.io.persistence import BoardPersister

BOARD = ((1, 2), (2, 1))


class FailingStore(BoardStore):
    """Board store whose n-th insert raises."""

    def __init__(self, db_path: Path, fail_on_call: int) -> None:
        super().__init__(db_path)
        self.fail_on_call = fail_on_call
        self.calls = 0

    def insert_boards(self, boards, run_key):
        self.calls += 1
        if self.calls == self.fail_on_call:
            raise BoardStoreError("disk full")
        return super().insert_boards(boards, run_key)


class BoardCacheTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.cache = BoardCache(Path(self._tmp.name) / "cache")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_put_then_pull_removes_entry(self) -> None:
        self.cache.put("2_1_2_0", BOARD)
        self.assertTrue(self.cache.has("2_1_2_0"))
        self.assertEqual(self.cache.get("2_1_2_0"), BOARD)
        self.assertEqual(self.cache.pull("2_1_2_0"), BOARD)
        self.assertFalse(self.cache.has("2_1_2_0"))
        self.assertIsNone(self.cache.pull("2_1_2_0"))

    def test_clear_only_touches_prefix(self) -> None:
        self.cache.put("4_2_4_0", BOARD)
        self.cache.put("4_2_4_1", BOARD)
        self.cache.put("9_3_9_0", BOARD)
        self.assertEqual(self.cache.clear("4_2_4_"), 2)
        self.assertTrue(self.cache.has("9_3_9_0"))

    def test_corrupted_entry_raises(self) -> None:
        (self.cache.cache_dir / "broken.json").write_text("{not json", encoding="utf-8")
        with self.assertRaises(BoardCacheError):
            self.cache.get("broken")


class BoardStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.store = BoardStore(Path(self._tmp.name) / "boards.sqlite3")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_insert_and_fetch_in_order(self) -> None:
        inserted = self.store.insert_boards(["1221", "2112"], run_key="2_1_2_")
        self.assertEqual(inserted, 2)
        self.store.insert_boards(["9"], run_key="other")
        self.assertEqual(self.store.count(), 3)
        self.assertEqual(self.store.count("2_1_2_"), 2)

        frame = self.store.fetch("2_1_2_")
        self.assertEqual(frame["board"].tolist(), ["1221", "2112"])
        self.assertEqual(self.store.fetch("2_1_2_", limit=1)["board"].tolist(), ["1221"])

    def test_empty_chunk_is_noop(self) -> None:
        self.assertEqual(self.store.insert_boards([], run_key="x"), 0)
        self.assertEqual(self.store.count(), 0)

    def test_load_boards_parses_rows(self) -> None:
        self.store.insert_boards(["1221", "2112"], run_key="2_1_2_")
        self.assertEqual(
            self.store.load_boards("2_1_2_", 2, 2),
            [BOARD, ((2, 1), (1, 2))],
        )
        self.assertEqual(self.store.load_boards("2_1_2_", 2, 2, limit=1), [BOARD])

    def test_delete_run_leaves_other_runs(self) -> None:
        self.store.insert_boards(["1221", "2112"], run_key="2_1_2_")
        self.store.insert_boards(["9"], run_key="other")
        self.assertEqual(self.store.delete_run("2_1_2_"), 2)
        self.assertEqual(self.store.count("2_1_2_"), 0)
        self.assertEqual(self.store.count("other"), 1)
        self.assertEqual(self.store.delete_run("2_1_2_"), 0)


class BoardPersisterTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        root = Path(self._tmp.name)
        self.cache = BoardCache(root / "cache")
        self.store = BoardStore(root / "boards.sqlite3")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_order_survives_partial_last_chunk(self) -> None:
        config = GeneratorConfig(size=4, box_size=2, time_budget_ms=None)
        generator = BoardGenerator(config)
        persister = BoardPersister(self.cache, self.store, max_value=4, chunk_size=100)
        prefix = config.cache_prefix()

        staged_progress = []
        total = persister.stage(generator.boards(), prefix, staged_progress.append)
        self.assertEqual(total, 288)
        self.assertEqual(staged_progress[-1], 288)

        saved_progress = []
        saved = persister.flush(prefix, total, saved_progress.append)
        self.assertEqual(saved, 288)
        self.assertEqual(saved_progress, [100, 200, 288])

        expected = [serialize_board(board, 4) for board in generator.boards()]
        self.assertEqual(self.store.fetch(prefix)["board"].tolist(), expected)
        self.assertEqual(list(self.cache.cache_dir.glob("*.json")), [])

    def test_failed_insert_keeps_unsaved_chunks_staged(self) -> None:
        config = GeneratorConfig(size=4, box_size=2, time_budget_ms=None)
        generator = BoardGenerator(config)
        prefix = config.cache_prefix()
        failing = FailingStore(self.store.db_path, fail_on_call=2)
        persister = BoardPersister(self.cache, failing, max_value=4, chunk_size=2)
        total = persister.stage(generator.boards(), prefix)

        with self.assertRaises(BoardStoreError):
            persister.flush(prefix, total)

        self.assertEqual(self.store.count(prefix), 2)
        self.assertFalse(self.cache.has(f"{prefix}0"))
        self.assertTrue(self.cache.has(f"{prefix}2"))
        self.assertEqual(len(list(self.cache.cache_dir.glob("*.json"))), 286)

        # A rerun starts the run over without duplicating the committed chunk.
        self.store.delete_run(prefix)
        persister = BoardPersister(self.cache, self.store, max_value=4, chunk_size=2)
        self.cache.clear(prefix)
        total = persister.stage(generator.boards(), prefix)
        self.assertEqual(persister.flush(prefix, total), 288)
        self.assertEqual(self.store.count(prefix), 288)

    def test_missing_staged_board_raises(self) -> None:
        persister = BoardPersister(self.cache, self.store, max_value=2, chunk_size=10)
        self.cache.put("run_0", BOARD)
        with self.assertRaises(BoardCacheError):
            persister.flush("run_", 2)

    def test_chunk_size_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            BoardPersister(self.cache, self.store, max_value=2, chunk_size=0)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
