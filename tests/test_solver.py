import unittest

from sudokugen.engine.enumerator import BoardEnumerator
from sudokugen.engine.geometry import GeometryIndex
from sudokugen.engine.solver import count_boards
from sudokugen.engine.validator import BoardValidator


class CpSatCountTests(unittest.TestCase):
    def test_count_matches_enumerator(self) -> None:
        for size, box_size, max_value in ((4, 2, 4), (2, 1, 3)):
            with self.subTest(size=size, box_size=box_size, max_value=max_value):
                geometry = GeometryIndex(size, box_size)
                result = count_boards(geometry, max_value, timeout=60.0)
                expected = sum(1 for _ in BoardEnumerator(geometry, range(1, max_value + 1)))
                self.assertTrue(result.complete)
                self.assertEqual(result.count, expected)

    def test_collected_boards_match_enumerated_set(self) -> None:
        geometry = GeometryIndex(4, 2)
        result = count_boards(geometry, 4, collect=True, timeout=60.0)
        self.assertEqual(set(result.boards), set(BoardEnumerator(geometry, (1, 2, 3, 4))))

    def test_limit_stops_early(self) -> None:
        result = count_boards(GeometryIndex(4, 2), 4, limit=5, collect=True)
        self.assertEqual(result.count, 5)
        self.assertFalse(result.complete)
        validator = BoardValidator(4, 2, 4)
        for board in result.boards:
            self.assertTrue(validator.validate(board).ok)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
