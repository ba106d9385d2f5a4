import unittest

from sudokugen.core.exceptions import InvalidGeometry
from sudokugen.core.models import CellCoords, empty_board
from sudokugen.engine.candidates import legal_values, remaining_values
from sudokugen.engine.geometry import GeometryIndex, build_geometry


class GeometryTests(unittest.TestCase):
    def test_entries_follow_row_major_order(self) -> None:
        entries = build_geometry(4, 2)
        self.assertEqual(len(entries), 16)
        self.assertEqual(entries[0], CellCoords(0, 0, 0, 0))
        self.assertEqual(entries[5], CellCoords(1, 1, 0, 0))
        self.assertEqual(entries[11], CellCoords(2, 3, 2, 2))
        self.assertEqual(entries[15], CellCoords(3, 3, 2, 2))

    def test_box_origin_for_nine_by_nine(self) -> None:
        index = GeometryIndex(9, 3)
        self.assertEqual(index.last, 80)
        self.assertEqual(index[4 * 9 + 7], CellCoords(4, 7, 3, 6))
        self.assertEqual(len(list(index)), 81)

    def test_rejects_box_that_does_not_tile(self) -> None:
        with self.assertRaises(InvalidGeometry) as ctx:
            build_geometry(6, 4)
        self.assertIn("Size should be a multiple of box size.", ctx.exception.messages)

    def test_rejects_non_positive_sizes(self) -> None:
        with self.assertRaises(InvalidGeometry):
            build_geometry(0, 2)
        with self.assertRaises(InvalidGeometry):
            build_geometry(4, 0)

    def test_box_larger_than_grid_reports_both_rules(self) -> None:
        with self.assertRaises(InvalidGeometry) as ctx:
            GeometryIndex(2, 4)
        self.assertEqual(len(ctx.exception.messages), 2)


class CandidateTests(unittest.TestCase):
    def setUp(self) -> None:
        self.geometry = GeometryIndex(4, 2)
        self.alphabet = (1, 2, 3, 4)

    def test_empty_board_allows_whole_alphabet(self) -> None:
        board = empty_board(4)
        self.assertEqual(legal_values(board, self.geometry[0], self.alphabet, 2), [1, 2, 3, 4])

    def test_row_column_and_box_are_excluded(self) -> None:
        board = [
            [1, 2, 3, 4],
            [3, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ]
        # (1,1): row has 3, column has 2, box has 1 and 2.
        self.assertEqual(legal_values(board, self.geometry[5], self.alphabet, 2), [4])

    def test_cells_after_target_are_ignored(self) -> None:
        board = [
            [0, 4, 4, 4],
            [4, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ]
        self.assertEqual(legal_values(board, self.geometry[0], self.alphabet, 2), [1, 2, 3, 4])

    def test_dead_end_returns_empty_list(self) -> None:
        board = [
            [1, 2, 0, 0],
            [3, 4, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ]
        # (2,0) sees 1 and 3 in its column.
        self.assertEqual(legal_values(board, self.geometry[8], self.alphabet, 2), [2, 4])
        self.assertEqual(legal_values(board, self.geometry[8], (1, 3), 2), [])

    def test_wider_alphabet_keeps_unused_values(self) -> None:
        board = empty_board(4)
        board[0][0] = 1
        coords = self.geometry[1]
        self.assertEqual(legal_values(board, coords, (1, 2, 3, 4, 5), 2), [2, 3, 4, 5])

    def test_remaining_values_skip_already_tried(self) -> None:
        board = empty_board(4)
        board[0][0] = 1
        board[0][1] = 3
        self.assertEqual(remaining_values(board, self.geometry[1], self.alphabet, 2), [4])

    def test_remaining_values_on_empty_cell_match_legal_values(self) -> None:
        board = empty_board(4)
        board[0][0] = 2
        coords = self.geometry[1]
        self.assertEqual(
            remaining_values(board, coords, self.alphabet, 2),
            legal_values(board, coords, self.alphabet, 2),
        )


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
