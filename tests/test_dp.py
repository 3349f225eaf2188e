# tests/test_dp.py

import unittest

from algorithms import (
    CellStatus, DPPhase, DPTable, advance_dp, build_dp_table, reset_dp, snapshot_dp,
)
from tests.helpers import TRAP_CAPACITY, TRAP_ITEMS, make_items


def run_to_end(state):
    while not state.finished:
        advance_dp(state)
    return state


class TestDPTable(unittest.TestCase):

    def test_row_zero_filled_at_creation(self):
        table = DPTable(3, 4)
        for c in range(4):
            self.assertTrue(table.is_filled(0, c))
            self.assertEqual(table.value(0, c), 0)
        self.assertFalse(table.is_filled(1, 0))

    def test_cells_are_write_once(self):
        table = DPTable(2, 2)
        table.fill(1, 1, 7)
        with self.assertRaises(RuntimeError):
            table.fill(1, 1, 8)
        self.assertEqual(table.value(1, 1), 7)

    def test_mark_keeps_value(self):
        table = DPTable(2, 2)
        table.fill(1, 0, 3)
        table.mark(1, 0, CellStatus.SELECTED)
        self.assertEqual(table.value(1, 0), 3)
        with self.assertRaises(RuntimeError):
            table.mark(1, 1, CellStatus.ON_BACKTRACK_PATH)

    def test_out_of_bounds(self):
        table = DPTable(2, 2)
        with self.assertRaises(IndexError):
            table.cell(-1, 0)
        with self.assertRaises(IndexError):
            table.cell(0, 2)

    def test_snapshot_hides_pending_values(self):
        grid = DPTable(2, 2).snapshot()
        self.assertEqual(grid[0][0], {"value": 0, "status": "filled"})
        self.assertEqual(grid[1][1], {"value": None, "status": "pending"})


class TestDPStepper(unittest.TestCase):

    def test_fill_order_is_row_major(self):
        """Every cell of rows 1..N is computed once, left to right, top to bottom"""
        state = reset_dp(TRAP_ITEMS, TRAP_CAPACITY)
        visited = []
        while state.phase is DPPhase.FILLING:
            advance_dp(state)
            visited.append(state.last_cell)
        expected = [(r, c) for r in range(1, 4) for c in range(TRAP_CAPACITY + 1)]
        self.assertEqual(visited, expected)
        self.assertEqual(state.cells_filled, len(expected))

    def test_switches_to_backtracking_on_last_fill(self):
        state = reset_dp(TRAP_ITEMS, TRAP_CAPACITY)
        for _ in range(3 * (TRAP_CAPACITY + 1)):
            self.assertIs(state.phase, DPPhase.FILLING)
            advance_dp(state)
        self.assertIs(state.phase, DPPhase.BACKTRACKING)
        self.assertEqual(state.bt_cursor, (3, TRAP_CAPACITY))
        self.assertIn("Starting backtracking path", state.explanation)

    def test_table_matches_batch_table(self):
        state = run_to_end(reset_dp(TRAP_ITEMS, TRAP_CAPACITY))
        expected = build_dp_table(TRAP_ITEMS, TRAP_CAPACITY)
        actual = [[state.table.value(r, c) for c in range(TRAP_CAPACITY + 1)] for r in range(4)]
        self.assertEqual(actual, expected)

    def test_backtrack_statuses(self):
        state = run_to_end(reset_dp(TRAP_ITEMS, TRAP_CAPACITY))
        self.assertIs(state.table.status(3, 10), CellStatus.SELECTED)
        self.assertIs(state.table.status(2, 5), CellStatus.SELECTED)
        self.assertIs(state.table.status(1, 0), CellStatus.ON_BACKTRACK_PATH)
        self.assertEqual(state.selected, ["c", "b"])
        self.assertEqual(state.explanation, "Optimal Solution Found!")

    def test_step_count(self):
        """N·(C+1) fills, N backtrack rows, one finishing advance"""
        state = run_to_end(reset_dp(TRAP_ITEMS, TRAP_CAPACITY))
        self.assertEqual(state.step_number, 3 * 11 + 3 + 1)

    def test_advance_after_finish_is_noop(self):
        state = run_to_end(reset_dp(TRAP_ITEMS, TRAP_CAPACITY))
        before = snapshot_dp(state).to_dict()
        grid = state.table.snapshot()
        result = state.result()
        for _ in range(3):
            self.assertIs(advance_dp(state), state)
        self.assertEqual(snapshot_dp(state).to_dict(), before)
        self.assertEqual(state.table.snapshot(), grid)
        self.assertEqual(
            (state.explanation, state.pseudocode_line, state.last_cell, state.bt_row, state.bt_col),
            ("Optimal Solution Found!", 13, None, 0, 0),
        )
        self.assertEqual(state.result(), result)

    def test_no_items(self):
        state = reset_dp([], 4)
        self.assertIs(state.phase, DPPhase.BACKTRACKING)
        advance_dp(state)
        self.assertTrue(state.finished)
        self.assertEqual(state.result().total_value, 0)

    def test_zero_capacity(self):
        state = run_to_end(reset_dp(make_items(("a", 1, 5), ("b", 2, 3)), 0))
        self.assertEqual(state.step_number, 2 + 2 + 1)
        self.assertEqual(state.result().selected_ids, ())

    def test_copy_from_above_explanation(self):
        state = reset_dp(make_items(("heavy", 3, 9)), 3)
        advance_dp(state)
        self.assertEqual(state.explanation, "Item heavy (W:3) > Cap 0. Copying from above.")
        self.assertEqual(state.pseudocode_line, 5)
        for _ in range(3):
            advance_dp(state)
        self.assertTrue(state.explanation.startswith("Max(Skip: 0, Take: 9) = 9"))

    def test_snapshot(self):
        state = reset_dp(TRAP_ITEMS, TRAP_CAPACITY)
        advance_dp(state)
        step = snapshot_dp(state)
        self.assertEqual(step.algo_key, "dp")
        self.assertEqual(step.overlay["cursor"], [1, 1])
        self.assertEqual(step.overlay["row_labels"], ["Ø", "a", "b", "c"])
        self.assertEqual(step.metrics["cells_filled"], 1)
        self.assertEqual(step.metrics["cells_total"], 33)


if __name__ == "__main__":
    unittest.main()
