"""
dp.py — Dynamic Programming Stepper (table fill + backtrack)
============================================================
Replays `solve_dp` one cell per Advance, then reconstructs the chosen
subset one row per Advance:

    FILLING ──(row > N)──→ BACKTRACKING ──(bt_row == 0)──→ FINISHED

Table layout:
  - (N+1) × (C+1) grid of DPCells.  Row 0 is the "no items" base case
    and is FILLED with 0 at reset.  Row i uses item i-1.
  - The fill cursor starts at (1, 0) and walks row-major.  Every cell
    in rows 1..N is visited exactly once before backtracking begins.
  - Backtracking starts at (N, C).  A cell whose value differs from the
    cell above is SELECTED (item taken, column moves left by its weight);
    an equal value is ON_BACKTRACK_PATH (item skipped).  Ties therefore
    always read as "not selected", the same rule `solve_dp` applies.

Design decisions:
  - DPTable is an arena: cells are addressed by (row, col) only, and
    "has this cell been computed" is the explicit `status` field.
  - Values are write-once.  Backtracking only changes status tags.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from knapsack import Item, check_config
from algorithms.reference import dp_cell, was_selected
from algorithms.result import SolveResult
from algorithms.step import Step


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def dp_knapsack(items, capacity):",                         # 0
    "    dp ← (n+1) × (capacity+1) table, row 0 = 0",            # 1
    "    for i in 1 … n:",                                       # 2
    "        for c in 0 … capacity:",                            # 3
    "            if weight[i] > c:",                             # 4
    "                dp[i][c] = dp[i-1][c]",                     # 5
    "            else:",                                         # 6
    "                dp[i][c] = max(dp[i-1][c],",                # 7
    "                               value[i] + dp[i-1][c-w[i]])",  # 8
    "    c ← capacity",                                          # 9
    "    for i in n … 1:",                                       # 10
    "        if dp[i][c] ≠ dp[i-1][c]:",                         # 11
    "            chosen.append(item i);  c -= weight[i]",        # 12
    "    return dp[n][capacity], chosen",                        # 13
]


class CellStatus(Enum):
    PENDING           = "pending"
    FILLED            = "filled"
    ON_BACKTRACK_PATH = "on-backtrack-path"
    SELECTED          = "selected"


class DPPhase(Enum):
    FILLING      = "filling"
    BACKTRACKING = "backtracking"
    FINISHED     = "finished"


@dataclass
class DPCell:
    value:  int        = 0
    status: CellStatus = CellStatus.PENDING


# ---------------------------------------------------------------------------
# Table
# ---------------------------------------------------------------------------
class DPTable:
    """
    Attributes:
        rows : N + 1
        cols : C + 1
    """

    def __init__(self, rows: int, cols: int):
        self.rows = rows
        self.cols = cols
        self._cells: List[List[DPCell]] = [[DPCell() for _ in range(cols)] for _ in range(rows)]
        for cell in self._cells[0]:
            cell.status = CellStatus.FILLED

    def cell(self, row: int, col: int) -> DPCell:
        # no negative-index wraparound
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"Cell ({row}, {col}) outside {self.rows}×{self.cols} table")
        return self._cells[row][col]

    def value(self, row: int, col: int) -> int:
        return self.cell(row, col).value

    def status(self, row: int, col: int) -> CellStatus:
        return self.cell(row, col).status

    def is_filled(self, row: int, col: int) -> bool:
        return self.cell(row, col).status is not CellStatus.PENDING

    def fill(self, row: int, col: int, value: int) -> None:
        cell = self.cell(row, col)
        if cell.status is not CellStatus.PENDING:
            raise RuntimeError(f"Cell ({row}, {col}) is already filled")
        cell.value = value
        cell.status = CellStatus.FILLED

    def mark(self, row: int, col: int, status: CellStatus) -> None:
        """Re-tag a computed cell.  The value is left untouched."""
        cell = self.cell(row, col)
        if cell.status is CellStatus.PENDING:
            raise RuntimeError(f"Cell ({row}, {col}) has not been filled yet")
        cell.status = status

    def snapshot(self) -> List[List[Dict[str, Any]]]:
        return [
            [
                {
                    "value":  None if c.status is CellStatus.PENDING else c.value,
                    "status": c.status.value,
                }
                for c in row
            ]
            for row in self._cells
        ]


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------
@dataclass
class DPState:
    """
    Attributes:
        items           : Items in input order (row i ↔ items[i-1]).
        capacity        : C.
        table           : The DPTable being built.
        row, col        : Fill cursor (next cell to compute).
        phase           : Current DPPhase.
        bt_row, bt_col  : Backtrack cursor, starts at (N, C).
        selected        : Chosen item ids in backtrack order.
        selected_weight : Total weight of `selected`.
        cells_filled    : Cells computed so far (row 0 excluded).
        last_cell       : Cell touched by the last Advance, if any.
    """

    items:           Tuple[Item, ...]
    capacity:        int
    table:           DPTable
    row:             int               = 1
    col:             int               = 0
    phase:           DPPhase           = DPPhase.FILLING
    bt_row:          int               = 0
    bt_col:          int               = 0
    selected:        List[str]         = field(default_factory=list)
    selected_weight: int               = 0
    cells_filled:    int               = 0
    last_cell:       Optional[Tuple[int, int]] = None
    step_number:     int               = 0
    explanation:     str               = "Ready to start"
    pseudocode_line: int               = 1

    @property
    def finished(self) -> bool:
        return self.phase is DPPhase.FINISHED

    @property
    def n(self) -> int:
        return len(self.items)

    @property
    def fill_cursor(self) -> Optional[Tuple[int, int]]:
        return (self.row, self.col) if self.phase is DPPhase.FILLING else None

    @property
    def bt_cursor(self) -> Optional[Tuple[int, int]]:
        return (self.bt_row, self.bt_col) if self.phase is DPPhase.BACKTRACKING else None

    @property
    def best_value(self) -> int:
        """dp[N][C] once computed, else 0."""
        if self.table.is_filled(self.n, self.capacity):
            return self.table.value(self.n, self.capacity)
        return 0

    def result(self) -> SolveResult:
        return SolveResult(
            total_value=self.best_value,
            total_weight=self.selected_weight,
            selected_ids=tuple(self.selected),
        )


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------
def reset_dp(items: Sequence[Item], capacity: int) -> DPState:
    check_config(items, capacity)
    n = len(items)
    state = DPState(
        items=tuple(items),
        capacity=capacity,
        table=DPTable(n + 1, capacity + 1),
        bt_row=n,
        bt_col=capacity,
    )
    if n == 0:
        # nothing to fill: the first Advance finishes
        state.phase = DPPhase.BACKTRACKING
        state.explanation = "No items: the table is just the base row."
    return state


def advance_dp(state: DPState) -> DPState:
    if state.phase is DPPhase.FILLING:
        _fill_next(state)
    elif state.phase is DPPhase.BACKTRACKING:
        _backtrack_next(state)
    else:
        return state
    state.step_number += 1
    return state


def _fill_next(state: DPState) -> None:
    row, col = state.row, state.col
    item = state.items[row - 1]
    table = state.table

    def above(c: int) -> int:
        return table.value(row - 1, c)

    value = dp_cell(item, col, above)
    table.fill(row, col, value)
    state.cells_filled += 1
    state.last_cell = (row, col)

    if item.weight > col:
        state.pseudocode_line = 5
        state.explanation = (
            f"Item {item.name} (W:{item.weight}) > Cap {col}. Copying from above."
        )
    else:
        take = item.value + above(col - item.weight)
        state.pseudocode_line = 7
        state.explanation = f"Max(Skip: {above(col)}, Take: {take}) = {value}"

    if col < state.capacity:
        state.col += 1
    else:
        state.col = 0
        state.row += 1

    if state.row > state.n:
        state.phase = DPPhase.BACKTRACKING
        state.explanation += " Table filled. Starting backtracking path..."


def _backtrack_next(state: DPState) -> None:
    if state.bt_row == 0:
        state.phase = DPPhase.FINISHED
        state.last_cell = None
        state.pseudocode_line = 13
        state.explanation = "Optimal Solution Found!"
        return

    row, col = state.bt_row, state.bt_col
    item = state.items[row - 1]
    current = state.table.value(row, col)
    above = state.table.value(row - 1, col)
    state.last_cell = (row, col)

    if was_selected(current, above):
        state.table.mark(row, col, CellStatus.SELECTED)
        state.selected.append(item.id)
        state.selected_weight += item.weight
        state.bt_col -= item.weight
        state.pseudocode_line = 12
        state.explanation = f"Value changed from row above. Item {item.name} was selected."
    else:
        state.table.mark(row, col, CellStatus.ON_BACKTRACK_PATH)
        state.pseudocode_line = 11
        state.explanation = f"Value same as above. Item {item.name} skipped."
    state.bt_row -= 1


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------
def snapshot_dp(state: DPState) -> Step:
    return Step(
        step_number=state.step_number,
        algo_key="dp",
        phase=state.phase.value,
        pseudocode_line=state.pseudocode_line,
        explanation=state.explanation,
        overlay={
            "grid":       state.table.snapshot(),
            "row_labels": ["Ø"] + [item.name for item in state.items],
            "cursor":     list(state.fill_cursor) if state.fill_cursor else None,
            "bt_cursor":  list(state.bt_cursor) if state.bt_cursor else None,
            "last_cell":  list(state.last_cell) if state.last_cell else None,
        },
        metrics={
            "value":        state.best_value,
            "weight":       state.selected_weight,
            "cells_filled": state.cells_filled,
            "cells_total":  state.n * (state.capacity + 1),
            "capacity":     state.capacity,
        },
        is_final=state.finished,
    )
