"""
reference.py — Batch Knapsack Solvers
=====================================
One-shot Greedy and DP solvers.  These are the ground truth: the
steppers in greedy.py / dp.py replay the same decisions one frame at
a time and must finish on exactly the SolveResult computed here.

The small helpers (`ratio_order`, `dp_cell`, `was_selected`) are shared
with the steppers so a stepper can never compute a cell or a decision
differently from the batch version.
"""

from typing import Callable, List, Sequence

from knapsack import Item, check_config
from algorithms.result import SolveResult


# ---------------------------------------------------------------------------
# Shared decision rules
# ---------------------------------------------------------------------------
def ratio_order(items: Sequence[Item]) -> List[Item]:
    """Items by value/weight, highest first.  Equal ratios keep input order."""
    # sorted() is stable with reverse=True as well
    return sorted(items, key=lambda item: item.ratio, reverse=True)


def dp_cell(item: Item, col: int, above: Callable[[int], int]) -> int:
    """
    dp[i][col] for the i-th item, where above(c) returns dp[i-1][c].

        weight > col  →  dp[i-1][col]
        otherwise     →  max(dp[i-1][col], value + dp[i-1][col - weight])
    """
    skip = above(col)
    if item.weight > col:
        return skip
    return max(skip, item.value + above(col - item.weight))


def was_selected(current: int, above: int) -> bool:
    """Backtracking test.  Equal values mean "not selected"."""
    return current != above


# ---------------------------------------------------------------------------
# Greedy
# ---------------------------------------------------------------------------
def solve_greedy(items: Sequence[Item], capacity: int) -> SolveResult:
    check_config(items, capacity)

    remaining = capacity
    total_value = 0
    selected: List[str] = []

    for item in ratio_order(items):
        if item.weight <= remaining:
            selected.append(item.id)
            total_value += item.value
            remaining -= item.weight

    return SolveResult(
        total_value=total_value,
        total_weight=capacity - remaining,
        selected_ids=tuple(selected),
    )


# ---------------------------------------------------------------------------
# Dynamic Programming
# ---------------------------------------------------------------------------
def build_dp_table(items: Sequence[Item], capacity: int) -> List[List[int]]:
    """The full (N+1) × (C+1) value table.  Row 0 is the no-item base case."""
    check_config(items, capacity)

    table = [[0] * (capacity + 1)]
    for item in items:
        prev = table[-1]
        table.append([dp_cell(item, c, prev.__getitem__) for c in range(capacity + 1)])
    return table


def solve_dp(items: Sequence[Item], capacity: int) -> SolveResult:
    table = build_dp_table(items, capacity)
    n = len(items)

    col = capacity
    total_weight = 0
    selected: List[str] = []

    for row in range(n, 0, -1):
        if was_selected(table[row][col], table[row - 1][col]):
            item = items[row - 1]
            selected.append(item.id)
            col -= item.weight
            total_weight += item.weight

    return SolveResult(
        total_value=table[n][capacity],
        total_weight=total_weight,
        selected_ids=tuple(selected),
    )
