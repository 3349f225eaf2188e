"""
algorithms/__init__.py — Algorithm Registry
===========================================
Single source of truth for the two knapsack strategies.

    from algorithms import REGISTRY, get_algorithm, is_finished

REGISTRY is a dict:
    {
        "greedy": AlgoInfo(key, label, reset, advance, solve, snapshot, …),
        "dp":     AlgoInfo(…),
    }

AlgoInfo is what the engine drives: `reset(items, capacity)` builds a
fresh state, `advance(state)` performs one step, `snapshot(state)`
renders a Step, and `solve(items, capacity)` is the batch answer the
finished state must equal.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from algorithms.result    import SolveResult
from algorithms.step      import Step
from algorithms.reference import solve_greedy, solve_dp, ratio_order, build_dp_table
from algorithms.greedy    import (
    GreedyPhase, GreedyState, reset_greedy, advance_greedy, snapshot_greedy,
    PSEUDOCODE as _greedy_pc,
)
from algorithms.dp        import (
    CellStatus, DPCell, DPTable, DPPhase, DPState, reset_dp, advance_dp, snapshot_dp,
    PSEUDOCODE as _dp_pc,
)


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                   # registry key, e.g. "dp"
    label:            str                   # human label
    reset:            Callable              # (items, capacity) -> state
    advance:          Callable              # (state) -> state
    solve:            Callable              # (items, capacity) -> SolveResult
    snapshot:         Callable              # (state) -> Step
    pseudocode:       List[str]             # lines for the code panel
    tags:             List[str] = field(default_factory=list)
    optimal:          bool      = False     # guaranteed to find the maximum?
    complexity_time:  str       = ""
    complexity_space: str       = ""
    description:      str       = ""


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "greedy": AlgoInfo(
        key="greedy", label="Greedy Algorithm",
        reset=reset_greedy, advance=advance_greedy, solve=solve_greedy,
        snapshot=snapshot_greedy, pseudocode=_greedy_pc,
        tags=["heuristic", "suboptimal"],
        complexity_time="O(N log N)", complexity_space="O(N)",
        description="Picks items with the highest value-to-weight ratio first. Fast, but often suboptimal.",
    ),

    "dp": AlgoInfo(
        key="dp", label="Dynamic Programming",
        reset=reset_dp, advance=advance_dp, solve=solve_dp,
        snapshot=snapshot_dp, pseudocode=_dp_pc,
        tags=["exact", "table"],
        optimal=True,
        complexity_time="O(N × Capacity)", complexity_space="O(N × Capacity)",
        description="Builds a 2D table over every item prefix and capacity. Slower, but always optimal.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def is_finished(state) -> bool:
    """Terminal check for either stepper state."""
    return state.finished


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "is_finished",
    "SolveResult",
    "Step",
    "solve_greedy",
    "solve_dp",
    "ratio_order",
    "build_dp_table",
    "GreedyPhase",
    "GreedyState",
    "reset_greedy",
    "advance_greedy",
    "snapshot_greedy",
    "CellStatus",
    "DPCell",
    "DPTable",
    "DPPhase",
    "DPState",
    "reset_dp",
    "advance_dp",
    "snapshot_dp",
]
