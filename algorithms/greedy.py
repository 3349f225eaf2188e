"""
greedy.py — Greedy Stepper (value/weight ratio heuristic)
=========================================================
Replays `solve_greedy` one micro-step per Advance so the UI can show
every decision:

    NOT_STARTED → EVALUATING → ACCEPTED | REJECTED → EVALUATING → … → FINISHED

  1. Reset sorts the items by ratio once and parks the cursor at -1.
  2. The first Advance moves onto item 0 and announces it (EVALUATING).
  3. The next Advance decides: the item fits → ACCEPTED (capacity and
     value updated right here), otherwise → REJECTED.
  4. The next Advance moves to the following item, or FINISHES.

Advancing a finished state is a no-op.  An empty item list finishes on
the first Advance.

`advance_greedy` mutates the state in place and also returns it, so a
driver can use it either as `state = advance_greedy(state)` or as a
plain call.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from knapsack import Item, check_config
from algorithms.reference import ratio_order
from algorithms.result import SolveResult
from algorithms.step import Step


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def greedy_knapsack(items, capacity):",              # 0
    "    items ← sort by value/weight, descending",       # 1
    "    total ← 0;  chosen ← []",                        # 2
    "    for item in items:",                             # 3
    "        if item.weight <= capacity:",                # 4
    "            chosen.append(item)",                    # 5
    "            total += item.value",                    # 6
    "            capacity -= item.weight",                # 7
    "    return total, chosen",                           # 8
]


class GreedyPhase(Enum):
    NOT_STARTED = "not-started"
    EVALUATING  = "evaluating"
    ACCEPTED    = "accepted"
    REJECTED    = "rejected"
    FINISHED    = "finished"


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------
@dataclass
class GreedyState:
    """
    Attributes:
        order              : Items sorted by ratio (stable, descending).
        capacity           : Capacity this run was reset with.
        cursor             : Index into `order`; -1 before the first Advance,
                             len(order) once finished.
        phase              : Current GreedyPhase.
        remaining_capacity : Capacity left after the accepted items.
        accumulated_value  : Value of the accepted items.
        accepted           : Accepted items, in acceptance order.
        step_number        : Advances that changed the state.
        explanation        : Status-bar text for the last transition.
        pseudocode_line    : PSEUDOCODE line for the last transition.
    """

    order:              Tuple[Item, ...]
    capacity:           int
    cursor:             int         = -1
    phase:              GreedyPhase = GreedyPhase.NOT_STARTED
    remaining_capacity: int         = 0
    accumulated_value:  int         = 0
    accepted:           List[Item]  = field(default_factory=list)
    step_number:        int         = 0
    explanation:        str         = "Ready to start"
    pseudocode_line:    int         = 1

    @property
    def finished(self) -> bool:
        return self.phase is GreedyPhase.FINISHED

    @property
    def current_item(self) -> Optional[Item]:
        if 0 <= self.cursor < len(self.order):
            return self.order[self.cursor]
        return None

    @property
    def used_capacity(self) -> int:
        return self.capacity - self.remaining_capacity

    def result(self) -> SolveResult:
        return SolveResult(
            total_value=self.accumulated_value,
            total_weight=self.used_capacity,
            selected_ids=tuple(item.id for item in self.accepted),
        )


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------
def reset_greedy(items: Sequence[Item], capacity: int) -> GreedyState:
    check_config(items, capacity)
    return GreedyState(
        order=tuple(ratio_order(items)),
        capacity=capacity,
        remaining_capacity=capacity,
    )


def advance_greedy(state: GreedyState) -> GreedyState:
    if state.finished:
        return state

    if state.cursor == -1:
        if state.order:
            _evaluate(state, 0)
        else:
            _finish(state)

    elif state.phase is GreedyPhase.EVALUATING:
        item = state.order[state.cursor]
        if item.weight <= state.remaining_capacity:
            state.phase = GreedyPhase.ACCEPTED
            state.accepted.append(item)
            state.remaining_capacity -= item.weight
            state.accumulated_value += item.value
            state.pseudocode_line = 5
            state.explanation = f"Taking {item.name} (Fits in capacity)"
        else:
            state.phase = GreedyPhase.REJECTED
            state.pseudocode_line = 4
            state.explanation = (
                f"Skipping {item.name} (Too heavy: {item.weight} > {state.remaining_capacity})"
            )

    else:
        # ACCEPTED / REJECTED: move on
        if state.cursor + 1 < len(state.order):
            _evaluate(state, state.cursor + 1)
        else:
            _finish(state)

    state.step_number += 1
    return state


def _evaluate(state: GreedyState, idx: int) -> None:
    item = state.order[idx]
    state.cursor = idx
    state.phase = GreedyPhase.EVALUATING
    state.pseudocode_line = 3
    state.explanation = f"Evaluating {item.name} (Ratio: {item.ratio:.2f})"


def _finish(state: GreedyState) -> None:
    state.cursor = len(state.order)
    state.phase = GreedyPhase.FINISHED
    state.pseudocode_line = 8
    state.explanation = "Algorithm Finished"


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------
def snapshot_greedy(state: GreedyState) -> Step:
    accepted_ids = {item.id for item in state.accepted}
    statuses = []
    for idx, item in enumerate(state.order):
        if idx == state.cursor:
            statuses.append(state.phase.value)
        elif idx < state.cursor:
            statuses.append("accepted" if item.id in accepted_ids else "rejected")
        else:
            statuses.append("pending")

    return Step(
        step_number=state.step_number,
        algo_key="greedy",
        phase=state.phase.value,
        pseudocode_line=state.pseudocode_line,
        explanation=state.explanation,
        overlay={
            "order":    [item.to_dict() for item in state.order],
            "ratios":   [round(item.ratio, 2) for item in state.order],
            "statuses": statuses,
            "cursor":   state.cursor,
            "accepted": [item.id for item in state.accepted],
        },
        metrics={
            "value":     state.accumulated_value,
            "weight":    state.used_capacity,
            "remaining": state.remaining_capacity,
            "capacity":  state.capacity,
        },
        is_final=state.finished,
    )
