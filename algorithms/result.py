"""
result.py — Solver Outcome
==========================
What both the reference solvers and a finished stepper report.
"""

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class SolveResult:
    """
    Attributes:
        total_value  : Sum of values of the selected items.
        total_weight : Sum of weights of the selected items (<= capacity).
        selected_ids : Item ids in the order the algorithm chose them.
    """

    total_value:  int             = 0
    total_weight: int             = 0
    selected_ids: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "total_value":  self.total_value,
            "total_weight": self.total_weight,
            "selected_ids": list(self.selected_ids),
        }
