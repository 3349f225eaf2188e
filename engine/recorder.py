"""
recorder.py — Run Recorder & Comparison
=======================================
Records a complete stepper run (every Step), then computes the metrics
the results table needs and checks the run against the batch solver.

Usage:
    rec = Recorder()
    rec.start(algo_key="dp", items=items, capacity=10)
    rec.run_to_completion()          # advances until finished
    metrics = rec.metrics
    rec.export()                     # serialisable snapshot

Comparison:
    compare(greedy_rec, dp_rec)            → ComparisonResult from two runs
    reference_comparison(items, capacity)  → ComparisonResult from the
                                             timed batch solvers only

The Duel reveals `reference_comparison`; `GET /api/trace` records both
steppers headless and serves `export()` of each plus `compare()`.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from algorithms import AlgoInfo, Step, SolveResult, get_algorithm
from engine.stepper import Stepper
from knapsack import Item

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass: one column of the results table
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:              str             = ""
    algo_label:            str             = ""
    total_value:           int             = 0
    total_weight:          int             = 0
    selected_ids:          List[str]       = field(default_factory=list)
    total_steps:           int             = 0     # Advance calls that changed state
    wall_time_ms:          float           = 0.0
    agrees_with_reference: bool            = True

    @classmethod
    def from_result(cls, info: AlgoInfo, result: SolveResult, wall_ms: float = 0.0) -> "RunMetrics":
        return cls(
            algo_key=info.key,
            algo_label=info.label,
            total_value=result.total_value,
            total_weight=result.total_weight,
            selected_ids=list(result.selected_ids),
            wall_time_ms=round(wall_ms, 3),
        )

    def as_result(self) -> SolveResult:
        return SolveResult(
            total_value=self.total_value,
            total_weight=self.total_weight,
            selected_ids=tuple(self.selected_ids),
        )


# ---------------------------------------------------------------------------
# ComparisonResult: Greedy vs DP
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    greedy: RunMetrics = field(default_factory=RunMetrics)
    dp:     RunMetrics = field(default_factory=RunMetrics)

    @property
    def optimality_gap(self) -> int:
        return self.dp.total_value - self.greedy.total_value

    @property
    def greedy_optimal(self) -> bool:
        return self.optimality_gap == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "greedy":         self.greedy.__dict__,
            "dp":             self.dp.__dict__,
            "optimality_gap": self.optimality_gap,
            "greedy_optimal": self.greedy_optimal,
        }


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps   : Every Step from the run, starting with the reset frame.
        metrics : Computed RunMetrics (available after run_to_completion).
        stepper : The underlying Stepper.
    """

    def __init__(self):
        self.steps:   List[Step]           = []
        self.metrics: Optional[RunMetrics] = None
        self.stepper: Optional[Stepper]    = None

        self._algo_info: Optional[AlgoInfo] = None
        self._items:     List[Item]         = []
        self._capacity:  int                = 0

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, algo_key: str, items: Sequence[Item], capacity: int) -> None:
        """Initialise a stepper for this run; every frame is recorded."""
        info = get_algorithm(algo_key)
        if info is None:
            raise ValueError(f"Unknown algorithm: {algo_key}")

        self._algo_info = info
        self._items     = list(items)
        self._capacity  = capacity
        self.steps      = []
        self.metrics    = None

        self.stepper = Stepper(info, on_step=self.record_step)
        self.stepper.start(self._items, capacity)

    def run_to_completion(self) -> RunMetrics:
        """Advance until finished, then compute metrics."""
        if self.stepper is None:
            raise RuntimeError("Call start() first.")

        start = time.perf_counter()
        self.stepper.jump_to_end()
        wall_ms = (time.perf_counter() - start) * 1000

        self.metrics = self._compute_metrics(wall_ms)
        return self.metrics

    def record_step(self, step: Step) -> None:
        self.steps.append(step)

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algo_key": self._algo_info.key if self._algo_info else "",
            "capacity": self._capacity,
            "items":    [i.to_dict() for i in self._items],
            "metrics":  self.metrics.__dict__ if self.metrics else {},
            "steps":    [s.to_dict() for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info = self._algo_info
        result = self.stepper.result
        reference = info.solve(self._items, self._capacity)

        agrees = result == reference
        if not agrees:
            logger.error(f"{info.key}: stepper finished on {result}, reference is {reference}")

        metrics = RunMetrics.from_result(info, result, wall_ms)
        metrics.total_steps = self.stepper.steps_taken
        metrics.agrees_with_reference = agrees
        return metrics


# ---------------------------------------------------------------------------
# Comparison helpers
# ---------------------------------------------------------------------------
def compare(greedy: Recorder, dp: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    return ComparisonResult(
        greedy=greedy.metrics or RunMetrics(),
        dp=dp.metrics or RunMetrics(),
    )


def reference_comparison(items: Sequence[Item], capacity: int) -> ComparisonResult:
    """Run both batch solvers, timing each."""
    columns = {}
    for key in ("greedy", "dp"):
        info = get_algorithm(key)
        start = time.perf_counter()
        result = info.solve(items, capacity)
        wall_ms = (time.perf_counter() - start) * 1000
        columns[key] = RunMetrics.from_result(info, result, wall_ms)
    return ComparisonResult(greedy=columns["greedy"], dp=columns["dp"])
