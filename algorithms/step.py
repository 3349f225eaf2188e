"""
step.py — Stepper Frame Snapshot
================================
A Step is a frozen-in-time picture of everything the renderer needs to
draw one frame of either stepper:

    • Which phase the state machine is in
    • Which line of pseudocode just executed
    • A plain-English explanation of what the last Advance did
    • Algorithm-specific overlay data (sorted list, DP grid, cursors)
    • Running metrics (value / weight so far)

Design decisions:
  - Step is a plain dataclass.  The stepper states are the only writers;
    the engine and renderer are pure readers of snapshots.
  - `overlay` is a free-form dict so each algorithm can push whatever its
    panel needs without widening this class.
"""

from dataclasses import dataclass, field
from typing import Dict, Any


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number     : Number of Advance calls that changed the state.
        algo_key        : Registry key of the algorithm ("greedy" / "dp").
        phase           : Phase tag value, e.g. "evaluating", "backtracking".
        pseudocode_line : 0-based index into the algorithm's PSEUDOCODE.
        explanation     : Human-readable text for the status bar.
        overlay         : Free-form dict for the renderer:
                            • greedy: "order", "statuses", "cursor", "accepted"
                            • dp:     "grid", "cursor", "bt_cursor"
        metrics         : Running tally: value, weight, remaining, …
        is_final        : True once the stepper has finished.
    """

    step_number:     int            = 0
    algo_key:        str            = ""
    phase:           str            = ""
    pseudocode_line: int            = -1
    explanation:     str            = ""
    overlay:         Dict[str, Any] = field(default_factory=dict)
    metrics:         Dict[str, Any] = field(default_factory=dict)
    is_final:        bool           = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step_number":     self.step_number,
            "algo_key":        self.algo_key,
            "phase":           self.phase,
            "pseudocode_line": self.pseudocode_line,
            "explanation":     self.explanation,
            "overlay":         self.overlay,
            "metrics":         self.metrics,
            "is_final":        self.is_final,
        }
