"""
engine/
-------
Animation driver: playback, recording and the side-by-side duel.

    from engine import Stepper, Recorder, Duel, compare
"""

from engine.stepper  import Stepper, StepperState, SPEED_PRESETS
from engine.recorder import (
    Recorder, RunMetrics, ComparisonResult, compare, reference_comparison,
)
from engine.duel     import Duel

__all__ = [
    "Stepper",
    "StepperState",
    "SPEED_PRESETS",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
    "reference_comparison",
    "Duel",
]
