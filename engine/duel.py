"""
duel.py — Greedy vs DP, Side by Side
====================================
Drives one Greedy and one DP Stepper over the same configuration.

Flow:
    configure(items, capacity)   → both steppers reset, paused
    run()                        → reference answer pre-computed, both play
    tick() … tick()              → each stepper advances on its own interval
    (both finished)              → `results` becomes available

The DP stepper takes O(N·C) steps against Greedy's O(N), so its interval
is the Greedy interval divided by DP_SPEED_DIVISOR (never below
MIN_INTERVAL).

A configuration change always pauses and fully resets both steppers.
"""

import logging
import threading
from typing import Dict, List, Optional, Sequence

import config
from algorithms import SolveResult, get_algorithm
from engine.recorder import ComparisonResult, reference_comparison
from engine.stepper import Stepper, SPEED_PRESETS
from knapsack import Item, check_config

logger = logging.getLogger(__name__)


class Duel:
    """
    Attributes:
        greedy   : Stepper for the Greedy heuristic.
        dp       : Stepper for Dynamic Programming.
        items    : Current item list (read-only for the steppers).
        capacity : Current capacity.
        speed    : Greedy interval in seconds.
        has_run  : True once run() was called since the last reset.
    """

    def __init__(self, items: Sequence[Item], capacity: int, speed: Optional[float] = None):
        self.greedy = Stepper(
            get_algorithm("greedy"), on_finish=lambda r: self._check_reference("greedy", r)
        )
        self.dp = Stepper(
            get_algorithm("dp"), on_finish=lambda r: self._check_reference("dp", r)
        )
        self.items:    List[Item] = []
        self.capacity: int        = 0
        self.has_run:  bool       = False
        self._pending: Optional[ComparisonResult] = None
        self._lock = threading.RLock()

        if speed is None:
            speed = SPEED_PRESETS.get(config.DEFAULT_SPEED, SPEED_PRESETS["medium"])
        self.set_speed(speed)
        self.configure(items, capacity)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def configure(self, items: Sequence[Item], capacity: int) -> None:
        """Swap in a new configuration.  Always a full reset."""
        check_config(items, capacity)
        with self._lock:
            self.items = list(items)
            self.capacity = capacity
            logger.info(f"Duel configured: {len(self.items)} items, capacity {capacity}")
            self.greedy.start(self.items, self.capacity)
            self.dp.start(self.items, self.capacity)
            self._clear_run()

    def reset(self) -> None:
        """Back to the first frame of the current configuration."""
        with self._lock:
            self.greedy.restart()
            self.dp.restart()
            self._clear_run()

    def run(self, now: Optional[float] = None) -> None:
        """Pre-compute the reference answer and start both animations."""
        with self._lock:
            if self.is_finished:
                self.reset()
            if self._pending is None:
                self._pending = reference_comparison(self.items, self.capacity)
            self.has_run = True
            self.greedy.play(now)
            self.dp.play(now)
            logger.info(
                f"Duel running: greedy every {self.greedy.speed:.3f}s, dp every {self.dp.speed:.3f}s"
            )

    def pause(self) -> None:
        with self._lock:
            self.greedy.pause()
            self.dp.pause()

    # ------------------------------------------------------------------
    # Driving
    # ------------------------------------------------------------------
    def tick(self, now: Optional[float] = None) -> Dict[str, bool]:
        """Tick both steppers; returns which of them advanced."""
        with self._lock:
            advanced = {
                "greedy": self.greedy.tick(now),
                "dp":     self.dp.tick(now),
            }
            if self.is_finished and any(advanced.values()):
                self._log_outcome()
            return advanced

    def step(self) -> Dict[str, bool]:
        """One manual Advance of each stepper (for paused, frame-by-frame use)."""
        with self._lock:
            if self._pending is None:
                self._pending = reference_comparison(self.items, self.capacity)
                self.has_run = True
            advanced = {
                "greedy": self.greedy.next_step(),
                "dp":     self.dp.next_step(),
            }
            if self.is_finished and any(advanced.values()):
                self._log_outcome()
            return advanced

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, seconds: float) -> None:
        self.speed = max(config.MIN_INTERVAL, seconds)
        self.greedy.set_speed_value(self.speed)
        self.dp.set_speed_value(max(config.MIN_INTERVAL, self.speed / config.DP_SPEED_DIVISOR))

    def set_speed_preset(self, preset: str) -> None:
        self.greedy.set_speed(preset)
        self.set_speed(self.greedy.speed)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def is_finished(self) -> bool:
        return self.greedy.is_finished and self.dp.is_finished

    @property
    def is_running(self) -> bool:
        return self.greedy.is_playing or self.dp.is_playing

    @property
    def results(self) -> Optional[ComparisonResult]:
        """The pre-computed comparison, revealed only once both are done."""
        if not self.is_finished:
            return None
        return self._pending

    def snapshot(self) -> Dict:
        return {
            "greedy":    self.greedy.current_step.to_dict(),
            "dp":        self.dp.current_step.to_dict(),
            "running":   self.is_running,
            "finished":  self.is_finished,
            "has_run":   self.has_run,
            "speed":     self.speed,
            "capacity":  self.capacity,
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _clear_run(self) -> None:
        self.has_run = False
        self._pending = None

    def _check_reference(self, key: str, result: SolveResult) -> None:
        """on_finish hook: a finished stepper must land on the batch solver's answer."""
        if self._pending is None:
            return
        reference = getattr(self._pending, key).as_result()
        if result != reference:
            logger.error(f"{key} stepper finished on {result}, reference is {reference}")

    def _log_outcome(self) -> None:
        greedy, dp = self.greedy.result, self.dp.result
        logger.info(
            f"Duel finished: greedy={greedy.total_value} (w={greedy.total_weight}), "
            f"dp={dp.total_value} (w={dp.total_weight})"
        )
