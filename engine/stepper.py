"""
stepper.py — Step-by-Step Playback Engine
=========================================
The Stepper is the only object the UI touches while one algorithm
animates.  It owns that algorithm's state machine, turns timer ticks
into Advance calls at a configurable speed, and exposes a clean
play/pause/next/speed API.

State machine:
    IDLE     →  start()  →  PAUSED
    PAUSED   →  play()   →  PLAYING
    PLAYING  →  pause()  →  PAUSED
    PLAYING  →  (algorithm finished) → FINISHED
    any      →  start() / restart()  →  PAUSED   (full reset)

Scheduling:
  The Stepper never schedules itself.  Something outside (the Flask
  polling loop, a test) calls tick(); if ticking stops, the run simply
  stays where it is.

Thread safety:
  Advance calls are single-flight: next_step() / start() / restart()
  hold a per-stepper lock, so two requests racing on the same stepper
  are serialised.  Different steppers share nothing.
"""

import logging
import threading
import time
from enum import Enum
from typing import Callable, List, Optional, Sequence

from algorithms import AlgoInfo, Step, SolveResult
from knapsack import Item

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (seconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1.0,    # teaching mode
    "medium": 0.5,
    "fast":   0.15,   # demo mode
    "turbo":  0.05,
}

MIN_SPEED = 0.02


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        algo     : AlgoInfo of the algorithm being animated.
        state    : Current StepperState.
        speed    : Seconds between auto-advance ticks.
        on_step  : Optional callback(Step) fired after every change.
                   The UI hooks its re-render here.
        on_finish: Optional callback(SolveResult) fired once per run.
    """

    def __init__(
        self,
        algo: AlgoInfo,
        on_step: Optional[Callable[[Step], None]] = None,
        on_finish: Optional[Callable[[SolveResult], None]] = None,
    ):
        self.algo:      AlgoInfo     = algo
        self.state:     StepperState = StepperState.IDLE
        self.speed:     float        = SPEED_PRESETS["medium"]
        self.on_step    = on_step
        self.on_finish  = on_finish

        self._algo_state = None
        self._items:     List[Item] = []
        self._capacity:  int        = 0
        self._lock       = threading.RLock()

        # for auto-play timing
        self._last_tick: float = 0.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, items: Sequence[Item], capacity: int) -> None:
        """Reset: build a fresh state for this configuration, paused."""
        with self._lock:
            self._algo_state = self.algo.reset(items, capacity)
            self._items      = list(items)
            self._capacity   = capacity
            self.state       = StepperState.PAUSED
            logger.debug(f"{self.algo.key}: reset with {len(self._items)} items, capacity {capacity}")
            self._notify()

    def restart(self) -> None:
        """Reset with the configuration of the last start()."""
        if self.state == StepperState.IDLE:
            return
        self.start(self._items, self._capacity)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Advance one step.  Returns False if there was nothing to do."""
        with self._lock:
            if self._algo_state is None or self._algo_state.finished:
                return False
            self.algo.advance(self._algo_state)
            self._notify()
            if self._algo_state.finished:
                self.state = StepperState.FINISHED
                logger.info(f"{self.algo.key}: finished after {self._algo_state.step_number} steps")
                if self.on_finish:
                    self.on_finish(self._algo_state.result())
            return True

    def jump_to_end(self) -> None:
        """Advance until finished."""
        while self.next_step():
            pass

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self, now: Optional[float] = None) -> None:
        if self.state in (StepperState.FINISHED, StepperState.IDLE):
            return
        self.state      = StepperState.PLAYING
        self._last_tick = time.monotonic() if now is None else now

    def pause(self) -> None:
        if self.state == StepperState.PLAYING:
            self.state = StepperState.PAUSED

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self, now: Optional[float] = None) -> bool:
        """
        Call periodically (e.g. every 20 ms).  If playing and enough
        time has elapsed, advances one step.  Returns True if a step
        was taken.
        """
        if self.state != StepperState.PLAYING:
            return False
        now = time.monotonic() if now is None else now
        if now - self._last_tick >= self.speed:
            self._last_tick = now
            return self.next_step()
        return False

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        self.speed = SPEED_PRESETS.get(preset, SPEED_PRESETS["medium"])

    def set_speed_value(self, seconds: float) -> None:
        self.speed = max(MIN_SPEED, seconds)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_step(self) -> Optional[Step]:
        if self._algo_state is None:
            return None
        return self.algo.snapshot(self._algo_state)

    @property
    def steps_taken(self) -> int:
        return self._algo_state.step_number if self._algo_state is not None else 0

    @property
    def result(self) -> Optional[SolveResult]:
        return self._algo_state.result() if self._algo_state is not None else None

    @property
    def is_finished(self) -> bool:
        return self.state == StepperState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state == StepperState.PLAYING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _notify(self) -> None:
        if self.on_step and self._algo_state is not None:
            self.on_step(self.algo.snapshot(self._algo_state))
