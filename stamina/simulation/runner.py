"""Host-agnostic driver that feeds frame timestamps to the engine."""

from __future__ import annotations

import logging

from ..systems import telemetry
from .engine import StaminaEngine
from .state import StaminaState

logger = logging.getLogger("stamina.simulation")


class SimulationRunner:
    """Runs at most one engine step at a time and handles pause/resume.

    Whatever schedules frames (the pygame loop, a timer, a test) calls
    :meth:`frame` with a monotonic timestamp. While paused the engine is not
    stepped; resuming drops the clock baseline so paused time is not charged.
    """

    def __init__(self, engine: StaminaEngine) -> None:
        self.engine = engine
        self.paused = False
        self.frames = 0
        self._in_step = False

    @property
    def state(self) -> StaminaState:
        return self.engine.state

    def frame(self, now: float) -> StaminaState:
        if self._in_step:
            raise RuntimeError("SimulationRunner.frame is not re-entrant")
        if self.paused:
            return self.engine.state
        self._in_step = True
        try:
            state = self.engine.step(now)
            self.frames += 1
            telemetry.stamina_sample(
                tick=now,
                state=state,
                active=self.engine.last_active,
                elapsed=self.engine.last_elapsed,
            )
        finally:
            self._in_step = False
        return state

    def pause(self) -> None:
        if self.paused:
            return
        self.paused = True
        logger.info("Simulation paused at frame %d", self.frames)

    def resume(self) -> None:
        if not self.paused:
            return
        self.paused = False
        self.engine.invalidate_clock()
        logger.info("Simulation resumed")

    def toggle_pause(self) -> bool:
        if self.paused:
            self.resume()
        else:
            self.pause()
        return self.paused

    def reset(self, now: float = 0) -> StaminaState:
        state = self.engine.reset()
        telemetry.log_event(now, "reset", {"frames": self.frames})
        return state
