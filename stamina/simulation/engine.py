"""Time-stepped stamina model."""

from __future__ import annotations

import logging
from typing import Optional

from ..config.constants import CAP
from .input import InputSignal
from .parameters import StaminaConfig
from .state import StaminaState, full_state
from .time import SimulationClock

logger = logging.getLogger("stamina.engine")


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def _bounded(state: StaminaState) -> StaminaState:
    primary = _clamp(state.primary, 0.0, CAP)
    return StaminaState(primary=primary, secondary=_clamp(state.secondary, 0.0, primary))


class StaminaEngine:
    """Sole owner and mutator of the :class:`StaminaState`.

    Configuration and input are referenced, never owned: the UI edits the
    config and the event pump flips the signal, and each :meth:`step` reads
    their current values once.
    """

    def __init__(
        self,
        config: StaminaConfig,
        signal: InputSignal,
        *,
        clock: Optional[SimulationClock] = None,
        state: Optional[StaminaState] = None,
    ) -> None:
        self.config = config
        self.signal = signal
        self.clock = clock or SimulationClock()
        self._state = _bounded(state) if state is not None else full_state()
        self.last_elapsed: Optional[float] = None
        self.last_active: Optional[bool] = None

    @property
    def state(self) -> StaminaState:
        return self._state

    def step(self, now: float) -> StaminaState:
        """Advance the meter to timestamp ``now`` and return the new state."""
        elapsed = self.clock.tick(now)
        self.last_elapsed = elapsed
        if elapsed is None:
            self.last_active = None
            return self._state

        rates = self.config.snapshot()
        active = self.signal.active
        self.last_active = active
        previous = self._state

        primary = _clamp(previous.primary - rates.primary_decay_rate * elapsed, 0.0, CAP)
        if active:
            secondary = previous.secondary - rates.secondary_drain_rate * elapsed
        else:
            secondary = previous.secondary + rates.secondary_recovery_rate * elapsed
        # Bounded by the ceiling after this step's decay, not before it.
        secondary = _clamp(secondary, 0.0, primary)

        self._state = StaminaState(primary=primary, secondary=secondary)
        self._log_transitions(previous, self._state)
        return self._state

    def reset(self) -> StaminaState:
        self._state = full_state()
        self.clock.reset()
        self.last_elapsed = None
        self.last_active = None
        logger.info("Stamina reset to %.0f / %.0f", CAP, CAP)
        return self._state

    def invalidate_clock(self) -> None:
        """Treat the next step as a first frame without touching the values."""
        self.clock.reset()

    def _log_transitions(self, before: StaminaState, after: StaminaState) -> None:
        if after.exhausted and not before.exhausted:
            logger.debug("Action stamina exhausted (ceiling %.2f)", after.primary)
        if after.depleted and not before.depleted:
            logger.info("Stamina ceiling depleted")
