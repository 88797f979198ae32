"""Simulation package containing the stamina engine and the main loop."""

from __future__ import annotations
from .engine import StaminaEngine
from .input import InputSignal
from .parameters import StaminaConfig, StaminaPolicy
from .state import StaminaState
from .time import SimulationClock

__all__ = [
    "SimulationClock",
    "InputSignal",
    "StaminaConfig",
    "StaminaPolicy",
    "StaminaState",
    "StaminaEngine",
]
