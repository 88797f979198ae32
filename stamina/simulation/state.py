"""Stamina values owned by the engine."""

from dataclasses import dataclass

from ..config.constants import CAP


@dataclass(frozen=True, slots=True)
class StaminaState:
    """Ceiling (``primary``) and action (``secondary``) stamina values."""

    primary: float = CAP
    secondary: float = CAP

    @property
    def exhausted(self) -> bool:
        return self.secondary <= 0.0

    @property
    def depleted(self) -> bool:
        return self.primary <= 0.0


def full_state() -> StaminaState:
    return StaminaState(primary=CAP, secondary=CAP)
