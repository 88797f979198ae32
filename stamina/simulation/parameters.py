"""Rate parameters and meter policies."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, Mapping, Optional, Tuple

from ..config.constants import DEFAULTS, EXHAUSTION_RECOVERY_RATE

if TYPE_CHECKING:  # pragma: no cover - imported for type hints only
    from ..config.settings import SimulationSettings

logger = logging.getLogger("stamina.parameters")

PRIMARY_DECAY_RATE = "primary_decay_rate"
SECONDARY_DRAIN_RATE = "secondary_drain_rate"
SECONDARY_RECOVERY_RATE = "secondary_recovery_rate"


class LockedParameterError(ValueError):
    """Raised when editing a rate the active policy fixes to a constant."""


@dataclass(frozen=True)
class ParameterSpec:
    """UI metadata for a tunable rate."""

    key: str
    label: str
    min_value: float
    max_value: float
    step: float
    default: float
    unit: str = "pts/sec"
    value_format: str = "{value:.1f} pts/sec"


PARAMETER_SPECS: Tuple[ParameterSpec, ...] = (
    ParameterSpec(
        key=PRIMARY_DECAY_RATE,
        label="Max stamina decay",
        min_value=0.0,
        max_value=10.0,
        step=0.1,
        default=DEFAULTS["PRIMARY_DECAY_RATE"],
    ),
    ParameterSpec(
        key=SECONDARY_DRAIN_RATE,
        label="Action stamina drain",
        min_value=0.0,
        max_value=100.0,
        step=1.0,
        default=DEFAULTS["SECONDARY_DRAIN_RATE"],
        value_format="{value:.0f} pts/sec",
    ),
    ParameterSpec(
        key=SECONDARY_RECOVERY_RATE,
        label="Stamina recovery",
        min_value=0.0,
        max_value=100.0,
        step=1.0,
        default=DEFAULTS["SECONDARY_RECOVERY_RATE"],
        value_format="{value:.0f} pts/sec",
    ),
)

_SPECS_BY_KEY: Dict[str, ParameterSpec] = {spec.key: spec for spec in PARAMETER_SPECS}


@dataclass(frozen=True)
class StaminaPolicy:
    """Named meter variant: which rates are pinned to constants."""

    name: str
    description: str
    locked: Mapping[str, float] = field(default_factory=dict)

    def is_locked(self, key: str) -> bool:
        return key in self.locked


POLICIES: Mapping[str, StaminaPolicy] = MappingProxyType(
    {
        "dual": StaminaPolicy(
            name="dual",
            description="Decaying max bar over a drainable current bar",
        ),
        "exhaustion": StaminaPolicy(
            name="exhaustion",
            description="Single bar under an exhaustion ceiling, fixed recovery",
            locked=MappingProxyType({SECONDARY_RECOVERY_RATE: EXHAUSTION_RECOVERY_RATE}),
        ),
        "static": StaminaPolicy(
            name="static",
            description="Single bar with a ceiling that never decays",
            locked=MappingProxyType({PRIMARY_DECAY_RATE: 0.0}),
        ),
    }
)


def policy_by_name(name: str) -> StaminaPolicy:
    try:
        return POLICIES[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown stamina policy: {name}") from None


@dataclass(frozen=True)
class RateSnapshot:
    """Consistent copy of the rates taken once per step."""

    primary_decay_rate: float
    secondary_drain_rate: float
    secondary_recovery_rate: float


class StaminaConfig:
    """Mutable mapping of rate name to value, edited from the UI.

    Values outside the slider ranges are stored as given; only the widget
    clamps. Rates locked by the policy keep their constant value.
    """

    def __init__(
        self,
        policy: StaminaPolicy | str = "dual",
        values: Optional[Mapping[str, float]] = None,
    ) -> None:
        self.policy = policy_by_name(policy) if isinstance(policy, str) else policy
        self._lock = threading.Lock()
        self._values: Dict[str, float] = {spec.key: float(spec.default) for spec in PARAMETER_SPECS}
        for key, value in (values or {}).items():
            self._check_known(key)
            if not self.policy.is_locked(key):
                self._values[key] = float(value)
            elif float(value) != self.policy.locked[key]:
                logger.warning(
                    "Ignoring %s=%.3f; fixed at %.3f by the '%s' policy",
                    key,
                    float(value),
                    self.policy.locked[key],
                    self.policy.name,
                )
        self._values.update({key: float(value) for key, value in self.policy.locked.items()})

    @classmethod
    def from_settings(cls, runtime: "SimulationSettings") -> "StaminaConfig":
        policy = policy_by_name(runtime.POLICY)
        values = {
            PRIMARY_DECAY_RATE: runtime.PRIMARY_DECAY_RATE,
            SECONDARY_DRAIN_RATE: runtime.SECONDARY_DRAIN_RATE,
            SECONDARY_RECOVERY_RATE: runtime.SECONDARY_RECOVERY_RATE,
        }
        # Untouched defaults for locked rates are not user overrides.
        values = {
            key: value
            for key, value in values.items()
            if not (policy.is_locked(key) and value == _SPECS_BY_KEY[key].default)
        }
        return cls(policy, values)

    @staticmethod
    def _check_known(key: str) -> None:
        if key not in _SPECS_BY_KEY:
            raise ValueError(f"Unknown stamina parameter: {key}")

    def is_locked(self, key: str) -> bool:
        return self.policy.is_locked(key)

    def tunable_specs(self) -> Tuple[ParameterSpec, ...]:
        return tuple(spec for spec in PARAMETER_SPECS if not self.is_locked(spec.key))

    def set_parameter(self, name: str, value: float) -> None:
        self._check_known(name)
        if self.is_locked(name):
            raise LockedParameterError(
                f"{name} is fixed at {self.policy.locked[name]} by the '{self.policy.name}' policy"
            )
        with self._lock:
            self._values[name] = float(value)
        logger.debug("Parameter %s set to %.3f", name, float(value))

    def get(self, name: str) -> float:
        self._check_known(name)
        return self._values[name]

    def as_dict(self) -> Dict[str, float]:
        with self._lock:
            return dict(self._values)

    def snapshot(self) -> RateSnapshot:
        with self._lock:
            return RateSnapshot(
                primary_decay_rate=self._values[PRIMARY_DECAY_RATE],
                secondary_drain_rate=self._values[SECONDARY_DRAIN_RATE],
                secondary_recovery_rate=self._values[SECONDARY_RECOVERY_RATE],
            )

    @property
    def primary_decay_rate(self) -> float:
        return self._values[PRIMARY_DECAY_RATE]

    @property
    def secondary_drain_rate(self) -> float:
        return self._values[SECONDARY_DRAIN_RATE]

    @property
    def secondary_recovery_rate(self) -> float:
        return self._values[SECONDARY_RECOVERY_RATE]
