"""Runtime configuration for the stamina simulation."""

from __future__ import annotations

import argparse
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Sequence

import yaml

from .constants import DEFAULTS

_PATH_FIELDS = {"LOG_DIRECTORY"}
_STRING_FIELDS = {"DEBUG_LOG_FILE", "DEBUG_LOG_LEVEL", "POLICY"}
_BOOL_FIELDS = {"TELEMETRY_ENABLED"}
_FLOAT_FIELDS = {
    "PRIMARY_DECAY_RATE",
    "SECONDARY_DRAIN_RATE",
    "SECONDARY_RECOVERY_RATE",
}

WINDOW_WIDTH = DEFAULTS["WINDOW_WIDTH"]
WINDOW_HEIGHT = DEFAULTS["WINDOW_HEIGHT"]
FPS = DEFAULTS["FPS"]
POLICY = DEFAULTS["POLICY"]

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
GREEN = (124, 252, 184)
RED = (255, 150, 150)
BLUE = (150, 200, 255)
BACKGROUND = (17, 24, 39)

PRIMARY_DECAY_RATE = float(os.getenv("STAMINA_PRIMARY_DECAY_RATE", str(DEFAULTS["PRIMARY_DECAY_RATE"])))
SECONDARY_DRAIN_RATE = float(os.getenv("STAMINA_SECONDARY_DRAIN_RATE", str(DEFAULTS["SECONDARY_DRAIN_RATE"])))
SECONDARY_RECOVERY_RATE = float(
    os.getenv("STAMINA_SECONDARY_RECOVERY_RATE", str(DEFAULTS["SECONDARY_RECOVERY_RATE"]))
)

CONFIG_ENV_VAR = "STAMINA_CONFIG_FILE"
DEFAULT_CONFIG_FILE = Path("configs/default.yaml")
LOG_DIRECTORY = Path(os.getenv("STAMINA_LOG_DIR", "logs"))
DEBUG_LOG_FILE = os.getenv("STAMINA_DEBUG_LOG", "stamina_debug.log")
DEBUG_LOG_LEVEL = os.getenv("STAMINA_DEBUG_LOG_LEVEL", "INFO")
TELEMETRY_ENABLED = os.getenv("STAMINA_TELEMETRY", "0") in {"1", "true", "True"}


@dataclass(frozen=True)
class SimulationSettings:
    WINDOW_WIDTH: int = WINDOW_WIDTH
    WINDOW_HEIGHT: int = WINDOW_HEIGHT
    FPS: int = FPS
    POLICY: str = POLICY
    PRIMARY_DECAY_RATE: float = PRIMARY_DECAY_RATE
    SECONDARY_DRAIN_RATE: float = SECONDARY_DRAIN_RATE
    SECONDARY_RECOVERY_RATE: float = SECONDARY_RECOVERY_RATE
    LOG_DIRECTORY: Path = LOG_DIRECTORY
    DEBUG_LOG_FILE: str = DEBUG_LOG_FILE
    DEBUG_LOG_LEVEL: str = DEBUG_LOG_LEVEL
    TELEMETRY_ENABLED: bool = TELEMETRY_ENABLED

    def with_updates(self, overrides: Dict[str, Any]) -> "SimulationSettings":
        merged = asdict(self)
        merged.update(overrides)
        _validate_settings_dict(merged)
        return SimulationSettings(**merged)


_ACTIVE_SETTINGS = SimulationSettings()
_ENV_VARS: Dict[str, str] = {
    "WINDOW_WIDTH": "STAMINA_WINDOW_WIDTH",
    "WINDOW_HEIGHT": "STAMINA_WINDOW_HEIGHT",
    "FPS": "STAMINA_FPS",
    "POLICY": "STAMINA_POLICY",
    "PRIMARY_DECAY_RATE": "STAMINA_PRIMARY_DECAY_RATE",
    "SECONDARY_DRAIN_RATE": "STAMINA_SECONDARY_DRAIN_RATE",
    "SECONDARY_RECOVERY_RATE": "STAMINA_SECONDARY_RECOVERY_RATE",
    "TELEMETRY_ENABLED": "STAMINA_TELEMETRY",
}


def _coerce(value: str, field: str) -> Any:
    if field in _PATH_FIELDS:
        return Path(value)
    if field in _STRING_FIELDS:
        return value
    if field in _BOOL_FIELDS:
        return value in {"1", "true", "True"}
    if field in _FLOAT_FIELDS:
        return float(value)
    return int(value)


def _collect_env_overrides(env: Mapping[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for field, env_name in _ENV_VARS.items():
        raw = env.get(env_name)
        if raw is not None:
            overrides[field] = _coerce(raw, field)
    return overrides


def _normalize_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value in {"1", "true", "True", "TRUE"}
    if isinstance(value, (int, float)):
        return bool(value)
    raise ValueError("Invalid boolean value in config")


def _normalize_numeric(value: Any, caster: type[float | int]) -> float | int:
    if isinstance(value, (int, float)):
        return caster(value)
    if isinstance(value, str):
        return caster(float(value) if caster is float else int(float(value)))
    raise ValueError("Invalid numeric value in config")


def _normalize_config_value(field: str, value: Any) -> Any:
    if field in _PATH_FIELDS:
        if isinstance(value, Path):
            return value
        if isinstance(value, str):
            return Path(value)
        raise ValueError(f"Field {field} must be a path or string")
    if field in _STRING_FIELDS:
        if isinstance(value, str):
            return value
        raise ValueError(f"Field {field} must be a string")
    if field in _BOOL_FIELDS:
        return _normalize_bool(value)
    if field in _FLOAT_FIELDS:
        return float(_normalize_numeric(value, float))
    return int(_normalize_numeric(value, int))


# Rate bounds match the slider ranges in the gameplay panel.
_NUMERIC_BOUNDS: Dict[str, tuple[float, float]] = {
    "WINDOW_WIDTH": (320, 7680),
    "WINDOW_HEIGHT": (240, 4320),
    "FPS": (1, 360),
    "PRIMARY_DECAY_RATE": (0.0, 10.0),
    "SECONDARY_DRAIN_RATE": (0.0, 100.0),
    "SECONDARY_RECOVERY_RATE": (0.0, 100.0),
}

_CHOICE_FIELDS: Dict[str, set[str]] = {
    "DEBUG_LOG_LEVEL": {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"},
}

_POLICY_CHOICES = {"dual", "exhaustion", "static"}


def _validate_settings_dict(values: Dict[str, Any]) -> None:
    for field, (lower, upper) in _NUMERIC_BOUNDS.items():
        current = values.get(field)
        if current is None:
            continue
        if not (lower <= current <= upper):
            raise ValueError(f"{field} must be between {lower} and {upper}, got {current}")
    for field, choices in _CHOICE_FIELDS.items():
        current = values.get(field)
        if current is None:
            continue
        if isinstance(current, str) and current.upper() in choices:
            values[field] = current.upper()
            continue
        raise ValueError(f"{field} must be one of {sorted(choices)} (got {current})")
    policy = values.get("POLICY")
    if policy is not None:
        if not isinstance(policy, str) or policy.lower() not in _POLICY_CHOICES:
            raise ValueError(f"POLICY must be one of {sorted(_POLICY_CHOICES)} (got {policy})")
        values["POLICY"] = policy.lower()


def _load_config_overrides(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as error:
            raise ValueError(f"Invalid YAML in config file {path}") from error
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must define a mapping")
    valid_fields = set(SimulationSettings.__dataclass_fields__.keys())
    overrides: Dict[str, Any] = {}
    for raw_key, value in data.items():
        key = str(raw_key).upper()
        if key not in valid_fields:
            raise ValueError(f"Unknown config field: {raw_key}")
        overrides[key] = _normalize_config_value(key, value)
    return overrides


def _resolve_config_path(cli_value: str | None, env: Mapping[str, str]) -> Path | None:
    candidate_strings = [cli_value, env.get(CONFIG_ENV_VAR)]
    for candidate in candidate_strings:
        if not candidate:
            continue
        path = Path(candidate).expanduser()
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        return path
    if DEFAULT_CONFIG_FILE.exists():
        return DEFAULT_CONFIG_FILE
    return None


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the interactive stamina meter with runtime overrides")
    parser.add_argument("--config", type=str, help="Path to a YAML config file with runtime settings")
    parser.add_argument("--window-width", type=int, help="Window width")
    parser.add_argument("--window-height", type=int, help="Window height")
    parser.add_argument("--fps", type=int, help="Target frames per second")
    parser.add_argument(
        "--policy",
        type=str,
        choices=sorted(_POLICY_CHOICES),
        help="Meter variant: dual bars, exhaustion ceiling or static ceiling",
    )
    parser.add_argument("--primary-decay-rate", type=float, help="Ceiling decay in points per second")
    parser.add_argument("--secondary-drain-rate", type=float, help="Drain while the trigger is held, points per second")
    parser.add_argument("--secondary-recovery-rate", type=float, help="Recovery while released, points per second")
    parser.add_argument("--telemetry-enabled", type=int, help="Enable telemetry (1 or 0)")
    parser.add_argument("--log-level", type=str, help="Debug log level")
    return parser


def load_runtime_settings(args: Sequence[str] | None = None, env: Mapping[str, str] | None = None) -> SimulationSettings:
    env_mapping = env or os.environ
    parser = _build_arg_parser()
    parsed = parser.parse_args(args=args)
    overrides: Dict[str, Any] = {}
    config_path = _resolve_config_path(parsed.config, env_mapping)
    if config_path is not None:
        overrides.update(_load_config_overrides(config_path))
    overrides.update(_collect_env_overrides(env_mapping))
    cli_mapping = {
        "WINDOW_WIDTH": parsed.window_width,
        "WINDOW_HEIGHT": parsed.window_height,
        "FPS": parsed.fps,
        "POLICY": parsed.policy,
        "PRIMARY_DECAY_RATE": parsed.primary_decay_rate,
        "SECONDARY_DRAIN_RATE": parsed.secondary_drain_rate,
        "SECONDARY_RECOVERY_RATE": parsed.secondary_recovery_rate,
        "TELEMETRY_ENABLED": None if parsed.telemetry_enabled is None else bool(parsed.telemetry_enabled),
        "DEBUG_LOG_LEVEL": parsed.log_level,
    }
    overrides.update({k: v for k, v in cli_mapping.items() if v is not None})
    return _ACTIVE_SETTINGS.with_updates(overrides)


def apply_runtime_settings(new_settings: SimulationSettings) -> SimulationSettings:
    global _ACTIVE_SETTINGS
    global WINDOW_WIDTH, WINDOW_HEIGHT, FPS, POLICY
    global PRIMARY_DECAY_RATE, SECONDARY_DRAIN_RATE, SECONDARY_RECOVERY_RATE
    global LOG_DIRECTORY, DEBUG_LOG_FILE, DEBUG_LOG_LEVEL, TELEMETRY_ENABLED

    _ACTIVE_SETTINGS = new_settings
    WINDOW_WIDTH = new_settings.WINDOW_WIDTH
    WINDOW_HEIGHT = new_settings.WINDOW_HEIGHT
    FPS = new_settings.FPS
    POLICY = new_settings.POLICY
    PRIMARY_DECAY_RATE = new_settings.PRIMARY_DECAY_RATE
    SECONDARY_DRAIN_RATE = new_settings.SECONDARY_DRAIN_RATE
    SECONDARY_RECOVERY_RATE = new_settings.SECONDARY_RECOVERY_RATE
    LOG_DIRECTORY = new_settings.LOG_DIRECTORY
    DEBUG_LOG_FILE = new_settings.DEBUG_LOG_FILE
    DEBUG_LOG_LEVEL = new_settings.DEBUG_LOG_LEVEL
    TELEMETRY_ENABLED = new_settings.TELEMETRY_ENABLED
    return _ACTIVE_SETTINGS


def current_settings() -> SimulationSettings:
    return _ACTIVE_SETTINGS
