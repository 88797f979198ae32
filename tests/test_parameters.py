"""Tests for rate parameters and meter policies."""

from __future__ import annotations

import logging

import pytest

from stamina.config import settings
from stamina.config.constants import EXHAUSTION_RECOVERY_RATE
from stamina.simulation.parameters import (
    PARAMETER_SPECS,
    LockedParameterError,
    StaminaConfig,
    policy_by_name,
)


def test_defaults_match_parameter_specs():
    config = StaminaConfig()
    assert config.as_dict() == {spec.key: spec.default for spec in PARAMETER_SPECS}
    assert config.primary_decay_rate == 1.5
    assert config.secondary_drain_rate == 30.0
    assert config.secondary_recovery_rate == 20.0


def test_set_parameter_accepts_out_of_range_values():
    config = StaminaConfig()
    config.set_parameter("primary_decay_rate", 42.0)
    config.set_parameter("secondary_drain_rate", -3)
    assert config.get("primary_decay_rate") == 42.0
    assert config.get("secondary_drain_rate") == -3.0


def test_unknown_parameter_raises():
    config = StaminaConfig()
    with pytest.raises(ValueError, match="Unknown stamina parameter"):
        config.set_parameter("maxStaminaDecay", 1.0)


def test_exhaustion_policy_locks_recovery():
    config = StaminaConfig("exhaustion", {"secondary_recovery_rate": 99.0})
    assert config.secondary_recovery_rate == EXHAUSTION_RECOVERY_RATE
    with pytest.raises(LockedParameterError):
        config.set_parameter("secondary_recovery_rate", 50.0)
    assert config.secondary_recovery_rate == EXHAUSTION_RECOVERY_RATE
    assert "secondary_recovery_rate" not in {spec.key for spec in config.tunable_specs()}


def test_static_policy_locks_decay_to_zero():
    config = StaminaConfig("static")
    assert config.primary_decay_rate == 0.0
    assert config.is_locked("primary_decay_rate")


def test_unknown_policy_raises():
    with pytest.raises(ValueError, match="Unknown stamina policy"):
        policy_by_name("triple")


def test_snapshot_is_detached_from_later_edits():
    config = StaminaConfig()
    snapshot = config.snapshot()
    config.set_parameter("secondary_drain_rate", 80.0)
    assert snapshot.secondary_drain_rate == 30.0
    assert config.snapshot().secondary_drain_rate == 80.0


def test_from_settings_reads_runtime_rates():
    runtime = settings.SimulationSettings(
        POLICY="dual",
        PRIMARY_DECAY_RATE=3.0,
        SECONDARY_DRAIN_RATE=45.0,
        SECONDARY_RECOVERY_RATE=12.0,
    )
    config = StaminaConfig.from_settings(runtime)
    assert config.policy.name == "dual"
    assert config.as_dict() == {
        "primary_decay_rate": 3.0,
        "secondary_drain_rate": 45.0,
        "secondary_recovery_rate": 12.0,
    }


def test_locked_override_logs_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="stamina.parameters"):
        config = StaminaConfig("exhaustion", {"secondary_recovery_rate": 50.0})
    assert config.secondary_recovery_rate == EXHAUSTION_RECOVERY_RATE
    assert "Ignoring secondary_recovery_rate" in caplog.text


def test_locked_value_matching_constant_is_silent(caplog):
    with caplog.at_level(logging.WARNING, logger="stamina.parameters"):
        StaminaConfig("exhaustion", {"secondary_recovery_rate": EXHAUSTION_RECOVERY_RATE})
    assert caplog.text == ""


def test_from_settings_warns_only_for_real_overrides(caplog):
    with caplog.at_level(logging.WARNING, logger="stamina.parameters"):
        StaminaConfig.from_settings(settings.SimulationSettings(POLICY="static", PRIMARY_DECAY_RATE=1.5))
    assert caplog.text == ""
    with caplog.at_level(logging.WARNING, logger="stamina.parameters"):
        config = StaminaConfig.from_settings(settings.SimulationSettings(POLICY="static", PRIMARY_DECAY_RATE=4.0))
    assert config.primary_decay_rate == 0.0
    assert "Ignoring primary_decay_rate" in caplog.text
