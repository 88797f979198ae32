"""Tests for the frame clock."""

from __future__ import annotations

import pytest

from stamina.simulation.time import SimulationClock


def test_first_tick_records_baseline_only():
    clock = SimulationClock()
    assert clock.tick(5000.0) is None
    assert clock.previous_timestamp == 5000.0


def test_elapsed_is_converted_to_seconds():
    clock = SimulationClock()
    clock.tick(1000.0)
    assert clock.tick(1250.0) == pytest.approx(0.25)
    assert clock.tick(2250.0) == pytest.approx(1.0)


def test_regressing_timestamp_clamps_to_zero_and_moves_baseline():
    clock = SimulationClock()
    clock.tick(1000.0)
    assert clock.tick(400.0) == 0.0
    assert clock.previous_timestamp == 400.0
    assert clock.tick(900.0) == pytest.approx(0.5)


def test_reset_clears_baseline():
    clock = SimulationClock()
    clock.tick(10.0)
    clock.reset()
    assert not clock.has_baseline
    assert clock.tick(90000.0) is None


def test_custom_units_per_second():
    clock = SimulationClock(units_per_second=1.0)
    clock.tick(2.0)
    assert clock.tick(3.5) == pytest.approx(1.5)


def test_units_per_second_must_be_positive():
    with pytest.raises(ValueError):
        SimulationClock(units_per_second=0)
