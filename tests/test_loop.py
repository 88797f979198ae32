"""Tests for the pygame loop wiring that does not need a window."""

from __future__ import annotations

import pygame

from stamina.config import settings
from stamina.rendering.perf_hud import build_lines
from stamina.simulation.input import InputSignal
from stamina.simulation.loop import build_simulation, handle_key_event


def test_space_key_edges_drive_signal():
    signal = InputSignal()
    down = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE)
    up = pygame.event.Event(pygame.KEYUP, key=pygame.K_SPACE)

    assert handle_key_event(down, signal)
    assert handle_key_event(down, signal)
    assert signal.active and signal.press_count == 1
    assert handle_key_event(up, signal)
    assert not signal.active


def test_other_keys_are_not_consumed():
    signal = InputSignal()
    event = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_r)
    assert handle_key_event(event, signal) is False
    assert not signal.active


def test_build_simulation_uses_runtime_policy():
    runtime = settings.SimulationSettings(POLICY="exhaustion", SECONDARY_DRAIN_RATE=64.0)
    runner = build_simulation(runtime)
    assert runner.engine.config.policy.name == "exhaustion"
    assert runner.engine.config.secondary_drain_rate == 64.0
    assert runner.state.primary == runner.state.secondary == 100.0


def test_hud_reports_mode():
    lines = build_lines({"policy": "dual", "active": True, "presses": 3})
    assert "Mode: draining" in lines[1][0]
    lines = build_lines({"policy": "dual", "paused": True})
    assert "Mode: paused" in lines[1][0]
