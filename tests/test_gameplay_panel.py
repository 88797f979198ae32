"""Tests for the parameter slider panel."""

from __future__ import annotations

import pygame
import pytest

from stamina.rendering.gameplay_panel import (
    GameplaySettingsPanel,
    Slider,
    SliderConfig,
    slider_configs_for,
    snap_value,
)
from stamina.simulation.parameters import StaminaConfig


def test_snap_value_rounds_to_step_and_clamps():
    assert snap_value(31.4, 0.0, 100.0, 1.0) == 31.0
    assert snap_value(1.46, 0.0, 10.0, 0.1) == pytest.approx(1.5)
    assert snap_value(120.0, 0.0, 100.0, 1.0) == 100.0
    assert snap_value(-4.0, 0.0, 10.0, 0.1) == 0.0


def test_slider_configs_skip_locked_rates():
    keys = [slider.key for slider in slider_configs_for(StaminaConfig("exhaustion"))]
    assert keys == ["primary_decay_rate", "secondary_drain_rate"]
    keys = [slider.key for slider in slider_configs_for(StaminaConfig("dual"))]
    assert len(keys) == 3


def test_slider_updates_configuration():
    config = StaminaConfig()
    slider_config = next(s for s in slider_configs_for(config) if s.key == "secondary_drain_rate")
    slider = Slider(slider_config, width=200)
    slider.set_position(0, 0)

    # Track runs from x=0 to x=200 at y=26.
    pygame_event = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(150, 28))
    assert slider.handle_event(pygame_event)
    assert config.secondary_drain_rate == 75.0
    assert slider.dragging

    slider.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=(400, 28)))
    assert config.secondary_drain_rate == 100.0
    assert not slider.dragging


def test_slider_ignores_unchanged_value():
    calls = []
    slider = Slider(
        SliderConfig("k", "K", 0.0, 10.0, 5.0, 1.0, "{value:.0f}", calls.append),
        width=100,
    )
    slider.set_value(5.2)
    assert calls == []
    slider.set_value(7.0)
    assert calls == [7.0]


def test_panel_reset_button_invokes_callback():
    resets = []
    panel = GameplaySettingsPanel(
        pygame.Rect(0, 0, 400, 300),
        None,
        None,
        slider_configs_for(StaminaConfig()),
        on_reset=lambda: resets.append(True),
    )
    click = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=panel.reset_button.center)
    assert panel.handle_event(click)
    assert resets == [True]


def test_panel_ignores_clicks_outside():
    panel = GameplaySettingsPanel(pygame.Rect(0, 0, 400, 300), None, None, slider_configs_for(StaminaConfig()))
    click = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(900, 900))
    assert panel.handle_event(click) is False
