"""Parameter panel: one slider per tunable rate plus a reset button."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import pygame

from ..simulation.parameters import ParameterSpec, StaminaConfig


@dataclass
class SliderConfig:
    """Configuration for a slider binding."""

    key: str
    label: str
    min_value: float
    max_value: float
    start_value: float
    step: float
    value_format: str
    callback: Callable[[float], None]


def snap_value(value: float, min_value: float, max_value: float, step: float) -> float:
    """Round to the slider step and clamp into its range."""
    if step > 0:
        value = min_value + round((value - min_value) / step) * step
    return max(min_value, min(max_value, value))


def slider_configs_for(config: StaminaConfig) -> List[SliderConfig]:
    """Bind a slider to every rate the active policy leaves tunable."""

    def _binding(spec: ParameterSpec) -> Callable[[float], None]:
        def _apply(value: float) -> None:
            config.set_parameter(spec.key, value)

        return _apply

    return [
        SliderConfig(
            key=spec.key,
            label=spec.label,
            min_value=spec.min_value,
            max_value=spec.max_value,
            start_value=config.get(spec.key),
            step=spec.step,
            value_format=spec.value_format,
            callback=_binding(spec),
        )
        for spec in config.tunable_specs()
    ]


class Slider:
    """Minimal slider widget that supports dragging and callbacks."""

    def __init__(self, config: SliderConfig, width: int) -> None:
        self.config = config
        self.width = width
        self.height = 52
        self.value = float(config.start_value)
        self.dragging = False

        self._label_pos: Tuple[int, int] = (0, 0)
        self._track_rect = pygame.Rect(0, 0, width, 6)
        self._handle_rect = pygame.Rect(0, 0, 12, 18)

    @property
    def ratio(self) -> float:
        span = self.config.max_value - self.config.min_value
        if span == 0:
            return 0.0
        return max(0.0, min(1.0, (self.value - self.config.min_value) / span))

    def set_position(self, x: int, y: int) -> None:
        self._label_pos = (x, y)
        self._track_rect = pygame.Rect(x, y + 26, self.width, 6)
        self._update_handle_rect()

    def _update_handle_rect(self) -> None:
        handle_x = int(self._track_rect.x + self.ratio * self._track_rect.width)
        self._handle_rect = pygame.Rect(handle_x - 6, self._track_rect.y - 6, 12, 18)

    def draw(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        label_surface = font.render(self.config.label, True, (209, 213, 219))
        surface.blit(label_surface, self._label_pos)

        track_rect = self._track_rect
        pygame.draw.rect(surface, (75, 85, 99), track_rect, border_radius=3)
        fill_width = int(self.ratio * track_rect.width)
        if fill_width > 0:
            fill_rect = pygame.Rect(track_rect.x, track_rect.y, fill_width, track_rect.height)
            pygame.draw.rect(surface, (34, 197, 94), fill_rect, border_radius=3)
        pygame.draw.rect(surface, (34, 197, 94), self._handle_rect, border_radius=4)
        pygame.draw.rect(surface, (20, 20, 20), self._handle_rect, 1, border_radius=4)

        display_value = self.config.value_format.format(value=self.value)
        value_surface = font.render(display_value, True, (255, 255, 255))
        value_pos = (track_rect.right + 12, track_rect.y - value_surface.get_height() // 2 + 3)
        surface.blit(value_surface, value_pos)

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self._track_rect.collidepoint(event.pos) or self._handle_rect.collidepoint(event.pos):
                self.dragging = True
                self._update_value_from_pos(event.pos[0])
                return True
        elif event.type == pygame.MOUSEMOTION and self.dragging:
            self._update_value_from_pos(event.pos[0])
            return True
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1 and self.dragging:
            self.dragging = False
            self._update_value_from_pos(event.pos[0])
            return True
        return False

    def _update_value_from_pos(self, mouse_x: int) -> None:
        ratio = (mouse_x - self._track_rect.x) / float(self._track_rect.width or 1)
        ratio = max(0.0, min(1.0, ratio))
        raw = self.config.min_value + ratio * (self.config.max_value - self.config.min_value)
        self.set_value(raw)

    def set_value(self, value: float) -> None:
        value = snap_value(value, self.config.min_value, self.config.max_value, self.config.step)
        if abs(value - self.value) > 1e-6:
            self.value = value
            self._update_handle_rect()
            self.config.callback(value)


class GameplaySettingsPanel:
    """Panel with the rate sliders and a reset button underneath."""

    def __init__(
        self,
        rect: pygame.Rect,
        font: pygame.font.Font,
        heading_font: pygame.font.Font,
        slider_configs: List[SliderConfig],
        on_reset: Optional[Callable[[], None]] = None,
    ) -> None:
        self.rect = rect
        self.font = font
        self.heading_font = heading_font
        self.on_reset = on_reset
        self._sliders: List[Slider] = []

        slider_width = rect.width - 150
        y_offset = rect.top + 60
        for config in slider_configs:
            slider = Slider(config, slider_width)
            slider.set_position(rect.left + 20, y_offset)
            self._sliders.append(slider)
            y_offset += slider.height
        self.reset_button = pygame.Rect(rect.centerx - 90, y_offset + 16, 180, 40)

    @property
    def sliders(self) -> List[Slider]:
        return list(self._sliders)

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.reset_button.collidepoint(event.pos) and self.on_reset is not None:
                self.on_reset()
                return True
            if not self.rect.collidepoint(event.pos):
                return False
        consumed = False
        for slider in self._sliders:
            if slider.handle_event(event):
                consumed = True
        return consumed

    def draw(self, surface: pygame.Surface) -> None:
        panel_surface = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        panel_surface.fill((0, 0, 0, 60))
        surface.blit(panel_surface, self.rect.topleft)
        pygame.draw.rect(surface, (55, 65, 81), self.rect, 1, border_radius=8)

        heading = self.heading_font.render("Adjust Parameters", True, (255, 255, 255))
        heading_pos = (
            self.rect.left + (self.rect.width - heading.get_width()) // 2,
            self.rect.top + 20,
        )
        surface.blit(heading, heading_pos)

        for slider in self._sliders:
            slider.draw(surface, self.font)

        pygame.draw.rect(surface, (22, 163, 74), self.reset_button, border_radius=8)
        label = self.font.render("Reset Stamina", True, (255, 255, 255))
        surface.blit(
            label,
            (
                self.reset_button.centerx - label.get_width() // 2,
                self.reset_button.centery - label.get_height() // 2,
            ),
        )
