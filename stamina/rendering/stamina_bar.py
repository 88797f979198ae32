"""Maps engine state onto bar widths, labels and colours."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import pygame

from ..config.constants import CAP
from ..simulation.state import StaminaState

Color = Tuple[int, int, int]

TRACK_COLOR = (127, 29, 29)
CEILING_COLOR = (22, 101, 52)
CURRENT_COLOR = (74, 222, 128)
LOW_COLOR = (220, 38, 38)
MID_COLOR = (234, 179, 8)
BORDER_COLOR = (0, 0, 0)


@dataclass(frozen=True)
class BarView:
    max_percent: float
    current_percent: float
    label: str
    fill_ratio: float
    fill_color: Color


def _lerp_color(start: Color, end: Color, t: float) -> Color:
    t = max(0.0, min(1.0, t))
    return tuple(int(round(a + (b - a) * t)) for a, b in zip(start, end))  # type: ignore[return-value]


def gradient_color(ratio: float) -> Color:
    """Red at empty, yellow half way, green when full."""
    if ratio <= 0.5:
        return _lerp_color(LOW_COLOR, MID_COLOR, ratio / 0.5)
    return _lerp_color(MID_COLOR, CURRENT_COLOR, (ratio - 0.5) / 0.5)


def fill_ratio(state: StaminaState) -> float:
    # A zero ceiling renders as fully drained.
    if state.primary <= 0.0:
        return 0.0
    return max(0.0, min(1.0, state.secondary / state.primary))


def describe(state: StaminaState) -> BarView:
    ratio = fill_ratio(state)
    return BarView(
        max_percent=state.primary / CAP * 100.0,
        current_percent=state.secondary / CAP * 100.0,
        label=f"{round(state.secondary)} / {round(state.primary)}",
        fill_ratio=ratio,
        fill_color=gradient_color(ratio),
    )


def draw_stamina_bar(
    surface: pygame.Surface,
    rect: pygame.Rect,
    view: BarView,
    font: pygame.font.Font,
    *,
    show_ceiling: bool = True,
) -> None:
    radius = rect.height // 2
    pygame.draw.rect(surface, TRACK_COLOR, rect, border_radius=radius)

    if show_ceiling:
        ceiling_width = int(rect.width * view.max_percent / 100.0)
        if ceiling_width > 0:
            pygame.draw.rect(
                surface,
                CEILING_COLOR,
                pygame.Rect(rect.x, rect.y, ceiling_width, rect.height),
                border_radius=radius,
            )
        fill = CURRENT_COLOR
    else:
        fill = view.fill_color

    current_width = int(rect.width * view.current_percent / 100.0)
    if current_width > 0:
        pygame.draw.rect(
            surface,
            fill,
            pygame.Rect(rect.x, rect.y, current_width, rect.height),
            border_radius=radius,
        )

    pygame.draw.rect(surface, BORDER_COLOR, rect, 2, border_radius=radius)

    shadow = font.render(view.label, True, BORDER_COLOR)
    text = font.render(view.label, True, (255, 255, 255))
    text_pos = (rect.centerx - text.get_width() // 2, rect.centery - text.get_height() // 2)
    surface.blit(shadow, (text_pos[0] + 1, text_pos[1] + 1))
    surface.blit(text, text_pos)
