"""Small runtime HUD for frame timing and meter status."""

from __future__ import annotations

from typing import Dict, Tuple

import pygame

WARNING_COLOR = (240, 120, 120)
INFO_COLOR = (235, 245, 255)
BACKGROUND_COLOR = (12, 20, 32, 170)


class PerfHUD:
    """Render a compact overlay with frame stats and the meter mode."""

    def __init__(self) -> None:
        self.visible = True
        self._font = pygame.font.Font(None, 18)
        self._metrics: Dict[str, object] = {}

    def toggle(self) -> None:
        self.visible = not self.visible

    def update(self, metrics: Dict[str, object]) -> None:
        self._metrics = metrics

    def draw(self, surface: pygame.Surface) -> None:
        if not self.visible or not self._metrics:
            return

        lines = build_lines(self._metrics)
        padding = 8
        line_height = self._font.get_height()
        width = max(self._font.size(text)[0] for text, _ in lines) + padding * 2
        height = line_height * len(lines) + padding * 2

        panel = pygame.Surface((width, height), pygame.SRCALPHA)
        panel.fill(BACKGROUND_COLOR)
        for idx, (text, color) in enumerate(lines):
            panel.blit(self._font.render(text, True, color), (padding, padding + idx * line_height))
        surface.blit(panel, (12, 12))


def build_lines(metrics: Dict[str, object]) -> Tuple[Tuple[str, Tuple[int, int, int]], ...]:
    fps = float(metrics.get("fps", 0.0))
    frame_ms = float(metrics.get("frame_ms", 0.0))
    policy = str(metrics.get("policy", "?"))
    active = bool(metrics.get("active", False))
    paused = bool(metrics.get("paused", False))
    presses = int(metrics.get("presses", 0))

    if paused:
        mode, mode_color = "paused", WARNING_COLOR
    elif active:
        mode, mode_color = "draining", WARNING_COLOR
    else:
        mode, mode_color = "recovering", INFO_COLOR

    return (
        (f"FPS: {fps:5.1f} | Frame: {frame_ms:4.1f} ms", INFO_COLOR),
        (f"Policy: {policy} | Mode: {mode} | Presses: {presses}", mode_color),
        ("Keys: [Space] drain [R] reset [P] pause [F3] HUD [Esc] quit", INFO_COLOR),
    )
