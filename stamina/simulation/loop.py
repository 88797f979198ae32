"""Main pygame loop for the interactive stamina meter."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import pygame

from ..config import settings
from ..config.settings import SimulationSettings
from ..rendering.gameplay_panel import GameplaySettingsPanel, slider_configs_for
from ..rendering.perf_hud import PerfHUD
from ..rendering.stamina_bar import describe, draw_stamina_bar
from ..systems import telemetry
from ..systems.notifications import MeterWatcher, NotificationManager
from .engine import StaminaEngine
from .input import InputSignal
from .parameters import StaminaConfig
from .runner import SimulationRunner

DRAIN_KEY = pygame.K_SPACE


def _initialise_logger() -> logging.Logger:
    log_dir = settings.LOG_DIRECTORY
    if not isinstance(log_dir, Path):
        log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / settings.DEBUG_LOG_FILE

    # Parent of stamina.engine, stamina.parameters and stamina.simulation.
    logger = logging.getLogger("stamina")
    if logger.handlers:
        return logger

    level_name = str(settings.DEBUG_LOG_LEVEL).upper()
    level = getattr(logging, level_name, logging.INFO)
    logger.setLevel(level)

    file_handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
    file_handler.setLevel(level)
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)
    logger.propagate = False

    logger.info("Debug logging initialised at %s", log_path)
    return logger


def _load_font(size: int, *, bold: bool = False) -> pygame.font.Font:
    try:
        return pygame.font.SysFont("dejavusans,arial", size, bold=bold)
    except (OSError, pygame.error) as exc:
        logging.getLogger("stamina.simulation").warning("Unable to load system font: %s", exc)
        return pygame.font.Font(None, size)


def build_simulation(runtime: SimulationSettings) -> SimulationRunner:
    config = StaminaConfig.from_settings(runtime)
    engine = StaminaEngine(config, InputSignal())
    return SimulationRunner(engine)


def handle_key_event(event: pygame.event.Event, signal: InputSignal) -> bool:
    """Translate drain-key edges into the input signal. Returns True if consumed."""
    if event.type == pygame.KEYDOWN and event.key == DRAIN_KEY:
        signal.on_activate()
        return True
    if event.type == pygame.KEYUP and event.key == DRAIN_KEY:
        signal.on_deactivate()
        return True
    return False


def run(sim_settings: Optional[SimulationSettings] | None = None) -> None:
    """Open the window and drive the stamina engine once per frame."""
    runtime = sim_settings or settings.current_settings()
    logger = _initialise_logger()

    if runtime.TELEMETRY_ENABLED:
        telemetry.enable_telemetry()
        logger.info("Telemetry enabled; writing JSONL samples to %s", Path(runtime.LOG_DIRECTORY) / "telemetry")

    runner = build_simulation(runtime)
    engine = runner.engine
    logger.info(
        "Starting stamina meter with policy '%s' and rates %s",
        engine.config.policy.name,
        engine.config.as_dict(),
    )

    pygame.init()
    # Key repeat off so holding Space yields a single KEYDOWN edge.
    pygame.key.set_repeat()
    screen = pygame.display.set_mode((runtime.WINDOW_WIDTH, runtime.WINDOW_HEIGHT))
    pygame.display.set_caption("Interactive Stamina Bar")

    font = _load_font(16)
    label_font = _load_font(18, bold=True)
    heading_font = _load_font(28, bold=True)

    notifications = NotificationManager()
    watcher = MeterWatcher(notifications)
    perf_hud = PerfHUD()

    def _reset() -> None:
        runner.reset(pygame.time.get_ticks())
        watcher.reset()
        notifications.add("Stamina reset", settings.GREEN)

    width, height = screen.get_size()
    bar_rect = pygame.Rect(width // 2 - 300, 140, 600, 36)
    panel_rect = pygame.Rect(width // 2 - 300, 220, 600, 60 + 52 * len(engine.config.tunable_specs()) + 20)
    panel = GameplaySettingsPanel(panel_rect, font, label_font, slider_configs_for(engine.config), on_reset=_reset)
    show_ceiling = engine.config.policy.name != "exhaustion"

    clock = pygame.time.Clock()
    running = True
    while running:
        frame_ms = clock.tick(runtime.FPS)

        for event in pygame.event.get():
            if panel.handle_event(event):
                continue
            if handle_key_event(event, engine.signal):
                continue
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_r:
                    _reset()
                elif event.key == pygame.K_p:
                    paused = runner.toggle_pause()
                    notifications.add("Paused" if paused else "Resumed", settings.BLUE)
                elif event.key == pygame.K_F3:
                    perf_hud.toggle()
            elif event.type == pygame.WINDOWFOCUSLOST:
                # Key-up events are lost while unfocused.
                engine.signal.on_deactivate()

        state = runner.frame(pygame.time.get_ticks())
        watcher.observe(state)
        notifications.update()

        screen.fill(settings.BACKGROUND)
        title = heading_font.render("Interactive Stamina Bar", True, settings.WHITE)
        screen.blit(title, (width // 2 - title.get_width() // 2, 40))
        hint = font.render("Press and hold the Spacebar to drain stamina.", True, (156, 163, 175))
        screen.blit(hint, (width // 2 - hint.get_width() // 2, 90))

        draw_stamina_bar(screen, bar_rect, describe(state), label_font, show_ceiling=show_ceiling)
        panel.draw(screen)
        notifications.draw(screen, font)
        perf_hud.update(
            {
                "fps": clock.get_fps(),
                "frame_ms": frame_ms,
                "policy": engine.config.policy.name,
                "active": engine.signal.active,
                "paused": runner.paused,
                "presses": engine.signal.press_count,
            }
        )
        perf_hud.draw(screen)
        pygame.display.flip()

    pygame.quit()
    if runtime.TELEMETRY_ENABLED:
        telemetry.flush_all()
        logger.info("Telemetry flushed to %s", Path(runtime.LOG_DIRECTORY) / "telemetry")
    logger.info("Stamina meter closed after %d frames", runner.frames)
