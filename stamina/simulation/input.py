"""Drain trigger shared between the event pump and the engine."""

from __future__ import annotations

import threading


class InputSignal:
    """Boolean "drain requested" flag fed by press/release edges.

    The engine holds a reference and reads :attr:`active` at the start of every
    step. Writes are last-write-wins; nothing is queued.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._active = False
        self.press_count = 0

    @property
    def active(self) -> bool:
        return self._active

    def on_activate(self) -> bool:
        """Mark the trigger as held. Returns True only on a release→press edge."""
        with self._lock:
            if self._active:
                return False
            self._active = True
            self.press_count += 1
            return True

    def on_deactivate(self) -> None:
        with self._lock:
            self._active = False
