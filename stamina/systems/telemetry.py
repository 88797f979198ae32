"""Runtime telemetry for stamina traces."""

from __future__ import annotations

import json
import os
import threading
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from ..config import settings


@dataclass(slots=True)
class StaminaSample:
    tick: int
    primary: float
    secondary: float
    active: Optional[bool]
    elapsed: Optional[float]


@dataclass(slots=True)
class EventSample:
    tick: int
    event_type: str
    details: dict


class TelemetrySink:
    """Buffered JSONL telemetry writer."""

    def __init__(self, kind: str, *, directory: Optional[Path] = None, flush_interval: int = 32) -> None:
        base = directory or Path(settings.LOG_DIRECTORY) / "telemetry"
        base.mkdir(parents=True, exist_ok=True)
        timestamp = int(time.time())
        self.path = base / f"{kind}_{timestamp}.jsonl"
        self._buffer: list[dict] = []
        self._lock = threading.Lock()
        self._flush_interval = max(1, flush_interval)
        self._counter = 0

    def write(self, payload: StaminaSample | EventSample) -> None:
        with self._lock:
            self._buffer.append(asdict(payload))
            self._counter += 1
            if self._counter >= self._flush_interval:
                self._flush_locked()

    def flush(self) -> None:
        with self._lock:
            self._flush_locked()

    def _flush_locked(self) -> None:
        if not self._buffer:
            self._counter = 0
            return
        with self.path.open("a", encoding="utf-8") as handle:
            for row in self._buffer:
                handle.write(json.dumps(row, ensure_ascii=False) + os.linesep)
        self._buffer.clear()
        self._counter = 0


_stamina_sink: Optional[TelemetrySink] = None
_event_sink: Optional[TelemetrySink] = None


def enable_telemetry(kind: str = "all", *, directory: Optional[Path] = None) -> None:
    global _stamina_sink, _event_sink
    if kind in ("stamina", "all") and _stamina_sink is None:
        _stamina_sink = TelemetrySink("stamina", directory=directory)
    if kind in ("events", "all") and _event_sink is None:
        _event_sink = TelemetrySink("events", directory=directory)


def disable_telemetry() -> None:
    global _stamina_sink, _event_sink
    flush_all()
    _stamina_sink = None
    _event_sink = None


def stamina_sample(*, tick: int, state, active: Optional[bool], elapsed: Optional[float]) -> None:
    if _stamina_sink is None:
        return
    _stamina_sink.write(
        StaminaSample(
            tick=int(tick),
            primary=float(state.primary),
            secondary=float(state.secondary),
            active=None if active is None else bool(active),
            elapsed=elapsed,
        )
    )


def log_event(tick: int, event_type: str, details: Optional[dict] = None) -> None:
    if _event_sink is None:
        return
    _event_sink.write(EventSample(tick=int(tick), event_type=event_type, details=dict(details or {})))


def flush_all() -> None:
    for sink in (_stamina_sink, _event_sink):
        if sink is not None:
            sink.flush()
