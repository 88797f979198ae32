"""Tests for the buffered JSONL telemetry sink."""

from __future__ import annotations

import json

from stamina.simulation.state import StaminaState
from stamina.systems import telemetry
from stamina.systems.telemetry import EventSample, StaminaSample, TelemetrySink


def _rows(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line]


def test_sink_buffers_until_flush_interval(tmp_path):
    sink = TelemetrySink("stamina", directory=tmp_path, flush_interval=3)
    for tick in range(2):
        sink.write(StaminaSample(tick=tick, primary=100.0, secondary=90.0, active=False, elapsed=0.016))
    assert not sink.path.exists()

    sink.write(StaminaSample(tick=2, primary=100.0, secondary=90.0, active=True, elapsed=0.016))
    assert [row["tick"] for row in _rows(sink.path)] == [0, 1, 2]


def test_flush_writes_partial_buffer(tmp_path):
    sink = TelemetrySink("events", directory=tmp_path)
    sink.write(EventSample(tick=5, event_type="reset", details={"frames": 10}))
    sink.flush()
    assert _rows(sink.path) == [{"tick": 5, "event_type": "reset", "details": {"frames": 10}}]


def test_module_helpers_are_noops_when_disabled():
    telemetry.disable_telemetry()
    telemetry.stamina_sample(tick=1, state=StaminaState(), active=False, elapsed=None)
    telemetry.log_event(1, "reset")
    telemetry.flush_all()


def test_event_helper_writes_when_enabled(tmp_path):
    telemetry.enable_telemetry("events", directory=tmp_path)
    try:
        telemetry.log_event(42, "reset", {"frames": 3})
        telemetry.flush_all()
    finally:
        telemetry.disable_telemetry()
    (path,) = tmp_path.glob("events_*.jsonl")
    assert _rows(path)[0]["event_type"] == "reset"
