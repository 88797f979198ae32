"""Tests for on-screen notifications raised by meter transitions."""

from __future__ import annotations

from stamina.simulation.state import StaminaState
from stamina.systems.notifications import MeterWatcher, NotificationManager


def test_notifications_expire():
    manager = NotificationManager()
    manager.add("hello", duration=2)
    manager.update()
    assert [n.message for n in manager.notifications] == ["hello"]
    manager.update()
    assert manager.notifications == []


def test_watcher_announces_each_crossing_once():
    manager = NotificationManager()
    watcher = MeterWatcher(manager)

    watcher.observe(StaminaState(primary=80.0, secondary=10.0))
    watcher.observe(StaminaState(primary=80.0, secondary=0.0))
    watcher.observe(StaminaState(primary=79.0, secondary=0.0))
    assert [n.message for n in manager.notifications] == ["Out of stamina!"]

    watcher.observe(StaminaState(primary=0.0, secondary=0.0))
    assert len(manager.notifications) == 2
    assert "ceiling depleted" in manager.notifications[-1].message


def test_watcher_rearms_after_recovery():
    manager = NotificationManager()
    watcher = MeterWatcher(manager)
    watcher.observe(StaminaState(primary=50.0, secondary=0.0))
    watcher.observe(StaminaState(primary=50.0, secondary=5.0))
    watcher.observe(StaminaState(primary=50.0, secondary=0.0))
    assert len(manager.notifications) == 2
