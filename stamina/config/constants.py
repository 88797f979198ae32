"""Constant values for the stamina simulation."""

from __future__ import annotations

CAP = 100.0

# Recovery rate used by the single-bar exhaustion variant, where it is not tunable.
EXHAUSTION_RECOVERY_RATE = 20.0

DEFAULTS = {
    "WINDOW_WIDTH": 960,
    "WINDOW_HEIGHT": 600,
    "FPS": 60,
    "POLICY": "dual",
    "PRIMARY_DECAY_RATE": 1.5,
    "SECONDARY_DRAIN_RATE": 30.0,
    "SECONDARY_RECOVERY_RATE": 20.0,
}
