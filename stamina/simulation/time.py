"""Frame timing for the stamina simulation."""

from __future__ import annotations

from typing import Optional


class SimulationClock:
    """Turns per-frame timestamps into elapsed seconds between steps.

    The first tick after construction or :meth:`reset` only records a baseline
    and yields ``None`` so a resumed loop is never charged for the time spent
    paused.
    """

    def __init__(self, *, units_per_second: float = 1000.0) -> None:
        if units_per_second <= 0:
            raise ValueError("units_per_second must be > 0")
        self.units_per_second = float(units_per_second)
        self.previous_timestamp: Optional[float] = None

    @property
    def has_baseline(self) -> bool:
        return self.previous_timestamp is not None

    def tick(self, now: float) -> Optional[float]:
        """Advance the baseline to ``now`` and return the elapsed seconds."""
        previous = self.previous_timestamp
        self.previous_timestamp = float(now)
        if previous is None:
            return None
        # Timestamps that regress count as a zero-length frame.
        return max(0.0, float(now) - previous) / self.units_per_second

    def reset(self) -> None:
        self.previous_timestamp = None
