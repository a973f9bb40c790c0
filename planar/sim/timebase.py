"""
Simulation time abstraction.

Simulation code reads elapsed time from a `SimClock` advanced by the driver,
never from the wall clock, so a run can be replayed tick for tick.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field


def check_dt(dt: float) -> float:
    """Fail fast on a negative or NaN step; callers own the clock."""
    dt = float(dt)
    if math.isnan(dt) or dt < 0:
        raise ValueError(f"dt must be a non-negative number, got {dt!r}")
    return dt


@dataclass
class SimClock:
    """Accumulates simulated seconds and per-key active time (e.g. per plane)."""

    elapsed: float = 0.0
    active_time: dict[str, float] = field(default_factory=dict)

    def advance(self, dt: float) -> float:
        dt = check_dt(dt)
        self.elapsed += dt
        return self.elapsed

    def mark_active(self, key: str, dt: float) -> float:
        """Add `dt` seconds of active time to `key` and return its total."""
        total = self.active_time.get(key, 0.0) + check_dt(dt)
        self.active_time[key] = total
        return total

    def forget(self, key: str) -> None:
        self.active_time.pop(key, None)
