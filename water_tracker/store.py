"""Level store: the hydration level and the tracking flag."""
import enum
import math
from typing import NamedTuple


class TrackingState(enum.Enum):
    STOPPED = "stopped"
    RUNNING = "running"


class StatusSnapshot(NamedTuple):
    """Read-only projection of the store, computed on demand."""
    level: float
    running: bool

    def as_dict(self):
        return {"level": round(self.level, 3), "running": self.running}


class LevelStore:
    """Holds the level (ml) and tracking state. Level never goes below zero.

    Not thread safe on its own; TrackingEngine guards every call with its lock.
    """

    def __init__(self, level=0.0):
        self._level = 0.0
        self.state = TrackingState.STOPPED
        self.set_level(level)

    @property
    def level(self):
        return self._level

    @property
    def running(self):
        return self.state is TrackingState.RUNNING

    def set_level(self, value):
        value = float(value)
        if not math.isfinite(value):
            raise ValueError(f"Level must be finite, got {value!r}")
        self._level = max(0.0, value)
        return self._level

    def add(self, amount):
        return self.set_level(self._level + amount)

    def subtract(self, amount):
        # Clamped to zero on underflow
        return self.set_level(self._level - amount)

    def snapshot(self):
        return StatusSnapshot(self._level, self.running)
