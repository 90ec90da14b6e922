"""Timer package."""

from .engine import (
    TimerEngine,
    TimerState,
    TICK_INTERVAL_MS,
    clamp_seconds,
)

__all__ = [
    "TimerEngine",
    "TimerState",
    "TICK_INTERVAL_MS",
    "clamp_seconds",
]
