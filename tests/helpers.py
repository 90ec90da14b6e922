"""Shared test helpers for Countdown."""

from datetime import datetime, timedelta, timezone

from countdown.timer.engine import TimerEngine


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeClock:
    """Callable wall clock that only moves when told to."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 7, 13, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


def advance_and_tick(engine: TimerEngine, clock: FakeClock, seconds: float) -> None:
    """Move the clock forward and deliver one tick, as the Qt timer would."""
    clock.advance(seconds)
    engine._on_tick()
