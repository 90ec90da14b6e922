"""Countdown state machine.

States
------
IDLE      Not running, no deadline. Waiting for the first start.
ARMED     Stopped mid-countdown. The deadline is kept ("paused").
RUNNING   Ticking toward the deadline.
EXPIRED   Reached zero. The deadline stays at the expired instant.

Transitions
-----------
IDLE → RUNNING             (start)
RUNNING → ARMED            (stop)
ARMED → RUNNING            (start, same countdown resumes)
RUNNING → EXPIRED          (tick or resync reaches 0)
ARMED → EXPIRED            (resync reaches 0)
Any → IDLE                 (reset)

Remaining time is never decremented per tick.  Every tick recomputes it
from the absolute deadline, so a process that was suspended for an hour
shows the right value on the first tick (or ``resync()``) after it wakes.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal


logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class TimerState(Enum):
    IDLE = "idle"
    ARMED = "armed"
    RUNNING = "running"
    EXPIRED = "expired"


# ── constants ─────────────────────────────────────────────────────────────

TICK_INTERVAL_MS = 100  # recomputation period while running


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def clamp_seconds(seconds: int | None) -> int:
    """Clamp a caller-supplied duration to a non-negative whole number.

    ``None`` and negative values mean "already expired" and become 0.
    """
    if seconds is None:
        return 0
    return max(0, int(seconds))


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Drift-free countdown timer driven by a Qt timer.

    Signals
    -------
    remaining_changed(remaining_seconds: int)
        Emitted whenever the whole-second remaining value changes.
    running_changed(is_running: bool)
        Emitted whenever the ticking subscription starts or stops.
    state_changed(new_state: TimerState)
        Emitted on every state transition.
    expired()
        Emitted once each time the countdown reaches zero.

    All signals are emitted synchronously, after every field has been
    updated, so a slot always sees a consistent engine.
    """

    remaining_changed = pyqtSignal(int)
    running_changed = pyqtSignal(bool)
    state_changed = pyqtSignal(object)
    expired = pyqtSignal()

    def __init__(
        self,
        initial_seconds: int | None = 0,
        parent: QObject | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
        tick_interval: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)

        self._clock: Callable[[], datetime] = clock or _utcnow

        # ── countdown state ───────────────────────────────────────────
        self._remaining: int = clamp_seconds(initial_seconds)
        self._running: bool = False
        self._end_at: datetime | None = None
        self._stopped_at: datetime | None = None
        self._state: TimerState = self._derive_state()

        # ── Qt timer ──────────────────────────────────────────────────
        # Parented to the engine: deleting the engine deletes the timer.
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(max(1, tick_interval))
        self._qt_timer.timeout.connect(self._on_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def remaining_seconds(self) -> int:
        """Whole seconds left, as of the last recomputation."""
        return self._remaining

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def end_at(self) -> datetime | None:
        """The instant the countdown reaches zero, or None when idle."""
        return self._end_at

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def tick_interval(self) -> int:
        """Recomputation period in milliseconds."""
        return self._qt_timer.interval()

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Start or resume the countdown.  No-op when running or at zero."""
        if self._running or self._remaining <= 0:
            return

        now = self._clock()
        if self._end_at is None:
            self._end_at = now + timedelta(seconds=self._remaining)
        elif self._stopped_at is not None:
            # Time spent stopped does not count against the countdown.
            self._end_at += max(timedelta(0), now - self._stopped_at)
        self._stopped_at = None

        logger.debug("start: %ds left, deadline %s", self._remaining, self._end_at)
        self._qt_timer.start()
        self._commit(self._remaining, True)

    def stop(self) -> None:
        """Pause.  Keeps the deadline and the remaining value."""
        self._qt_timer.stop()
        if not self._running:
            return
        self._stopped_at = self._clock()
        logger.debug("stop: %ds left", self._remaining)
        self._commit(self._remaining, False)

    def reset(self, seconds: int | None) -> None:
        """Stop, clear the deadline and re-arm with *seconds*.

        Observers see a single transition straight to IDLE.
        """
        self._qt_timer.stop()
        self._end_at = None
        self._stopped_at = None
        logger.debug("reset to %s", seconds)
        self._commit(clamp_seconds(seconds), False)

    def resync(self) -> None:
        """Recompute remaining time from the deadline right now.

        Call this when the host comes back from suspension, before
        deciding whether to start again.  All wall-clock time since the
        deadline was fixed counts, including the suspended stretch; that
        gap is consumed so a following ``start()`` does not shift the
        deadline again.  Without a deadline this does nothing.
        """
        if self._end_at is None:
            return
        now = self._clock()
        remaining = self._seconds_left(now)
        logger.debug("resync: %ds left", remaining)
        if remaining > 0:
            if not self._running:
                self._stopped_at = now
            self._commit(remaining, self._running)
        else:
            self._expire(now)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> None:
        # A timeout already queued when stop() ran must not resurrect us.
        if not self._running or self._end_at is None:
            return
        now = self._clock()
        remaining = self._seconds_left(now)
        if remaining > 0:
            self._commit(remaining, True)
        else:
            self._expire(now)

    def _seconds_left(self, now: datetime) -> int:
        assert self._end_at is not None
        return max(0, math.floor((self._end_at - now).total_seconds()))

    def _expire(self, now: datetime) -> None:
        self._qt_timer.stop()
        was_expired = self._state == TimerState.EXPIRED
        self._stopped_at = now
        self._commit(0, False)
        if not was_expired:
            logger.debug("expired at %s", self._end_at)
            self.expired.emit()

    def _derive_state(self) -> TimerState:
        if self._running:
            return TimerState.RUNNING
        if self._end_at is None:
            return TimerState.IDLE
        if self._remaining == 0:
            return TimerState.EXPIRED
        return TimerState.ARMED

    def _commit(self, remaining: int, running: bool) -> None:
        """Store new values, then emit a signal for each one that changed."""
        old_remaining = self._remaining
        old_running = self._running
        old_state = self._state

        self._remaining = remaining
        self._running = running
        self._state = self._derive_state()

        if self._remaining != old_remaining:
            self.remaining_changed.emit(self._remaining)
        if self._running != old_running:
            self.running_changed.emit(self._running)
        if self._state != old_state:
            self.state_changed.emit(self._state)
