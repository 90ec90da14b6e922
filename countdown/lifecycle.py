"""Suspend/resume handling for the countdown engine.

The host tells us when the app leaves and re-enters the foreground.  On the
way out we stop ticking; on the way back we recompute the remaining time
from the absolute deadline and, if anything is left, tick again.

Only a countdown that was ticking when the app went away is touched on the
way back.  A paused or idle engine is left exactly as the user left it.

Usage::

    binder = LifecycleBinder(engine)
    binder.attach(QApplication.instance())
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, Qt
from PyQt6.QtGui import QGuiApplication

from .timer.engine import TimerEngine


logger = logging.getLogger(__name__)

# Losing focus (ApplicationInactive) is not a suspension on the desktop.
_SUSPEND_STATES = frozenset({
    Qt.ApplicationState.ApplicationHidden,
    Qt.ApplicationState.ApplicationSuspended,
})


class LifecycleBinder(QObject):
    """Translate application-state changes into engine calls."""

    def __init__(self, engine: TimerEngine, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._suspended: bool = False
        self._was_running: bool = False

    @property
    def suspended(self) -> bool:
        return self._suspended

    # ── host signals ──────────────────────────────────────────────────────

    def attach(self, app: QGuiApplication) -> None:
        app.applicationStateChanged.connect(self._on_application_state)

    def detach(self, app: QGuiApplication) -> None:
        app.applicationStateChanged.disconnect(self._on_application_state)

    def _on_application_state(self, state: Qt.ApplicationState) -> None:
        if state == Qt.ApplicationState.ApplicationActive:
            self.on_resume()
        elif state in _SUSPEND_STATES:
            self.on_suspend()

    # ── lifecycle events ──────────────────────────────────────────────────

    def on_suspend(self) -> None:
        """App is going away: stop wasting ticks."""
        if self._suspended:
            return
        self._suspended = True
        self._was_running = self._engine.is_running
        logger.debug("suspend (running=%s)", self._was_running)
        self._engine.stop()

    def on_resume(self) -> None:
        """App is back: catch a running countdown up with the wall clock."""
        if not self._suspended:
            return
        self._suspended = False
        if not self._was_running:
            logger.debug("resume: engine was stopped, leaving it alone")
            return

        self._was_running = False
        self._engine.resync()
        logger.debug("resume: %ds left", self._engine.remaining_seconds)
        if self._engine.remaining_seconds > 0:
            self._engine.start()
