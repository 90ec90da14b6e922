"""Main application window for Countdown."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtWidgets import QApplication, QMainWindow, QStatusBar, QVBoxLayout, QWidget

from .lifecycle import LifecycleBinder
from .settings import Settings, load_settings, save_settings
from .timer.engine import TimerEngine, TimerState
from .ui.styles import PALETTE, build_stylesheet
from .ui.timer_widget import CountdownWidget, format_time


logger = logging.getLogger(__name__)

STATUS_MESSAGES: dict[TimerState, str] = {
    TimerState.IDLE:    "Ready",
    TimerState.RUNNING: "Counting down...",
    TimerState.ARMED:   "Stopped",
    TimerState.EXPIRED: "Time's up!",
}


class CountdownApp(QMainWindow):
    """Main application window."""

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Countdown")

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings if settings is not None else load_settings()

        # ── geometry save timer ───────────────────────────────────────
        self._geometry_save_timer = QTimer(self)
        self._geometry_save_timer.setSingleShot(True)
        self._geometry_save_timer.setInterval(500)
        self._geometry_save_timer.timeout.connect(self._save_geometry)

        # ── engine + lifecycle ────────────────────────────────────────
        self._timer_engine = TimerEngine(
            self._settings.default_duration,
            self,
            tick_interval=self._settings.tick_interval_ms,
        )
        self._lifecycle = LifecycleBinder(self._timer_engine, self)
        self._host_app = QApplication.instance()
        if self._host_app is not None:
            self._lifecycle.attach(self._host_app)

        # ── central widget ────────────────────────────────────────────
        self.setStyleSheet(build_stylesheet(PALETTE))
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(16, 12, 16, 12)

        self._timer_widget = CountdownWidget(
            self._timer_engine,
            self._settings.durations,
            central,
            selected=self._settings.default_duration,
        )
        layout.addWidget(self._timer_widget)

        self._status_bar = QStatusBar(self)
        self.setStatusBar(self._status_bar)

        self._timer_engine.state_changed.connect(self._on_state_changed)
        self._timer_engine.remaining_changed.connect(self._on_remaining_changed)
        self._on_state_changed(self._timer_engine.state)

        self._restore_geometry()

    # ══════════════════════════════════════════════════════════════════
    #  TIMER SIGNALS
    # ══════════════════════════════════════════════════════════════════

    def _on_state_changed(self, state: TimerState) -> None:
        self._status_bar.showMessage(STATUS_MESSAGES.get(state, ""))
        if state == TimerState.EXPIRED:
            logger.info("Countdown finished")
            QApplication.beep()
        self._on_remaining_changed(self._timer_engine.remaining_seconds)

    def _on_remaining_changed(self, remaining: int) -> None:
        if self._timer_engine.is_running:
            self.setWindowTitle(f"Countdown \u2014 {format_time(remaining)}")
        else:
            self.setWindowTitle("Countdown")

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW STATE
    # ══════════════════════════════════════════════════════════════════

    def _restore_geometry(self) -> None:
        """Restore window position and size from settings."""
        s = self._settings
        if s.window_x is not None and s.window_y is not None:
            self.move(s.window_x, s.window_y)
        if s.window_width and s.window_height:
            self.resize(s.window_width, s.window_height)

    def _save_geometry(self) -> None:
        """Persist current window geometry to settings."""
        if not self.isVisible():
            return
        pos = self.pos()
        size = self.size()
        self._settings.window_x = pos.x()
        self._settings.window_y = pos.y()
        self._settings.window_width = size.width()
        self._settings.window_height = size.height()
        save_settings(self._settings)

    def _schedule_geometry_save(self) -> None:
        """Debounce geometry saves: restart the 500ms timer on each move or resize."""
        self._geometry_save_timer.start()

    # ══════════════════════════════════════════════════════════════════
    #  KEYBOARD SHORTCUTS
    # ══════════════════════════════════════════════════════════════════

    def _on_space(self) -> None:
        """Same as clicking the main button."""
        self._timer_widget._on_main_clicked()

    def _on_escape(self) -> None:
        """Re-arm with the selected duration (no-op while idle)."""
        if self._timer_engine.state != TimerState.IDLE:
            self._timer_engine.reset(self._timer_widget.selected_duration)

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._save_geometry()
        self._timer_engine.stop()
        if self._host_app is not None:
            self._lifecycle.detach(self._host_app)
            self._host_app = None
        event.accept()

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._schedule_geometry_save()

    def moveEvent(self, event) -> None:  # type: ignore[override]
        super().moveEvent(event)
        self._schedule_geometry_save()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Handle Space (start/stop/reset) and Escape (re-arm) globally."""
        key = event.key()
        if key == Qt.Key.Key_Space and not event.modifiers():
            self._on_space()
            event.accept()
            return
        if key == Qt.Key.Key_Escape:
            self._on_escape()
            event.accept()
            return
        super().keyPressEvent(event)
