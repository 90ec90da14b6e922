"""Countdown display widget.

Layout (top → bottom):
    - Remaining time (large, centred)
    - Main action button: Start / Stop / Reset
    - Duration picker + "Set Timer" (only while stopped)
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QComboBox, QFrame,
)

from ..timer.engine import TimerEngine, TimerState
from .styles import STATE_COLORS


def format_time(seconds: int) -> str:
    """``HH:MM:SS`` from one hour upward, ``MM:SS`` below."""
    hours, rest = divmod(max(0, seconds), 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


class CountdownWidget(QWidget):
    """Time display and controls for a single :class:`TimerEngine`.

    The widget never touches engine state directly; it reads the public
    properties and calls ``start`` / ``stop`` / ``reset``.
    """

    def __init__(
        self,
        engine: TimerEngine,
        durations: list[int],
        parent: QWidget | None = None,
        *,
        selected: int | None = None,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._durations = list(durations)
        self._build_ui()
        self._select_duration(selected if selected is not None else engine.remaining_seconds)
        self._connect_signals()
        self._refresh()

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(24, 20, 24, 20)
        layout.setSpacing(12)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._time_label = QLabel("", card)
        self._time_label.setObjectName("timeLabel")
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._time_label)

        self._main_btn = QPushButton("Start", card)
        self._main_btn.setObjectName("primaryButton")
        layout.addWidget(self._main_btn, alignment=Qt.AlignmentFlag.AlignCenter)

        picker_row = QHBoxLayout()
        picker_row.setSpacing(8)
        picker_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._picker = QComboBox(card)
        for seconds in self._durations:
            self._picker.addItem(format_time(seconds), seconds)

        self._set_btn = QPushButton("Set Timer", card)
        self._set_btn.setObjectName("secondaryButton")

        picker_row.addWidget(self._picker)
        picker_row.addWidget(self._set_btn)
        layout.addLayout(picker_row)

    def _select_duration(self, seconds: int) -> None:
        index = self._picker.findData(seconds)
        self._picker.setCurrentIndex(index if index >= 0 else 0)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._main_btn.clicked.connect(self._on_main_clicked)
        self._set_btn.clicked.connect(self._on_set_clicked)

        self._engine.remaining_changed.connect(self._refresh)
        self._engine.running_changed.connect(self._refresh)
        self._engine.state_changed.connect(self._refresh)

    # ── slots ─────────────────────────────────────────────────────────────

    @property
    def selected_duration(self) -> int:
        data = self._picker.currentData()
        return int(data) if data is not None else 0

    def button_title(self) -> str:
        if self._engine.is_running:
            return "Stop"
        if self._engine.remaining_seconds > 0:
            return "Start"
        return "Reset"

    def _on_main_clicked(self) -> None:
        if self._engine.is_running:
            self._engine.stop()
        elif self._engine.remaining_seconds > 0:
            self._engine.start()
        else:
            self._engine.reset(self.selected_duration)

    def _on_set_clicked(self) -> None:
        self._engine.reset(self.selected_duration)

    def _refresh(self, *_args: object) -> None:
        self._time_label.setText(format_time(self._engine.remaining_seconds))
        colour = STATE_COLORS.get(self._engine.state, STATE_COLORS[TimerState.IDLE])
        self._time_label.setStyleSheet(f"color: {colour};")
        self._main_btn.setText(self.button_title())

        stopped = not self._engine.is_running
        self._picker.setVisible(stopped)
        self._set_btn.setVisible(stopped)
