"""QSS stylesheet and state colors for Countdown."""

from __future__ import annotations

from ..timer.engine import TimerState

# ── time label colour per state ──────────────────────────────────────────

STATE_COLORS: dict[TimerState, str] = {
    TimerState.IDLE:    "#E2E2F0",   # plain text
    TimerState.RUNNING: "#89B4FA",   # calm blue
    TimerState.ARMED:   "#7A7A9A",   # muted while stopped
    TimerState.EXPIRED: "#F38BA8",   # done
}

PALETTE: dict[str, str] = {
    "bg":           "#1A1A2E",
    "bg_secondary": "#232340",
    "accent":       "#CBA6F7",
    "accent2":      "#89B4FA",
    "text":         "#E2E2F0",
    "border":       "#313154",
}


def build_stylesheet(palette: dict[str, str]) -> str:
    p = palette
    return f"""
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-size: 14px;
    }}

    QLabel#timeLabel {{
        font-size: 44px;
        font-weight: 700;
    }}

    QPushButton {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 10px;
        padding: 8px 20px;
        font-weight: 600;
    }}

    QPushButton:hover {{
        border-color: {p['accent']};
    }}

    QPushButton#primaryButton {{
        background-color: {p['accent']};
        color: {p['bg']};
        border: none;
        font-size: 17px;
        padding: 12px 36px;
    }}

    QPushButton#primaryButton:hover {{
        background-color: {p['accent2']};
    }}

    QComboBox {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 6px;
        padding: 4px 10px;
    }}
    """
