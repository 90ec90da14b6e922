"""UI package."""

from .timer_widget import CountdownWidget, format_time
from .styles import STATE_COLORS, build_stylesheet

__all__ = [
    "CountdownWidget",
    "format_time",
    "STATE_COLORS",
    "build_stylesheet",
]
