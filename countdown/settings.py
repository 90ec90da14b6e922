"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/Countdown/settings.json

Only preferences live here.  The running countdown itself is never saved.

Usage::

    settings = load_settings()
    settings.default_duration = 300
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, field, fields
from pathlib import Path

from .timer.engine import TICK_INTERVAL_MS, clamp_seconds


logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "Countdown"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"

# 1, 2, 3, 5, 10, 30 minutes and 1 hour
DEFAULT_DURATIONS = [60, 120, 180, 300, 600, 1800, 3600]


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    default_duration: int = 60             # seconds
    durations: list[int] = field(default_factory=lambda: list(DEFAULT_DURATIONS))
    tick_interval_ms: int = TICK_INTERVAL_MS

    # ── window ────────────────────────────────────────────────────────
    window_x: int | None = None
    window_y: int | None = None
    window_width: int = 320
    window_height: int = 240

    def __post_init__(self) -> None:
        self.default_duration = clamp_seconds(self.default_duration)
        presets = [clamp_seconds(d) for d in self.durations]
        self.durations = [d for d in presets if d > 0] or list(DEFAULT_DURATIONS)
        if self.tick_interval_ms <= 0:
            self.tick_interval_ms = TICK_INTERVAL_MS


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    if not SETTINGS_PATH.exists():
        return Settings()
    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
        # Only use keys that exist in the dataclass
        valid_keys = {f.name for f in fields(Settings)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", SETTINGS_PATH, exc)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
