"""Countdown: a drift-free countdown timer for the desktop."""

__version__ = "0.1.0"
