"""Shared pytest fixtures for Countdown tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from countdown.timer.engine import TimerEngine

from helpers import FakeClock


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def settings_dir(tmp_path, monkeypatch):
    """Point every test at a throwaway settings file."""
    monkeypatch.setattr("countdown.settings.APP_SUPPORT_DIR", tmp_path)
    monkeypatch.setattr("countdown.settings.SETTINGS_PATH", tmp_path / "settings.json")
    yield tmp_path


@pytest.fixture
def clock():
    """Manually advanced wall clock."""
    return FakeClock()


@pytest.fixture
def engine(qapp, clock):
    """Fresh 60-second TimerEngine on the fake clock."""
    return TimerEngine(60, clock=clock)
