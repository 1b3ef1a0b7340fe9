"""Shared pytest fixtures for PomoFocus tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from pomofocus.timer.durations import DurationConfig
from pomofocus.timer.engine import TimerEngine


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def settings_file(tmp_path, monkeypatch):
    """Keep every test away from the real settings file."""
    path = tmp_path / "settings.json"
    monkeypatch.setattr("pomofocus.settings.APP_SUPPORT_DIR", tmp_path)
    monkeypatch.setattr("pomofocus.settings.SETTINGS_PATH", path)
    yield path


@pytest.fixture
def engine(qapp):
    """Fresh TimerEngine with the default durations."""
    return TimerEngine(parent=None)


@pytest.fixture
def short_engine(qapp):
    """TimerEngine with tiny durations so sessions finish in a few ticks."""
    return TimerEngine(
        parent=None,
        config=DurationConfig(focus=3, short_break=2, long_break=4),
    )
