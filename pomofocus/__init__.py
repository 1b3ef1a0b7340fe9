"""PomoFocus: a single-countdown Pomodoro timer."""

__version__ = "0.1.0"
