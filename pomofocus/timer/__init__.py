"""Timer package."""

from .durations import (
    DurationConfig,
    Mode,
    MODE_LABELS,
    DEFAULT_DURATIONS,
    normalize,
    format_time,
    split_seconds,
)
from .engine import (
    TimerEngine,
    TimerState,
    SessionSnapshot,
    TICK_INTERVAL_MS,
)

__all__ = [
    "DurationConfig",
    "Mode",
    "MODE_LABELS",
    "DEFAULT_DURATIONS",
    "normalize",
    "format_time",
    "split_seconds",
    "TimerEngine",
    "TimerState",
    "SessionSnapshot",
    "TICK_INTERVAL_MS",
]
