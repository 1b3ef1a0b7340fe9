"""Countdown state machine for PomoFocus.

States
------
IDLE       Full duration on the clock, not running.
RUNNING    Counting down.
PAUSED     Stopped part-way (0 < remaining < full).
FINISHED   Reached zero.  Stays here until the next command.

Transitions
-----------
IDLE | PAUSED → RUNNING          (toggle_run)
RUNNING → PAUSED                 (toggle_run)
RUNNING → FINISHED               (tick reaches 0)
Any → IDLE                       (reset / select_mode / apply_config)

There is no automatic focus → break cycling: every mode switch is a
manual, independent reset.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .durations import DurationConfig, Mode


logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000


# ── enums ─────────────────────────────────────────────────────────────────


class TimerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


# ── snapshot ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of the engine for one render."""

    mode: Mode
    remaining_seconds: int
    is_running: bool
    progress: float


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Single-countdown Pomodoro timer driven by its own ``QTimer``.

    Signals
    -------
    remaining_changed(remaining_seconds: int)
        Emitted whenever the time left changes (ticks and resets).
    state_changed(new_state: TimerState)
        Emitted when the derived state changes.
    session_completed(mode: Mode)
        Emitted exactly once each time a running countdown hits zero.
    """

    remaining_changed = pyqtSignal(int)
    state_changed = pyqtSignal(object)
    session_completed = pyqtSignal(object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        config: DurationConfig | None = None,
    ) -> None:
        super().__init__(parent)

        self._config: DurationConfig = config or DurationConfig()
        self._mode: Mode = Mode.FOCUS
        self._remaining: int = self._config[self._mode]
        self._running: bool = False
        self._last_state: TimerState = self.state

        self._clock = QTimer(self)
        self._clock.setInterval(TICK_INTERVAL_MS)
        self._clock.timeout.connect(self.tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def remaining(self) -> int:
        """Seconds left on the clock."""
        return self._remaining

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def config(self) -> DurationConfig:
        return self._config

    @property
    def total_duration(self) -> int:
        """Configured length of the active mode."""
        return self._config[self._mode]

    @property
    def progress(self) -> float:
        """0.0 → 1.0 fraction of the active duration elapsed."""
        total = self.total_duration
        if total <= 0:
            return 0.0
        return max(0.0, min(1.0, 1 - self._remaining / total))

    @property
    def state(self) -> TimerState:
        if self._running:
            return TimerState.RUNNING
        if self._remaining == self.total_duration:
            return TimerState.IDLE
        if self._remaining == 0:
            return TimerState.FINISHED
        return TimerState.PAUSED

    def duration_for(self, mode: Mode) -> int:
        return self._config[mode]

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            mode=self._mode,
            remaining_seconds=self._remaining,
            is_running=self._running,
            progress=self.progress,
        )

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def select_mode(self, mode: Mode) -> None:
        """Switch to *mode* and load its full duration, stopped."""
        self._stop()
        self._mode = mode
        self._set_remaining(self._config[mode])
        logger.debug("Mode selected: %s", mode.value)
        self._sync_state()

    def toggle_run(self) -> None:
        """Start when stopped, pause when running.

        Starting with nothing left on the clock is allowed; the next
        tick reports the session as complete.
        """
        if self._running:
            self._stop()
        else:
            self._running = True
            self._clock.start()
        self._sync_state()

    def reset(self) -> None:
        """Stop and put the full duration of the active mode back."""
        self._stop()
        self._set_remaining(self._config[self._mode])
        self._sync_state()

    def apply_config(self, config: DurationConfig) -> None:
        """Replace every duration at once and reset the active session.

        A running countdown is cancelled: the new configuration always
        starts the current mode over from its full length.
        """
        self._config = config
        logger.info(
            "Durations applied: focus=%ds short_break=%ds long_break=%ds",
            config.focus, config.short_break, config.long_break,
        )
        self.reset()

    def tick(self) -> None:
        """Advance the countdown by one second.

        Ignored unless running, so a timeout that was already queued
        when the clock got stopped cannot touch a newer session.
        """
        if not self._running:
            return
        if self._remaining > 0:
            self._set_remaining(self._remaining - 1)
        if self._remaining == 0:
            self._finish_session()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _finish_session(self) -> None:
        self._stop()
        completed = self._mode
        self._sync_state()
        logger.info("Session complete: %s", completed.value)
        self.session_completed.emit(completed)

    def _stop(self) -> None:
        self._clock.stop()
        self._running = False

    def _set_remaining(self, value: int) -> None:
        value = max(0, value)
        if value == self._remaining:
            return
        self._remaining = value
        self.remaining_changed.emit(value)

    def _sync_state(self) -> None:
        new_state = self.state
        if new_state is self._last_state:
            return
        self._last_state = new_state
        self.state_changed.emit(new_state)
