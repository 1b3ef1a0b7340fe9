"""Main timer display widget.

Layout (top → bottom):
    - Mode selector row (Focus / Short Break / Long Break)
    - Time label (MM:SS) and state caption
    - Progress bar
    - Reset + Start/Pause buttons

The widget holds no timer state of its own: it issues commands to the
engine and re-renders from ``engine.snapshot()``.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QProgressBar, QFrame, QButtonGroup,
)

from ..timer.durations import Mode, format_time
from ..timer.engine import TimerEngine, TimerState


STATE_LABELS: dict[TimerState, str] = {
    TimerState.IDLE:     "READY",
    TimerState.RUNNING:  "RUNNING",
    TimerState.PAUSED:   "PAUSED",
    TimerState.FINISHED: "DONE",
}

PROGRESS_STEPS = 1000


class TimerWidget(QWidget):
    """The timer card: mode tabs, countdown and controls."""

    def __init__(self, engine: TimerEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._mode_buttons: dict[Mode, QPushButton] = {}
        self._build_ui()
        self._connect_signals()
        self.refresh()

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(32, 24, 32, 28)
        layout.setSpacing(12)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        # ── mode selector ────────────────────────────────────────────
        mode_row = QHBoxLayout()
        mode_row.setSpacing(8)
        self._mode_group = QButtonGroup(card)
        self._mode_group.setExclusive(True)
        for mode in Mode:
            btn = QPushButton(mode.label, card)
            btn.setCheckable(True)
            btn.setObjectName("modeButton")
            self._mode_group.addButton(btn)
            self._mode_buttons[mode] = btn
            mode_row.addWidget(btn)
        layout.addLayout(mode_row)

        # ── countdown ────────────────────────────────────────────────
        self._time_label = QLabel("00:00", card)
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._time_label.setStyleSheet("font-size: 64px; font-weight: 700;")
        layout.addWidget(self._time_label)

        self._state_label = QLabel("", card)
        self._state_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._state_label)

        self._progress = QProgressBar(card)
        self._progress.setRange(0, PROGRESS_STEPS)
        self._progress.setTextVisible(False)
        layout.addWidget(self._progress)

        # ── main controls ────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._reset_btn = QPushButton("Reset", card)
        self._reset_btn.setObjectName("secondaryButton")

        self._start_pause_btn = QPushButton("Start", card)
        self._start_pause_btn.setObjectName("primaryButton")

        btn_row.addWidget(self._reset_btn)
        btn_row.addWidget(self._start_pause_btn)
        layout.addLayout(btn_row)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        for mode, btn in self._mode_buttons.items():
            btn.clicked.connect(lambda _checked=False, m=mode: self._engine.select_mode(m))
        self._start_pause_btn.clicked.connect(self._engine.toggle_run)
        self._reset_btn.clicked.connect(self._engine.reset)

        self._engine.remaining_changed.connect(lambda _remaining: self.refresh())
        self._engine.state_changed.connect(lambda _state: self.refresh())

    # ── rendering ─────────────────────────────────────────────────────────

    def refresh(self) -> None:
        snap = self._engine.snapshot()

        self._time_label.setText(format_time(snap.remaining_seconds))
        self._progress.setValue(round(snap.progress * PROGRESS_STEPS))
        self._state_label.setText(STATE_LABELS[self._engine.state])

        self._mode_buttons[snap.mode].setChecked(True)

        self._start_pause_btn.setText("Pause" if snap.is_running else "Start")
        # Nothing left to count: only Reset or a mode switch make sense.
        self._start_pause_btn.setEnabled(
            snap.is_running or snap.remaining_seconds > 0
        )

    # ── test hooks ────────────────────────────────────────────────────────

    @property
    def time_text(self) -> str:
        return self._time_label.text()

    @property
    def start_enabled(self) -> bool:
        return self._start_pause_btn.isEnabled()
