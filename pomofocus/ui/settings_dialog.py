"""Settings dialog for PomoFocus.

A modal dialog with minute/second fields for each mode and a sound
toggle.  Nothing is applied until the user clicks Save; the caller then
reads :meth:`SettingsDialog.duration_config` and hands it to the engine.
"""

from __future__ import annotations

from typing import Any

from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QGridLayout,
    QLabel, QSpinBox, QCheckBox, QPushButton, QFrame, QWidget,
)

from ..settings import Settings
from ..timer.durations import (
    DurationConfig, Mode, MAX_MINUTES, MAX_SECONDS,
)


class SettingsDialog(QDialog):
    """Modal dialog for durations and sound."""

    def __init__(
        self,
        settings: Settings,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setMinimumWidth(360)
        self.setModal(True)

        self._settings = settings
        self._minute_spins: dict[Mode, QSpinBox] = {}
        self._second_spins: dict[Mode, QSpinBox] = {}

        self._build_ui()
        self._populate()

    # ══════════════════════════════════════════════════════════════════
    #  BUILD UI
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(24, 20, 24, 20)
        root.setSpacing(16)

        # ── Time section ─────────────────────────────────────────────
        root.addWidget(self._section_label("Time (Min : Sec)"))
        grid = QGridLayout()
        grid.setHorizontalSpacing(12)
        grid.setVerticalSpacing(10)

        for row, mode in enumerate(Mode):
            grid.addWidget(QLabel(f"{mode.label}:"), row, 0)

            minutes = QSpinBox()
            minutes.setRange(0, MAX_MINUTES[mode])
            minutes.setSuffix(" min")
            grid.addWidget(minutes, row, 1)

            seconds = QSpinBox()
            seconds.setRange(0, MAX_SECONDS)
            seconds.setSuffix(" sec")
            grid.addWidget(seconds, row, 2)

            self._minute_spins[mode] = minutes
            self._second_spins[mode] = seconds

        root.addLayout(grid)

        # ── separator ────────────────────────────────────────────────
        root.addWidget(self._separator())

        # ── Sound section ────────────────────────────────────────────
        root.addWidget(self._section_label("Sound"))
        self._sound_cb = QCheckBox("Play a tone when a session ends")
        root.addWidget(self._sound_cb)

        # ── buttons ──────────────────────────────────────────────────
        root.addStretch()
        btn_row = QHBoxLayout()
        btn_row.addStretch()
        cancel_btn = QPushButton("Cancel")
        cancel_btn.setObjectName("secondaryButton")
        cancel_btn.clicked.connect(self.reject)
        save_btn = QPushButton("Save")
        save_btn.setObjectName("primaryButton")
        save_btn.setDefault(True)
        save_btn.clicked.connect(self.accept)
        btn_row.addWidget(cancel_btn)
        btn_row.addWidget(save_btn)
        root.addLayout(btn_row)

    # ── helpers ──────────────────────────────────────────────────────

    @staticmethod
    def _section_label(text: str) -> QLabel:
        lbl = QLabel(text)
        lbl.setStyleSheet("font-size: 15px; font-weight: 700; margin-top: 4px;")
        return lbl

    @staticmethod
    def _separator() -> QFrame:
        line = QFrame()
        line.setFrameShape(QFrame.Shape.HLine)
        line.setFixedHeight(1)
        return line

    # ══════════════════════════════════════════════════════════════════
    #  POPULATE FROM SETTINGS
    # ══════════════════════════════════════════════════════════════════

    def _populate(self) -> None:
        raw = self._settings.durations().to_raw()
        for mode in Mode:
            minutes = raw[mode]["minutes"]
            # Stored values may exceed the usual range.
            if minutes > self._minute_spins[mode].maximum():
                self._minute_spins[mode].setMaximum(minutes)
            self._minute_spins[mode].setValue(minutes)
            self._second_spins[mode].setValue(raw[mode]["seconds"])
        self._sound_cb.setChecked(self._settings.sound_enabled)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    def raw_durations(self) -> dict[Mode, dict[str, Any]]:
        return {
            mode: {
                "minutes": self._minute_spins[mode].value(),
                "seconds": self._second_spins[mode].value(),
            }
            for mode in Mode
        }

    def duration_config(self) -> DurationConfig:
        """Normalized durations as entered (0:00 falls back to defaults)."""
        return DurationConfig.from_raw(self.raw_durations())

    @property
    def sound_enabled(self) -> bool:
        return self._sound_cb.isChecked()
