"""Main application window for PomoFocus."""

from __future__ import annotations

import logging

from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QFrame, QDialog,
)

from .timer.durations import DurationConfig, format_time
from .timer.engine import TimerEngine, TimerState
from .ui.timer_widget import TimerWidget
from .ui.settings_dialog import SettingsDialog
from .settings import Settings, load_settings, save_settings
from .audio.notifier import CompletionNotifier, Player, create_sound_manager


logger = logging.getLogger(__name__)

SOUND_ON_TEXT = "\U0001F50A"
SOUND_OFF_TEXT = "\U0001F507"


class PomoFocusApp(QMainWindow):
    """Main application window."""

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        sound_manager: Player | None = None,
        persist: bool = True,
    ) -> None:
        super().__init__()
        self.setWindowTitle("PomoFocus")
        self.setMinimumSize(420, 360)

        # ── settings ──────────────────────────────────────────────────
        self._persist = persist
        self._settings: Settings = settings if settings is not None else load_settings()

        # ── engine ────────────────────────────────────────────────────
        self._timer_engine = TimerEngine(self, config=self._settings.durations())

        # ── sound ─────────────────────────────────────────────────────
        if sound_manager is None:
            sound_manager = create_sound_manager(parent=self)
        self._sound_manager = sound_manager
        if self._sound_manager is not None:
            self._sound_manager.set_volume(self._settings.sound_volume)
        self._notifier = CompletionNotifier(
            self._sound_manager, sound_enabled=self._settings.sound_enabled,
        )

        self._build_ui()
        self._build_menu()
        self._connect_signals()
        self._update_title()

    # ══════════════════════════════════════════════════════════════════
    #  BUILD
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        central = QWidget(self)
        root = QVBoxLayout(central)
        root.setContentsMargins(16, 16, 16, 16)
        root.setSpacing(12)

        root.addWidget(self._build_top_bar(central))

        self._timer_widget = TimerWidget(self._timer_engine, central)
        root.addWidget(self._timer_widget)

        self.setCentralWidget(central)

    def _build_top_bar(self, parent: QWidget) -> QWidget:
        bar = QFrame(parent)
        bar.setObjectName("card")
        layout = QHBoxLayout(bar)
        layout.setContentsMargins(20, 10, 20, 10)
        layout.setSpacing(8)

        title = QLabel("PomoFocus", bar)
        title.setStyleSheet("font-size: 17px; font-weight: 700; letter-spacing: 1px;")

        self._sound_btn = QPushButton(bar)
        self._sound_btn.setObjectName("secondaryButton")
        self._sound_btn.setFixedSize(32, 32)
        self._sound_btn.clicked.connect(self.toggle_sound)
        self._refresh_sound_button()

        self._gear_btn = QPushButton("⚙", bar)
        self._gear_btn.setObjectName("secondaryButton")
        self._gear_btn.setFixedSize(32, 32)
        self._gear_btn.setToolTip("Settings (Ctrl+,)")
        self._gear_btn.clicked.connect(self._open_settings)

        layout.addWidget(title)
        layout.addStretch()
        layout.addWidget(self._sound_btn)
        layout.addWidget(self._gear_btn)
        return bar

    def _build_menu(self) -> None:
        menu = self.menuBar().addMenu("&Timer")

        start_action = QAction("Start / Pause", self)
        start_action.setShortcut(QKeySequence("Space"))
        start_action.triggered.connect(self._timer_engine.toggle_run)
        menu.addAction(start_action)

        reset_action = QAction("Reset", self)
        reset_action.setShortcut(QKeySequence("Ctrl+R"))
        reset_action.triggered.connect(self._timer_engine.reset)
        menu.addAction(reset_action)

        menu.addSeparator()

        prefs_action = QAction("Settings…", self)
        prefs_action.setShortcut(QKeySequence.StandardKey.Preferences)
        prefs_action.triggered.connect(self._open_settings)
        menu.addAction(prefs_action)

        quit_action = QAction("Quit", self)
        quit_action.setShortcut(QKeySequence.StandardKey.Quit)
        quit_action.triggered.connect(self.close)
        menu.addAction(quit_action)

    def _connect_signals(self) -> None:
        self._timer_engine.session_completed.connect(self._notifier.on_session_completed)
        self._timer_engine.remaining_changed.connect(lambda _r: self._update_title())
        self._timer_engine.state_changed.connect(lambda _s: self._update_title())

    # ══════════════════════════════════════════════════════════════════
    #  SOUND
    # ══════════════════════════════════════════════════════════════════

    def toggle_sound(self) -> None:
        self.set_sound_enabled(not self._settings.sound_enabled)

    def set_sound_enabled(self, enabled: bool) -> None:
        self._settings.sound_enabled = enabled
        self._notifier.sound_enabled = enabled
        self._refresh_sound_button()
        self._save()

    def _refresh_sound_button(self) -> None:
        enabled = self._settings.sound_enabled
        self._sound_btn.setText(SOUND_ON_TEXT if enabled else SOUND_OFF_TEXT)
        self._sound_btn.setToolTip("Mute sound" if enabled else "Enable sound")

    # ══════════════════════════════════════════════════════════════════
    #  SETTINGS
    # ══════════════════════════════════════════════════════════════════

    def _open_settings(self) -> None:
        """Open the settings dialog and apply it if the user saves."""
        dlg = SettingsDialog(self._settings, parent=self)
        if dlg.exec() != QDialog.DialogCode.Accepted:
            logger.debug("Settings dialog cancelled")
            return
        self.apply_settings(dlg.duration_config(), sound_enabled=dlg.sound_enabled)

    def apply_settings(self, config: DurationConfig, *, sound_enabled: bool) -> None:
        """Store new durations and restart the active mode from them."""
        self._settings.set_durations(config)
        self._timer_engine.apply_config(config)
        self.set_sound_enabled(sound_enabled)

    def _save(self) -> None:
        if self._persist:
            save_settings(self._settings)

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW TITLE
    # ══════════════════════════════════════════════════════════════════

    def _update_title(self) -> None:
        engine = self._timer_engine
        if engine.state == TimerState.IDLE:
            self.setWindowTitle("PomoFocus")
        else:
            self.setWindowTitle(
                f"{format_time(engine.remaining)} · {engine.mode.label} | PomoFocus"
            )

    # ══════════════════════════════════════════════════════════════════
    #  ACCESSORS
    # ══════════════════════════════════════════════════════════════════

    @property
    def timer_engine(self) -> TimerEngine:
        return self._timer_engine

    @property
    def timer_widget(self) -> TimerWidget:
        return self._timer_widget

    @property
    def settings(self) -> Settings:
        return self._settings
