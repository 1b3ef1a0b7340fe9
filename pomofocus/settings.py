"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/PomoFocus/settings.json

Usage::

    settings = load_settings()
    settings.sound_enabled = False
    save_settings(settings)

The timer itself never needs this file; it only saves the user from
re-entering durations on every launch.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .timer.durations import DEFAULT_DURATIONS, DurationConfig, Mode


logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "PomoFocus"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"

DEFAULT_SOUND_ENABLED = True
DEFAULT_SOUND_VOLUME = 70

_BOOL_WORDS = {"true": True, "false": False}


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    focus_duration: int = DEFAULT_DURATIONS[Mode.FOCUS]        # seconds
    short_break_duration: int = DEFAULT_DURATIONS[Mode.SHORT_BREAK]
    long_break_duration: int = DEFAULT_DURATIONS[Mode.LONG_BREAK]

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = DEFAULT_SOUND_ENABLED
    sound_volume: int = DEFAULT_SOUND_VOLUME      # 0-100

    def __post_init__(self) -> None:
        # Hand-edited files: "false" is truthy, "loud" is not a volume.
        if isinstance(self.sound_enabled, str):
            self.sound_enabled = _BOOL_WORDS.get(
                self.sound_enabled.strip().lower(), DEFAULT_SOUND_ENABLED,
            )
        elif not isinstance(self.sound_enabled, bool):
            self.sound_enabled = DEFAULT_SOUND_ENABLED
        if isinstance(self.sound_volume, int) and not isinstance(self.sound_volume, bool):
            self.sound_volume = max(0, min(self.sound_volume, 100))
        else:
            self.sound_volume = DEFAULT_SOUND_VOLUME

    def durations(self) -> DurationConfig:
        """Stored durations as an engine config.

        Hand-edited files can hold junk; anything that isn't a positive
        int falls back to that mode's default.
        """
        stored = {
            Mode.FOCUS: self.focus_duration,
            Mode.SHORT_BREAK: self.short_break_duration,
            Mode.LONG_BREAK: self.long_break_duration,
        }
        clean: dict[Mode, int] = {}
        for mode, value in stored.items():
            if isinstance(value, int) and not isinstance(value, bool) and value > 0:
                clean[mode] = value
            else:
                clean[mode] = DEFAULT_DURATIONS[mode]
        return DurationConfig.from_seconds(clean)

    def set_durations(self, config: DurationConfig) -> None:
        self.focus_duration = config.focus
        self.short_break_duration = config.short_break
        self.long_break_duration = config.long_break


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            return Settings(**filtered)
    except (OSError, ValueError, AttributeError, TypeError):
        logger.warning("Could not read %s; using defaults", SETTINGS_PATH, exc_info=True)
    return Settings()


def save_settings(settings: Settings) -> bool:
    """Write settings to disk as JSON.  Returns False if the write failed."""
    try:
        APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
        SETTINGS_PATH.write_text(
            json.dumps(asdict(settings), indent=2) + "\n",
            encoding="utf-8",
        )
    except OSError:
        logger.exception("Could not write %s", SETTINGS_PATH)
        return False
    return True
