"""Completion tone playback through QSoundEffect.

The WAV from :mod:`pomofocus.audio.tone` is cached under
``~/Library/Application Support/PomoFocus/sounds`` and loaded once.
Importing this module pulls in QtMultimedia, which needs a working audio
backend; go through :func:`pomofocus.audio.notifier.create_sound_manager`
rather than importing it directly from app code.
"""

from __future__ import annotations

from pathlib import Path

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..settings import APP_SUPPORT_DIR
from .tone import generate_completion_tone


SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"
COMPLETION_WAV = "session_complete.wav"


class SoundManager(QObject):
    """Owns the completion tone's ``QSoundEffect``.

    Muting is not handled here; the caller decides whether to play.
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._volume = 0.7  # 0.0–1.0
        self._path = (sounds_dir or SOUNDS_DIR) / COMPLETION_WAV

        self._ensure_wav_file()
        self._effect = QSoundEffect(self)
        self._effect.setSource(QUrl.fromLocalFile(str(self._path)))
        self._effect.setVolume(self._volume)

    def set_volume(self, level: int) -> None:
        """Set volume (0-100)."""
        self._volume = max(0, min(level, 100)) / 100.0
        self._effect.setVolume(self._volume)

    def play(self) -> None:
        self._effect.play()

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    @property
    def path(self) -> Path:
        return self._path

    def _ensure_wav_file(self) -> None:
        if self._path.exists():
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_bytes(generate_completion_tone())
