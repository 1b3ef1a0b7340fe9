"""Reaction to ``TimerEngine.session_completed``: play the tone, maybe.

``sound_enabled`` on :class:`CompletionNotifier` is the only mute
switch.  Audio problems, from a missing QtMultimedia backend at import
time to a failing ``play()``, are logged here and never reach the engine
or the event loop.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from PyQt6.QtCore import QObject

from ..timer.durations import Mode


logger = logging.getLogger(__name__)


class Player(Protocol):
    def play(self) -> None: ...

    def set_volume(self, level: int) -> None: ...


class CompletionNotifier:
    """Plays the completion tone when a session finishes.

    Connect :meth:`on_session_completed` to
    ``TimerEngine.session_completed``.
    """

    def __init__(self, player: Player | None, *, sound_enabled: bool = True) -> None:
        self._player = player
        self.sound_enabled = sound_enabled

    @property
    def has_audio(self) -> bool:
        return self._player is not None

    def on_session_completed(self, mode: Mode) -> None:
        if not self.sound_enabled:
            logger.debug("Sound disabled; skipping tone for %s", mode.value)
            return
        if self._player is None:
            logger.warning("No audio output; skipping tone for %s", mode.value)
            return
        try:
            self._player.play()
        except Exception:
            logger.exception("Audio playback failed for %s", mode.value)


def create_sound_manager(
    parent: QObject | None = None,
    *,
    sounds_dir: Path | None = None,
) -> Player | None:
    """Build the app's SoundManager, or ``None`` if audio can't be set up."""
    try:
        from .sounds import SoundManager

        return SoundManager(parent=parent, sounds_dir=sounds_dir)
    except Exception:
        logger.exception("Audio unavailable; completion tone disabled")
        return None
