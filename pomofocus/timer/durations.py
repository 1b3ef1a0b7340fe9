"""Per-mode session lengths and the rules for turning user input into them.

Durations are always whole seconds.  User edits arrive as minute/second
pairs (typically straight out of a form, so possibly strings, blanks or
negative numbers) and are normalized here before the engine ever sees
them.

Zero policy
-----------
A total of ``0`` seconds is never stored.  It silently reverts to the
built-in default for that mode.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


# ── enums ─────────────────────────────────────────────────────────────────


class Mode(Enum):
    FOCUS = "focus"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"

    @property
    def label(self) -> str:
        return MODE_LABELS[self]


MODE_LABELS: dict[Mode, str] = {
    Mode.FOCUS: "Focus",
    Mode.SHORT_BREAK: "Short Break",
    Mode.LONG_BREAK: "Long Break",
}


# ── constants ─────────────────────────────────────────────────────────────

DEFAULT_DURATIONS: Mapping[Mode, int] = MappingProxyType({
    Mode.FOCUS: 25 * 60,
    Mode.SHORT_BREAK: 5 * 60,
    Mode.LONG_BREAK: 15 * 60,
})

# Upper bounds offered by the settings dialog (minutes).  Not enforced here.
MAX_MINUTES: dict[Mode, int] = {
    Mode.FOCUS: 90,
    Mode.SHORT_BREAK: 30,
    Mode.LONG_BREAK: 60,
}
MAX_SECONDS = 59

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


# ── normalization ─────────────────────────────────────────────────────────


def _to_int(value: Any) -> int:
    """Best-effort integer parse; anything unusable counts as 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        # Leading integer only: "12abc" -> 12, "1.5" -> 1
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else 0
    return 0


def normalize(raw_minutes: Any, raw_seconds: Any, fallback_seconds: int) -> int:
    """Collapse a minutes/seconds entry into a total number of seconds.

    Missing or non-numeric parts count as 0, negative parts are clamped
    to 0, and a total of 0 is replaced by *fallback_seconds*.

    >>> normalize(25, 0, 1500)
    1500
    >>> normalize(-5, 10, 1500)
    10
    >>> normalize("", None, 300)
    300
    """
    minutes = max(0, _to_int(raw_minutes))
    seconds = max(0, _to_int(raw_seconds))
    total = minutes * 60 + seconds
    if total == 0:
        return fallback_seconds
    return total


def split_seconds(seconds: int) -> tuple[int, int]:
    """``(minutes, seconds)`` for a total second count."""
    return divmod(max(0, seconds), 60)


def format_time(seconds: int) -> str:
    """Render a countdown value as ``MM:SS``."""
    m, s = split_seconds(seconds)
    return f"{m:02d}:{s:02d}"


# ── config ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class DurationConfig:
    """Immutable set of per-mode durations (seconds).

    Replace it wholesale with a new instance; there is no setter.
    """

    focus: int = DEFAULT_DURATIONS[Mode.FOCUS]
    short_break: int = DEFAULT_DURATIONS[Mode.SHORT_BREAK]
    long_break: int = DEFAULT_DURATIONS[Mode.LONG_BREAK]

    def __post_init__(self) -> None:
        for mode in Mode:
            value = self[mode]
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ValueError(
                    f"{mode.label} duration must be a non-negative int, got {value!r}"
                )

    def __getitem__(self, mode: Mode) -> int:
        return getattr(self, mode.value)

    def as_dict(self) -> dict[Mode, int]:
        return {mode: self[mode] for mode in Mode}

    @classmethod
    def from_seconds(cls, durations: Mapping[Mode, int]) -> DurationConfig:
        """Build from a ``{Mode: seconds}`` mapping; absent modes use defaults."""
        return cls(
            focus=durations.get(Mode.FOCUS, DEFAULT_DURATIONS[Mode.FOCUS]),
            short_break=durations.get(
                Mode.SHORT_BREAK, DEFAULT_DURATIONS[Mode.SHORT_BREAK]
            ),
            long_break=durations.get(
                Mode.LONG_BREAK, DEFAULT_DURATIONS[Mode.LONG_BREAK]
            ),
        )

    @classmethod
    def from_raw(cls, raw: Mapping[Mode, Mapping[str, Any]]) -> DurationConfig:
        """Build from form input: ``{Mode: {"minutes": m, "seconds": s}}``.

        Each mode is normalized on its own against its default, so a
        blank entry for one mode never affects the others.
        """
        normalized: dict[Mode, int] = {}
        for mode in Mode:
            entry = raw.get(mode) or {}
            normalized[mode] = normalize(
                entry.get("minutes"),
                entry.get("seconds"),
                DEFAULT_DURATIONS[mode],
            )
        return cls.from_seconds(normalized)

    def to_raw(self) -> dict[Mode, dict[str, int]]:
        """Minute/second pairs for pre-filling an edit form."""
        raw: dict[Mode, dict[str, int]] = {}
        for mode in Mode:
            minutes, seconds = split_seconds(self[mode])
            raw[mode] = {"minutes": minutes, "seconds": seconds}
        return raw
