"""Completion tone synthesis with numpy.

Three rising sine notes (A5 → C#6 → E6), each starting at gain 0.1 and
decaying exponentially to 0.001, rendered as 16-bit mono PCM WAV.
Nothing here touches Qt, so the tone can be built even where no audio
backend exists.
"""

from __future__ import annotations

import io
import wave

import numpy as np


SAMPLE_RATE = 44100

# (frequency Hz, start s, length s)
COMPLETION_NOTES = (
    (880.0, 0.0, 0.2),
    (1108.73, 0.2, 0.2),
    (1318.51, 0.4, 0.4),
)
START_GAIN = 0.1
END_GAIN = 0.001


def _exp_decay(length: int, start: float = START_GAIN, end: float = END_GAIN) -> np.ndarray:
    """Exponential gain ramp from *start* to *end* over *length* samples."""
    if length <= 0:
        return np.zeros(0, dtype=np.float64)
    return np.geomspace(start, end, length)


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


def generate_completion_tone() -> bytes:
    """A5, C#6, E6 back to back, the last held longer."""
    total_s = max(start + length for _, start, length in COMPLETION_NOTES)
    mix = np.zeros(int(SAMPLE_RATE * total_s), dtype=np.float64)
    for freq, start, length in COMPLETION_NOTES:
        tone = _sine(freq, length)
        tone = tone * _exp_decay(len(tone))
        offset = int(SAMPLE_RATE * start)
        mix[offset:offset + len(tone)] += tone
    return _to_wav_bytes(mix)
