"""Shared test helpers for PomoFocus."""

from pomofocus.timer.engine import TimerEngine


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakePlayer:
    """Stands in for SoundManager; counts how often the tone would play."""

    def __init__(self, error: Exception | None = None):
        self.plays = 0
        self.volume: int | None = None
        self._error = error

    def play(self) -> None:
        if self._error is not None:
            raise self._error
        self.plays += 1

    def set_volume(self, level: int) -> None:
        self.volume = level


def run_ticks(engine: TimerEngine, count: int) -> None:
    """Deliver *count* clock ticks synchronously."""
    for _ in range(count):
        engine.tick()
