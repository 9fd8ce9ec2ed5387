"""
timers.py — Frame-driven repeating timers.

The host loop feeds elapsed seconds in through advance(); the timer fires
its callback at most once per call. After a long frame the missed
intervals are dropped rather than replayed, so a hiccup never moves the
game several steps at once. A callback may stop or restart its own timer.
"""

from typing import Callable


class IntervalTimer:
    def __init__(self, callback: Callable[[], None]):
        self._callback = callback
        self.interval: float = 0.0
        self.elapsed: float = 0.0
        self.running: bool = False

    def start(self, interval: float) -> None:
        """(Re)start from zero at `interval` seconds."""
        self.interval = interval
        self.elapsed = 0.0
        self.running = interval > 0

    def stop(self) -> None:
        self.running = False
        self.elapsed = 0.0

    def advance(self, dt: float) -> int:
        """Accumulate `dt` seconds; returns 1 if the callback fired, else 0."""
        if not self.running:
            return 0
        self.elapsed += dt
        if self.elapsed < self.interval:
            return 0
        # keep the phase within the current interval, drop whole missed ones
        self.elapsed = (self.elapsed - self.interval) % self.interval
        self._callback()
        return 1
