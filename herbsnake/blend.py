"""
blend.py — Snake colour mixing.

Every herb the snake eats nudges three colour accumulators. They are stored
unbounded and only clamped to [0, 1] when a displayable colour is needed,
so overshooting one way takes as many herbs to undo as it took to reach.
"""

from .config import CHANNELS, COLOR_INCREMENT


def _clamp01(v: float) -> float:
    return max(0.0, min(1.0, v))


class ColorBlend:
    """
    Three unbounded accumulators plus per-channel eaten counts.

    polarity +1: the eaten channel rises and the other two fall.
    polarity -1: the eaten channel falls and the other two rise.
    """

    def __init__(self, start: tuple, polarity: int = 1, delta: float = COLOR_INCREMENT):
        self.start = tuple(start)
        self.polarity = 1 if polarity >= 0 else -1
        self.delta = delta
        self.reset()

    def reset(self) -> None:
        self.levels: dict[str, float] = dict(zip(CHANNELS, self.start))
        self.counts: dict[str, int] = {c: 0 for c in CHANNELS}

    def absorb(self, channel: str) -> None:
        """Apply one eaten herb of `channel`."""
        step = self.delta * self.polarity
        for c in CHANNELS:
            self.levels[c] += step if c == channel else -step
        self.counts[channel] += 1

    @property
    def raw(self) -> tuple[float, float, float]:
        return tuple(self.levels[c] for c in CHANNELS)

    def display_color(self) -> tuple[float, float, float]:
        return tuple(_clamp01(v) for v in self.raw)

    def display_rgb(self) -> tuple[int, int, int]:
        return tuple(int(round(v * 255)) for v in self.display_color())
