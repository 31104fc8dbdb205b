"""
Two-sample exponential moving average.

Each filtered stream keeps only a (previous, latest) pair: the previous slot
holds the last smoothed output and the latest slot the newest raw sample.
After every smoothing step the output is written back into the previous slot,
so the filter's own result seeds the next tick.

Example: smoothing the pair (15.2, 60.4) with alpha = 0.7 gives
0.7 * 60.4 + 0.3 * 15.2 = 46.84.
"""
from typing import Iterable, Optional, Tuple


def exponential_moving_average(values: Iterable[float], alpha: float) -> float:
    """Fold an EMA over `values` (oldest first). No values gives 0.0."""
    iterator = iter(values)
    try:
        smoothed = float(next(iterator))
    except StopIteration:
        return 0.0
    for value in iterator:
        smoothed = alpha * value + (1.0 - alpha) * smoothed
    return smoothed


class SmoothingWindow:
    """Fixed (previous, latest) pair for one filtered signal."""

    __slots__ = ("previous", "latest")

    def __init__(self, seed: Optional[float] = None):
        self.previous: Optional[float] = None
        self.latest: Optional[float] = None
        if seed is not None:
            self.reset(seed)

    def push(self, sample: float) -> None:
        """Replace the newest raw sample."""
        self.latest = float(sample)

    def reset(self, value: float = 0.0) -> None:
        """Discard history; both slots hold `value`."""
        self.previous = float(value)
        self.latest = float(value)

    def values(self) -> Tuple[float, ...]:
        return tuple(v for v in (self.previous, self.latest) if v is not None)

    def smooth(self, alpha: float) -> float:
        """Return the EMA of the pair and store it as the next previous value."""
        values = self.values()
        smoothed = exponential_moving_average(values, alpha)
        if values:
            self.previous = smoothed
            if self.latest is None:
                self.latest = smoothed
        return smoothed

    def __len__(self) -> int:
        return len(self.values())

    def __repr__(self) -> str:
        return f"SmoothingWindow(previous={self.previous!r}, latest={self.latest!r})"
