import math


class ExtremityMonitor:
    """Tracks the smallest and largest value seen in a stream of floats.

    Infinite bounds mean no data has been seen yet. Callers must filter
    out NaN before calling ``update``.
    """

    def __init__(self):
        self.reset()

    def update(self, value: float) -> bool:
        """Fold ``value`` into the bounds. Returns True if either bound changed."""
        changed = False
        if value < self._min:
            self._min = value
            changed = True
        if value > self._max:
            self._max = value
            changed = True
        return changed

    @property
    def min(self) -> float:
        return self._min

    @property
    def max(self) -> float:
        return self._max

    def set(self, min_value: float, max_value: float) -> None:
        self._min = min_value
        self._max = max_value

    def set_min(self, value: float) -> None:
        self._min = value

    def set_max(self, value: float) -> None:
        self._max = value

    def has_data(self) -> bool:
        return not math.isinf(self._min) and not math.isinf(self._max)

    def reset(self) -> None:
        self._min = math.inf
        self._max = -math.inf

    def __repr__(self):
        return f"ExtremityMonitor(min={self._min}, max={self._max})"
