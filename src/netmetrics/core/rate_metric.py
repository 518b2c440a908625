"""Windowed events-per-second estimator."""

from typing import Union

Millis = Union[int, float]


class RateMetric:
    """Converts irregular ``add`` calls into a stepwise events-per-second rate.

    Counts accumulate cheaply between recomputations. The rate is only
    recomputed inside ``update``, and only once at least ``interval_s`` has
    passed since the previous recomputation, so its cost is independent of
    traffic volume.
    """

    def __init__(self, now: Millis, interval_s: float) -> None:
        """Initialize the estimator.

        Args:
            now: Monotonic start timestamp in milliseconds
            interval_s: Minimum time between recomputations, in seconds
        """
        if interval_s <= 0:
            raise ValueError(f"Invalid measurement interval: {interval_s}. Must be > 0")

        self._count: int = 0
        self._rate: float = 0.0
        self._last_calculated_at: Millis = now
        self._interval_ms: float = interval_s * 1000.0

    @classmethod
    def with_interval(cls, now: Millis, interval_s: float) -> "RateMetric":
        return cls(now, interval_s)

    def add(self, count: int) -> None:
        """Accumulate ``count`` events. No recomputation happens here."""
        self._count += count

    def update(self, now: Millis) -> None:
        """Recompute the rate if at least one interval has elapsed.

        Args:
            now: Monotonic timestamp in milliseconds
        """
        elapsed_ms = now - self._last_calculated_at
        # Clock stood still or went backwards
        if elapsed_ms <= 0:
            return
        if elapsed_ms < self._interval_ms:
            return

        self._rate = self._count / (elapsed_ms / 1000.0)
        self._count = 0
        self._last_calculated_at = now

    def rate(self) -> float:
        """Most recently computed events per second (0.0 before the first recompute)."""
        return self._rate

    @property
    def count(self) -> int:
        """Events accumulated since the last recompute."""
        return self._count

    @property
    def last_calculated_at(self) -> Millis:
        return self._last_calculated_at

    @property
    def interval_s(self) -> float:
        return self._interval_ms / 1000.0

    def __repr__(self) -> str:
        return (
            f"RateMetric(rate={self._rate}, pending={self._count}, "
            f"last_calculated_at={self._last_calculated_at})"
        )
