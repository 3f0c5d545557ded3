"""Pausable stopwatch backed by a monotonic clock."""

from __future__ import annotations

import time
from typing import Callable, Optional


class Stopwatch:
    """Accumulates running time across pause/resume spans.

    Time is read from `time.monotonic` unless a clock callable is injected,
    so wall-clock adjustments never move the measurement.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock
        self._started_at: Optional[float] = None
        self._accumulated_seconds: float = 0.0

    @property
    def is_running(self) -> bool:
        return self._started_at is not None

    @property
    def elapsed_seconds(self) -> float:
        if self._started_at is None:
            return self._accumulated_seconds
        return self._accumulated_seconds + max(0.0, self._now() - self._started_at)

    def start(self) -> None:
        """Restart from zero and begin counting."""
        self._accumulated_seconds = 0.0
        self._started_at = self._now()

    def pause(self) -> None:
        if self._started_at is None:
            return
        self._accumulated_seconds += max(0.0, self._now() - self._started_at)
        self._started_at = None

    def resume(self) -> None:
        if self._started_at is not None:
            return
        self._started_at = self._now()

    def reset(self) -> None:
        """Halt and clear the accumulated time."""
        self._started_at = None
        self._accumulated_seconds = 0.0

    def _now(self) -> float:
        if self._clock is not None:
            return self._clock()
        return time.monotonic()
