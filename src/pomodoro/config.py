"""Validated engine configuration derived from app settings."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import (
    DEFAULT_LONG_BREAK_EVERY,
    DEFAULT_LONG_BREAK_SECONDS,
    DEFAULT_SHORT_BREAK_SECONDS,
    DEFAULT_WORK_SECONDS,
)
from .models import PeriodType


class PomodoroConfigurationError(Exception):
    """Raised when pomodoro engine configuration is invalid."""


@dataclass(frozen=True)
class PomodoroConfig:
    """Period durations in seconds plus display and cycle options."""
    work_seconds: int = DEFAULT_WORK_SECONDS
    short_break_seconds: int = DEFAULT_SHORT_BREAK_SECONDS
    long_break_seconds: int = DEFAULT_LONG_BREAK_SECONDS
    count_backwards: bool = False
    long_break_every: int = DEFAULT_LONG_BREAK_EVERY

    def __post_init__(self) -> None:
        for name in ("work_seconds", "short_break_seconds", "long_break_seconds"):
            value = getattr(self, name)
            if value <= 0:
                raise PomodoroConfigurationError(
                    f"{name} must be greater than zero, got: {value}"
                )

        if self.long_break_every <= 0:
            raise PomodoroConfigurationError(
                f"long_break_every must be greater than zero, got: {self.long_break_every}"
            )

    def duration_for(self, period_type: PeriodType) -> int:
        if period_type == PeriodType.WORK:
            return self.work_seconds
        if period_type == PeriodType.SHORT_BREAK:
            return self.short_break_seconds
        return self.long_break_seconds

    @classmethod
    def from_settings(cls, settings) -> "PomodoroConfig":
        return cls(
            work_seconds=int(settings.work_minutes * 60),
            short_break_seconds=int(settings.short_break_minutes * 60),
            long_break_seconds=int(settings.long_break_minutes * 60),
            count_backwards=bool(settings.count_backwards),
            long_break_every=settings.long_break_every,
        )
