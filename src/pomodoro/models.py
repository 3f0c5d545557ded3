"""Period enums and immutable payloads exchanged between the engine and its host."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PeriodType(str, Enum):
    """Kind of period; selects which configured duration applies."""
    WORK = "work"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"


class PeriodStatus(str, Enum):
    """Lifecycle status of the active period."""
    STOPPED = "stopped"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


class PeriodAction(str, Enum):
    """Mutation resolved from a (current, requested) status pair."""
    NO_ACTION = "no_action"
    START = "start"
    PAUSE = "pause"
    UNPAUSE = "unpause"
    RESET = "reset"
    COMPLETE = "complete"


@dataclass(frozen=True)
class PomodoroSnapshot:
    """Read-only view of the live session exposed to hosts and UI publishers."""
    period_type: PeriodType
    status: PeriodStatus
    completed_work_periods: int
    progress: float
    display_minutes: str
    display_seconds: str
    elapsed_seconds: float
    duration_seconds: int
    is_running: bool
    next_period: PeriodType

    @property
    def display_time(self) -> str:
        return f"{self.display_minutes}:{self.display_seconds}"

    @property
    def is_active(self) -> bool:
        return self.status in (PeriodStatus.RUNNING, PeriodStatus.PAUSED)


@dataclass(frozen=True)
class PomodoroChange:
    """Change notification delivered to subscribers after a mutating operation."""
    fields: frozenset[str]
    snapshot: PomodoroSnapshot


@dataclass(frozen=True)
class TransitionResult:
    """Result envelope returned after a transition request."""
    action: PeriodAction
    accepted: bool
    reason: str
    changed: frozenset[str]
    snapshot: PomodoroSnapshot


@dataclass(frozen=True)
class PomodoroTick:
    """Tick payload emitted while a period is running."""
    snapshot: PomodoroSnapshot
    completed: bool = False


@dataclass(frozen=True)
class Quote:
    """Motivational quote shown while a work period is active."""
    text: str
    source: str = ""
