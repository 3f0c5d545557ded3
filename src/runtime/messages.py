"""Status, caption, and command response text builders for the console host."""

from __future__ import annotations

from typing import Optional

from pomodoro import (
    PeriodAction,
    PeriodStatus,
    PeriodType,
    PomodoroSnapshot,
    Quote,
    TransitionResult,
)
from pomodoro.constants import (
    REASON_INVALID_STATE,
    REASON_INVALID_TRANSITION,
    REASON_RESET_DECLINED,
    REASON_TIMER_NOT_RUNNING,
    REASON_TIMER_RUNNING,
)

PERIOD_LABELS: dict[PeriodType, str] = {
    PeriodType.WORK: "Pomodoro",
    PeriodType.SHORT_BREAK: "Short break",
    PeriodType.LONG_BREAK: "Long break",
}

DEFAULT_WORK_CAPTION = "Stay focused"
START_POMODORO_CAPTION = "Time to start a pomodoro"
PRESS_PLAY_CAPTION = "Press play to start"


def format_clock(seconds: float) -> str:
    """Format a duration in seconds as `MM:SS`."""
    minutes, remainder = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{remainder:02d}"


def _minutes(seconds: int) -> int:
    return max(1, round(seconds / 60))


def period_caption(
    snapshot: PomodoroSnapshot,
    *,
    quote: Optional[Quote],
    short_break_seconds: int,
    long_break_seconds: int,
) -> str:
    """Motivation line shown next to the clock for the current period."""
    status = snapshot.status
    if snapshot.period_type == PeriodType.WORK:
        if snapshot.is_active:
            if quote is not None and quote.text.strip():
                return quote.text
            return DEFAULT_WORK_CAPTION
        if status == PeriodStatus.STOPPED:
            return START_POMODORO_CAPTION
        if snapshot.next_period == PeriodType.SHORT_BREAK:
            return f"Well done! Take a {_minutes(short_break_seconds)} minute break"
        if snapshot.next_period == PeriodType.LONG_BREAK:
            return f"Great job! Take a longer {_minutes(long_break_seconds)} minute break"
        return PRESS_PLAY_CAPTION

    if status == PeriodStatus.COMPLETED:
        return START_POMODORO_CAPTION
    if snapshot.period_type == PeriodType.SHORT_BREAK:
        return f"Relax for {_minutes(short_break_seconds)} minutes"
    return f"Enjoy a longer {_minutes(long_break_seconds)} minute break"


def caption_source(snapshot: PomodoroSnapshot, quote: Optional[Quote]) -> str:
    """Attribution for the caption; only quotes during an active work period have one."""
    if snapshot.period_type == PeriodType.WORK and snapshot.is_active and quote is not None:
        return quote.source.strip()
    return ""


def status_message(snapshot: PomodoroSnapshot) -> str:
    """Build a one-line status text for the current snapshot."""
    label = PERIOD_LABELS[snapshot.period_type]
    counter = f"#{snapshot.completed_work_periods}"
    percent = f"{min(1.0, snapshot.progress) * 100:.0f}%"
    if snapshot.status == PeriodStatus.RUNNING:
        return f"{label} {counter} running {snapshot.display_time} ({percent})"
    if snapshot.status == PeriodStatus.PAUSED:
        return f"{label} {counter} paused {snapshot.display_time} ({percent})"
    if snapshot.status == PeriodStatus.COMPLETED:
        next_label = PERIOD_LABELS[snapshot.next_period].lower()
        return f"{label} {counter} completed, next: {next_label}"
    return "Ready"


def accepted_text(result: TransitionResult) -> str:
    """Return console text for an accepted transition."""
    snapshot = result.snapshot
    label = PERIOD_LABELS[snapshot.period_type]
    if result.action == PeriodAction.START:
        return f"{label} started ({format_clock(snapshot.duration_seconds)})."
    if result.action == PeriodAction.PAUSE:
        return f"{label} paused at {snapshot.display_time}."
    if result.action == PeriodAction.UNPAUSE:
        return f"{label} resumed."
    if result.action == PeriodAction.RESET:
        return "Session reset."
    if result.action == PeriodAction.COMPLETE:
        return f"{label} completed."
    return f"{label} updated."


def rejection_text(result: TransitionResult) -> str:
    """Return console text explaining why a transition was ignored."""
    if result.reason == REASON_RESET_DECLINED:
        return "Reset cancelled."
    if result.reason == REASON_TIMER_RUNNING:
        return "A period is already running."
    if result.reason == REASON_TIMER_NOT_RUNNING:
        return "No period is running."
    if result.reason in (REASON_INVALID_TRANSITION, REASON_INVALID_STATE):
        status = result.snapshot.status.value
        return f"That is not possible while the session is {status}."
    return "That action is not possible right now."


def completion_text(snapshot: PomodoroSnapshot) -> str:
    """Announcement printed when a period runs out."""
    label = PERIOD_LABELS[snapshot.period_type]
    next_label = PERIOD_LABELS[snapshot.next_period].lower()
    return f"{label} finished. Type 'go' to start the {next_label}."
