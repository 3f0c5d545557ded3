"""Pure transition rules: legal status changes and the next period to start."""

from __future__ import annotations

from .models import PeriodAction, PeriodStatus, PeriodType

_TRANSITIONS: dict[tuple[PeriodStatus, PeriodStatus], PeriodAction] = {
    (PeriodStatus.STOPPED, PeriodStatus.RUNNING): PeriodAction.START,
    (PeriodStatus.RUNNING, PeriodStatus.PAUSED): PeriodAction.PAUSE,
    (PeriodStatus.RUNNING, PeriodStatus.COMPLETED): PeriodAction.COMPLETE,
    (PeriodStatus.PAUSED, PeriodStatus.RUNNING): PeriodAction.UNPAUSE,
    (PeriodStatus.PAUSED, PeriodStatus.STOPPED): PeriodAction.RESET,
    (PeriodStatus.COMPLETED, PeriodStatus.RUNNING): PeriodAction.START,
    (PeriodStatus.COMPLETED, PeriodStatus.STOPPED): PeriodAction.RESET,
}


def resolve_action(current: PeriodStatus, requested: PeriodStatus) -> PeriodAction:
    """Return the action that moves `current` to `requested`, or NO_ACTION."""
    return _TRANSITIONS.get((current, requested), PeriodAction.NO_ACTION)


def resolve_next_period(
    *,
    period_type: PeriodType,
    status: PeriodStatus,
    completed_work_periods: int,
    timer_running: bool,
    long_break_every: int,
) -> PeriodType:
    """Decide which period the next generic start should begin.

    A running timer is never pre-empted. After a completed work period the
    counter picks a long break every `long_break_every` pomodoros; after any
    break the cycle returns to work.
    """
    if timer_running:
        return period_type

    if status == PeriodStatus.STOPPED:
        return PeriodType.WORK

    if status == PeriodStatus.COMPLETED:
        if period_type == PeriodType.WORK:
            if completed_work_periods % long_break_every == 0:
                return PeriodType.LONG_BREAK
            return PeriodType.SHORT_BREAK
        return PeriodType.WORK

    return period_type
