"""Defaults, reason codes, and snapshot field names used by the pomodoro engine."""

from __future__ import annotations

DEFAULT_WORK_SECONDS = 25 * 60
DEFAULT_SHORT_BREAK_SECONDS = 5 * 60
DEFAULT_LONG_BREAK_SECONDS = 15 * 60
DEFAULT_LONG_BREAK_EVERY = 4

COMPLETED_PROGRESS = 1.0

REASON_STARTED = "started"
REASON_PAUSED = "paused"
REASON_UNPAUSED = "unpaused"
REASON_RESET = "reset"
REASON_COMPLETED = "completed"
REASON_INVALID_TRANSITION = "invalid_transition"
REASON_TIMER_RUNNING = "timer_running"
REASON_TIMER_NOT_RUNNING = "timer_not_running"
REASON_INVALID_STATE = "invalid_state"
REASON_RESET_DECLINED = "reset_declined"

CONFIRM_RESET = "reset"
CONFIRM_EXIT = "exit"

FIELD_PERIOD_TYPE = "period_type"
FIELD_STATUS = "status"
FIELD_COMPLETED_WORK_PERIODS = "completed_work_periods"
FIELD_PROGRESS = "progress"
FIELD_DISPLAY_MINUTES = "display_minutes"
FIELD_DISPLAY_SECONDS = "display_seconds"

SNAPSHOT_FIELDS: tuple[str, ...] = (
    FIELD_PERIOD_TYPE,
    FIELD_STATUS,
    FIELD_COMPLETED_WORK_PERIODS,
    FIELD_PROGRESS,
    FIELD_DISPLAY_MINUTES,
    FIELD_DISPLAY_SECONDS,
)
