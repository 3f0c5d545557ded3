"""Thread-safe in-memory pomodoro period state machine with monotonic timing."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional

from .config import PomodoroConfig
from .constants import (
    COMPLETED_PROGRESS,
    CONFIRM_EXIT,
    CONFIRM_RESET,
    REASON_COMPLETED,
    REASON_INVALID_STATE,
    REASON_INVALID_TRANSITION,
    REASON_PAUSED,
    REASON_RESET,
    REASON_RESET_DECLINED,
    REASON_STARTED,
    REASON_TIMER_NOT_RUNNING,
    REASON_TIMER_RUNNING,
    REASON_UNPAUSED,
)
from .contracts import ChangeListener, ConfirmationPrompt, HistorySink, QuoteProvider
from .models import (
    PeriodAction,
    PeriodStatus,
    PeriodType,
    PomodoroChange,
    PomodoroSnapshot,
    PomodoroTick,
    Quote,
    TransitionResult,
)
from .stopwatch import Stopwatch
from .transitions import resolve_action, resolve_next_period


class PomodoroEngine:
    """Owns the live session: period type, status, work-period counter and timing.

    Illegal requests are ignored rather than raised so duplicate or
    late-arriving UI events cannot corrupt the session; the returned
    `TransitionResult` says whether anything happened.
    """

    def __init__(
        self,
        config: Optional[PomodoroConfig] = None,
        *,
        history_sink: Optional[HistorySink] = None,
        quote_provider: Optional[QuoteProvider] = None,
        confirm: Optional[ConfirmationPrompt] = None,
        clock: Optional[Callable[[], float]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config or PomodoroConfig()
        self._history_sink = history_sink
        self._quote_provider = quote_provider
        self._confirm = confirm
        self._logger = logger or logging.getLogger("pomodoro")
        self._lock = threading.RLock()
        self._stopwatch = Stopwatch(clock)
        self._listeners: list[ChangeListener] = []
        self._changes: set[str] = set()

        self._period_type = PeriodType.WORK
        self._status = PeriodStatus.STOPPED
        self._completed_work_periods = 0
        self._progress = 0.0
        self._display_minutes = "00"
        self._display_seconds = "00"
        self._current_quote: Optional[Quote] = None

    @property
    def config(self) -> PomodoroConfig:
        return self._config

    @property
    def current_quote(self) -> Optional[Quote]:
        """Quote for the current work period, drawn on first read."""
        with self._lock:
            if self._current_quote is None and self._quote_provider is not None:
                self._current_quote = self._quote_provider.draw_random_quote()
            return self._current_quote

    def subscribe(self, listener: ChangeListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def snapshot(self) -> PomodoroSnapshot:
        with self._lock:
            return self._snapshot_locked()

    def can_transition(self, requested: PeriodStatus) -> bool:
        with self._lock:
            return resolve_action(self._status, requested) != PeriodAction.NO_ACTION

    def resolve_next_period(self) -> PeriodType:
        with self._lock:
            return self._next_period_locked()

    def request_transition(
        self,
        period_type: PeriodType,
        requested: PeriodStatus,
    ) -> TransitionResult:
        with self._lock:
            action = resolve_action(self._status, requested)
            if action == PeriodAction.START:
                accepted, reason = self._start_locked(period_type)
            elif action == PeriodAction.PAUSE:
                accepted, reason = self._pause_locked()
            elif action == PeriodAction.UNPAUSE:
                accepted, reason = self._unpause_locked()
            elif action == PeriodAction.RESET:
                accepted, reason = self._reset_locked()
            elif action == PeriodAction.COMPLETE:
                accepted, reason = self._complete_locked()
            else:
                self._logger.debug(
                    "Ignoring transition request: %s -> %s",
                    self._status.value,
                    requested.value,
                )
                accepted, reason = False, REASON_INVALID_TRANSITION

            result = TransitionResult(
                action=action,
                accepted=accepted,
                reason=reason,
                changed=self._drain_changes_locked(),
                snapshot=self._snapshot_locked(),
            )

        self._notify(result.changed, result.snapshot)
        return result

    def start_next(self) -> TransitionResult:
        """Generic "go" control: unpause a paused period, otherwise start the next one."""
        with self._lock:
            if self._status == PeriodStatus.PAUSED:
                period_type = self._period_type
            else:
                period_type = self._next_period_locked()
        return self.request_transition(period_type, PeriodStatus.RUNNING)

    def request_exit(self) -> bool:
        """Return whether the host may close; asks for confirmation while running."""
        with self._lock:
            if not self._stopwatch.is_running:
                return True
            return self._confirmed(CONFIRM_EXIT)

    def on_tick(self) -> Optional[PomodoroTick]:
        """Recompute time and progress; completes the period once its duration is reached."""
        with self._lock:
            if not self._stopwatch.is_running:
                return None

            duration = self._config.duration_for(self._period_type)
            elapsed = self._stopwatch.elapsed_seconds
            minutes, seconds = self._display_parts(elapsed, duration)
            self._update_locked(
                progress=elapsed / duration,
                display_minutes=minutes,
                display_seconds=seconds,
            )

            completed = False
            if elapsed >= duration:
                completed, _ = self._complete_locked()

            changed = self._drain_changes_locked()
            snapshot = self._snapshot_locked()

        self._notify(changed, snapshot)
        return PomodoroTick(snapshot=snapshot, completed=completed)

    def _start_locked(self, period_type: PeriodType) -> tuple[bool, str]:
        if self._stopwatch.is_running:
            return False, REASON_TIMER_RUNNING
        if self._status not in (PeriodStatus.STOPPED, PeriodStatus.COMPLETED):
            return False, REASON_INVALID_STATE

        if period_type == PeriodType.WORK:
            self._current_quote = None
            self._update_locked(completed_work_periods=self._completed_work_periods + 1)

        self._stopwatch.start()
        minutes, seconds = self._display_parts(0.0, self._config.duration_for(period_type))
        self._update_locked(
            period_type=period_type,
            status=PeriodStatus.RUNNING,
            progress=0.0,
            display_minutes=minutes,
            display_seconds=seconds,
        )
        self._logger.info(
            "Period started: type=%s duration=%ss work_periods=%s",
            period_type.value,
            self._config.duration_for(period_type),
            self._completed_work_periods,
        )
        return True, REASON_STARTED

    def _pause_locked(self) -> tuple[bool, str]:
        if not self._stopwatch.is_running:
            return False, REASON_TIMER_NOT_RUNNING
        if self._status != PeriodStatus.RUNNING:
            return False, REASON_INVALID_STATE

        self._stopwatch.pause()
        self._update_locked(status=PeriodStatus.PAUSED)
        self._logger.info(
            "Period paused: type=%s elapsed=%.1fs",
            self._period_type.value,
            self._stopwatch.elapsed_seconds,
        )
        return True, REASON_PAUSED

    def _unpause_locked(self) -> tuple[bool, str]:
        if self._stopwatch.is_running:
            return False, REASON_TIMER_RUNNING
        if self._status != PeriodStatus.PAUSED:
            return False, REASON_INVALID_STATE

        self._stopwatch.resume()
        self._update_locked(status=PeriodStatus.RUNNING)
        self._logger.info("Period unpaused: type=%s", self._period_type.value)
        return True, REASON_UNPAUSED

    def _reset_locked(self) -> tuple[bool, str]:
        if self._stopwatch.is_running:
            return False, REASON_TIMER_RUNNING
        if self._status not in (PeriodStatus.PAUSED, PeriodStatus.COMPLETED):
            return False, REASON_INVALID_STATE
        if not self._confirmed(CONFIRM_RESET):
            self._logger.info("Session reset declined")
            return False, REASON_RESET_DECLINED

        self._stopwatch.reset()
        self._update_locked(
            period_type=PeriodType.WORK,
            status=PeriodStatus.STOPPED,
            completed_work_periods=0,
            progress=0.0,
            display_minutes="00",
            display_seconds="00",
        )
        self._logger.info("Session reset")
        return True, REASON_RESET

    def _complete_locked(self) -> tuple[bool, str]:
        if not self._stopwatch.is_running:
            return False, REASON_TIMER_NOT_RUNNING
        if self._status != PeriodStatus.RUNNING:
            return False, REASON_INVALID_STATE

        self._stopwatch.reset()
        self._update_locked(
            status=PeriodStatus.COMPLETED,
            progress=COMPLETED_PROGRESS,
            display_minutes="00",
            display_seconds="00",
        )
        self._logger.info(
            "Period completed: type=%s work_periods=%s",
            self._period_type.value,
            self._completed_work_periods,
        )
        if self._period_type == PeriodType.WORK:
            self._record_completed_work_period()
        return True, REASON_COMPLETED

    def _record_completed_work_period(self) -> None:
        if self._history_sink is None:
            return
        try:
            self._history_sink.record_completed_work_period()
        except Exception as error:
            self._logger.error("History sink failed: %s", error, exc_info=True)

    def _confirmed(self, kind: str) -> bool:
        if self._confirm is None:
            return True
        return bool(self._confirm(kind))

    def _next_period_locked(self) -> PeriodType:
        return resolve_next_period(
            period_type=self._period_type,
            status=self._status,
            completed_work_periods=self._completed_work_periods,
            timer_running=self._stopwatch.is_running,
            long_break_every=self._config.long_break_every,
        )

    def _display_parts(self, elapsed: float, duration: int) -> tuple[str, str]:
        shown = duration - elapsed if self._config.count_backwards else elapsed
        minutes, seconds = divmod(max(0, int(shown)), 60)
        return f"{minutes:02d}", f"{seconds:02d}"

    def _update_locked(self, **fields: Any) -> None:
        for name, value in fields.items():
            attribute = f"_{name}"
            if getattr(self, attribute) != value:
                setattr(self, attribute, value)
                self._changes.add(name)

    def _drain_changes_locked(self) -> frozenset[str]:
        changed = frozenset(self._changes)
        self._changes.clear()
        return changed

    def _snapshot_locked(self) -> PomodoroSnapshot:
        return PomodoroSnapshot(
            period_type=self._period_type,
            status=self._status,
            completed_work_periods=self._completed_work_periods,
            progress=self._progress,
            display_minutes=self._display_minutes,
            display_seconds=self._display_seconds,
            elapsed_seconds=self._stopwatch.elapsed_seconds,
            duration_seconds=self._config.duration_for(self._period_type),
            is_running=self._stopwatch.is_running,
            next_period=self._next_period_locked(),
        )

    def _notify(self, changed: frozenset[str], snapshot: PomodoroSnapshot) -> None:
        if not changed:
            return
        change = PomodoroChange(fields=changed, snapshot=snapshot)
        with self._lock:
            listeners = tuple(self._listeners)
        for listener in listeners:
            try:
                listener(change)
            except Exception as error:
                self._logger.error("Change listener failed: %s", error, exc_info=True)
