from __future__ import annotations

from typing import Any, Optional, Protocol

from contracts.ui_protocol import EVENT_NOTICE, EVENT_POMODORO, EVENT_POMODORO_COMPLETED
from pomodoro import PomodoroSnapshot


class UIServerLike(Protocol):
    def publish(self, event_type: str, **payload: Any) -> None:
        ...


class RuntimeUIPublisher:
    """Forwards engine change notifications to an optional UI server."""

    def __init__(self, ui_server: Optional[UIServerLike]):
        self._ui_server = ui_server

    def publish(self, event_type: str, **payload: Any) -> None:
        if self._ui_server:
            self._ui_server.publish(event_type, **payload)

    def publish_pomodoro_update(
        self,
        snapshot: PomodoroSnapshot,
        *,
        changed: frozenset[str] = frozenset(),
        caption: Optional[str] = None,
        caption_source: Optional[str] = None,
    ) -> None:
        payload: dict[str, Any] = {
            "period_type": snapshot.period_type.value,
            "status": snapshot.status.value,
            "completed_work_periods": snapshot.completed_work_periods,
            "progress": round(min(1.0, snapshot.progress), 4),
            "display_minutes": snapshot.display_minutes,
            "display_seconds": snapshot.display_seconds,
            "next_period": snapshot.next_period.value,
        }
        if changed:
            payload["changed"] = sorted(changed)
        if caption:
            payload["caption"] = caption
        if caption_source:
            payload["caption_source"] = caption_source
        self.publish(EVENT_POMODORO, **payload)

    def publish_completed_work_period(self, completed_work_periods: int) -> None:
        self.publish(
            EVENT_POMODORO_COMPLETED,
            completed_work_periods=completed_work_periods,
        )

    def publish_notice(self, text: str) -> None:
        self.publish(EVENT_NOTICE, message=text.strip())
