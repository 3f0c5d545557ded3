"""Protocols for collaborators the engine calls out to but does not implement."""

from __future__ import annotations

from typing import Callable, Protocol

from .models import PomodoroChange, Quote


class HistorySink(Protocol):
    """Receives one call per completed work period."""
    def record_completed_work_period(self) -> None:
        ...


class QuoteProvider(Protocol):
    """Supplies motivational quotes for work periods."""
    def draw_random_quote(self) -> Quote:
        ...


# Called with CONFIRM_RESET or CONFIRM_EXIT; returns True to proceed.
ConfirmationPrompt = Callable[[str], bool]

ChangeListener = Callable[[PomodoroChange], None]
