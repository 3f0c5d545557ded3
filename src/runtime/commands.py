"""Dispatcher that executes console commands against the pomodoro engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from contracts.command_contract import (
    COMMAND_EXIT,
    COMMAND_GO,
    COMMAND_HELP,
    COMMAND_NEXT,
    COMMAND_RESUME,
    COMMAND_START,
    COMMAND_STATUS,
    COMMAND_TO_REQUESTED_STATUS,
    PERIOD_ARGUMENTS,
    canonical_command,
    command_names_csv,
)
from pomodoro import PeriodStatus, PomodoroEngine, TransitionResult

from .messages import PERIOD_LABELS, accepted_text, rejection_text, status_message


@dataclass(frozen=True)
class CommandOutcome:
    """Text to show for a command and whether the host should shut down."""
    text: str
    exit_requested: bool = False


class CommandDispatcher:
    """Routes console commands to engine transitions and queries."""

    def __init__(self, *, engine: PomodoroEngine, logger: logging.Logger):
        self._engine = engine
        self._logger = logger

    def handle(self, line: str) -> CommandOutcome:
        parts = line.split()
        name = canonical_command(parts[0] if parts else "")
        arguments = parts[1:]

        if name == COMMAND_GO:
            return self._from_result(self._engine.start_next())

        if name == COMMAND_START:
            return self._handle_start(arguments)

        requested = COMMAND_TO_REQUESTED_STATUS.get(name)
        if requested is not None:
            snapshot = self._engine.snapshot()
            if name == COMMAND_RESUME and snapshot.status != PeriodStatus.PAUSED:
                return CommandOutcome("Nothing is paused.")
            return self._from_result(
                self._engine.request_transition(snapshot.period_type, requested)
            )

        if name == COMMAND_STATUS:
            return CommandOutcome(status_message(self._engine.snapshot()))

        if name == COMMAND_NEXT:
            next_period = self._engine.resolve_next_period()
            return CommandOutcome(f"Next: {PERIOD_LABELS[next_period].lower()}")

        if name == COMMAND_HELP:
            return CommandOutcome(f"Commands: {command_names_csv()}")

        if name == COMMAND_EXIT:
            if self._engine.request_exit():
                return CommandOutcome("Bye.", exit_requested=True)
            return CommandOutcome("Exit cancelled.")

        self._logger.debug("Unknown command: %r", line)
        return CommandOutcome(f"Unknown command '{name}'. Try 'help'.")

    def _handle_start(self, arguments: list[str]) -> CommandOutcome:
        if not arguments:
            return self._from_result(self._engine.start_next())

        period_type = PERIOD_ARGUMENTS.get(arguments[0].lower())
        if period_type is None:
            choices = ", ".join(PERIOD_ARGUMENTS)
            return CommandOutcome(f"Unknown period '{arguments[0]}'. Use one of: {choices}")

        return self._from_result(
            self._engine.request_transition(period_type, PeriodStatus.RUNNING)
        )

    def _from_result(self, result: TransitionResult) -> CommandOutcome:
        if result.accepted:
            return CommandOutcome(accepted_text(result))
        self._logger.debug(
            "Command rejected: action=%s reason=%s",
            result.action.value,
            result.reason,
        )
        return CommandOutcome(rejection_text(result))
