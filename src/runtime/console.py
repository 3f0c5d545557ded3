"""Console input events, stdin reader thread, and queue-backed confirmation prompt."""

from __future__ import annotations

import logging
import sys
import threading
from dataclasses import dataclass
from queue import Empty, Queue
from typing import Callable, Optional, TextIO

from contracts.command_contract import AFFIRMATIVE_ANSWERS
from pomodoro.constants import CONFIRM_EXIT, CONFIRM_RESET

CONFIRM_PROMPTS: dict[str, str] = {
    CONFIRM_RESET: "Reset the session and clear the pomodoro counter? [y/N] ",
    CONFIRM_EXIT: "A period is still running. Exit anyway? [y/N] ",
}


@dataclass(frozen=True)
class CommandReceivedEvent:
    """A line typed on the console."""
    text: str


@dataclass(frozen=True)
class InputClosedEvent:
    """Emitted once when the console input stream reaches EOF."""


ConsoleEvent = CommandReceivedEvent | InputClosedEvent


def write_line(text: str) -> None:
    sys.stdout.write(text)
    if not text.endswith(" "):
        sys.stdout.write("\n")
    sys.stdout.flush()


class ConsoleReader:
    """Daemon thread pushing console lines into an event queue."""

    def __init__(
        self,
        queue: Queue,
        *,
        stream: Optional[TextIO] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._queue = queue
        self._stream = stream
        self._logger = logger or logging.getLogger("console")
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._run,
            daemon=True,
            name="console-reader",
        )
        self._thread.start()

    def _run(self) -> None:
        stream = self._stream or sys.stdin
        try:
            for line in stream:
                self._queue.put(CommandReceivedEvent(line.rstrip("\r\n")))
        except (OSError, ValueError) as error:
            self._logger.error("Console input failed: %s", error)
        finally:
            self._queue.put(InputClosedEvent())


class QueueConfirmationPrompt:
    """Asks a yes/no question and takes the answer from the next queued line."""

    def __init__(
        self,
        queue: Queue,
        *,
        output: Callable[[str], None] = write_line,
        timeout_seconds: Optional[float] = None,
    ):
        self._queue = queue
        self._output = output
        self._timeout_seconds = timeout_seconds

    def __call__(self, kind: str) -> bool:
        self._output(CONFIRM_PROMPTS.get(kind, "Are you sure? [y/N] "))
        try:
            event = self._queue.get(timeout=self._timeout_seconds)
        except Empty:
            return False

        if isinstance(event, InputClosedEvent):
            # Leave EOF visible to the main loop.
            self._queue.put(event)
            return False
        return event.text.strip().lower() in AFFIRMATIVE_ANSWERS
