"""Runtime loop: periodic engine ticks plus commands from the console and UI clients."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from queue import Empty, Queue
from typing import Callable, Optional, TextIO

from app_config import AppConfig
from pomodoro import (
    PeriodType,
    PomodoroChange,
    PomodoroConfig,
    PomodoroEngine,
    RandomQuoteProvider,
)
from server import UIServer

from .commands import CommandDispatcher
from .console import (
    CommandReceivedEvent,
    ConsoleEvent,
    ConsoleReader,
    InputClosedEvent,
    QueueConfirmationPrompt,
    write_line,
)
from .history import LoggingHistorySink
from .messages import caption_source, completion_text, period_caption
from .ui import RuntimeUIPublisher

_MAX_POLL_SECONDS = 0.25


@dataclass(frozen=True)
class RuntimeBootstrap:
    """Dependency bundle required to construct the runtime engine."""
    logger: logging.Logger
    app_config: AppConfig
    pomodoro_config: Optional[PomodoroConfig] = None
    ui_server: Optional[UIServer] = None
    input_stream: Optional[TextIO] = None
    output: Callable[[str], None] = write_line


class RuntimeEngine:
    """Single-threaded loop that ticks the pomodoro engine and executes commands."""
    def __init__(self, bootstrap: RuntimeBootstrap):
        self._bootstrap = bootstrap
        self._logger = bootstrap.logger
        self._output = bootstrap.output
        self._tick_interval = bootstrap.app_config.runtime.tick_interval_seconds

        self._event_queue: Queue[ConsoleEvent] = Queue()
        self._ui = RuntimeUIPublisher(bootstrap.ui_server)
        self._history = LoggingHistorySink(self._ui, logging.getLogger("history"))
        pomodoro_config = bootstrap.pomodoro_config
        if pomodoro_config is None:
            pomodoro_config = PomodoroConfig.from_settings(bootstrap.app_config.pomodoro)
        self._pomodoro = PomodoroEngine(
            pomodoro_config,
            history_sink=self._history,
            quote_provider=RandomQuoteProvider(),
            confirm=QueueConfirmationPrompt(
                self._event_queue,
                output=self._say,
                timeout_seconds=bootstrap.app_config.runtime.confirm_timeout_seconds,
            ),
            logger=logging.getLogger("pomodoro"),
        )
        self._pomodoro.subscribe(self._publish_snapshot)
        if bootstrap.ui_server is not None:
            bootstrap.ui_server.set_command_handler(self._enqueue_remote_command)
        self._dispatcher = CommandDispatcher(engine=self._pomodoro, logger=self._logger)
        self._reader = ConsoleReader(
            self._event_queue,
            stream=bootstrap.input_stream,
            logger=logging.getLogger("console"),
        )

    @property
    def pomodoro(self) -> PomodoroEngine:
        return self._pomodoro

    def run(self) -> int:
        try:
            ui_server = self._bootstrap.ui_server
            if ui_server is not None:
                ui_server.start()
            self._publish_snapshot()

            self._reader.start()
            self._say("Ready. Press Enter or type 'go' to start, 'help' for commands.")

            next_tick_at = time.monotonic()
            while True:
                now = time.monotonic()
                if now >= next_tick_at:
                    self._emit_tick()
                    next_tick_at = now + self._tick_interval

                timeout = min(_MAX_POLL_SECONDS, max(0.0, next_tick_at - time.monotonic()))
                event = self._poll_event(timeout)
                if event is None:
                    continue

                exit_code = self._handle_event(event)
                if exit_code is not None:
                    return exit_code

        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
            return 0
        except Exception as error:
            self._logger.error("Unexpected error: %s", error, exc_info=True)
            return 1
        finally:
            self._shutdown()

    def _emit_tick(self) -> None:
        tick = self._pomodoro.on_tick()
        if tick is not None and tick.completed:
            self._say(completion_text(tick.snapshot))

    def _poll_event(self, timeout: float) -> Optional[ConsoleEvent]:
        try:
            return self._event_queue.get(timeout=timeout)
        except Empty:
            return None

    def _handle_event(self, event: ConsoleEvent) -> Optional[int]:
        if isinstance(event, CommandReceivedEvent):
            outcome = self._dispatcher.handle(event.text)
            self._say(outcome.text)
            if outcome.exit_requested:
                return 0
            return None

        if isinstance(event, InputClosedEvent):
            self._logger.info("Console input closed, stopping.")
            return 0

        self._logger.warning("Ignoring unknown event type: %s", type(event).__name__)
        return None

    def _say(self, text: str) -> None:
        """Write to the console and mirror the line to UI clients."""
        self._output(text)
        self._ui.publish_notice(text)

    def _enqueue_remote_command(self, text: str) -> None:
        # Called on the UI server thread.
        self._event_queue.put(CommandReceivedEvent(text))

    def _publish_snapshot(self, change: Optional[PomodoroChange] = None) -> None:
        snapshot = change.snapshot if change is not None else self._pomodoro.snapshot()
        quote = None
        if snapshot.period_type == PeriodType.WORK and snapshot.is_active:
            quote = self._pomodoro.current_quote
        config = self._pomodoro.config
        self._ui.publish_pomodoro_update(
            snapshot,
            changed=change.fields if change is not None else frozenset(),
            caption=period_caption(
                snapshot,
                quote=quote,
                short_break_seconds=config.short_break_seconds,
                long_break_seconds=config.long_break_seconds,
            ),
            caption_source=caption_source(snapshot, quote),
        )

    def _shutdown(self) -> None:
        ui_server = self._bootstrap.ui_server
        if ui_server is not None:
            ui_server.set_command_handler(None)
            self._logger.info("Stopping UI server...")
            try:
                ui_server.stop(timeout_seconds=5.0)
            except Exception as error:
                self._logger.error("Error stopping UI server: %s", error, exc_info=True)
