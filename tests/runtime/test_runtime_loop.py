import io
import logging
import threading
import unittest

from app_config import AppConfig, PomodoroSettings, RuntimeSettings, UIServerSettings
from contracts.ui_protocol import EVENT_NOTICE, EVENT_POMODORO
from runtime import RuntimeBootstrap, RuntimeEngine
from runtime.console import CONFIRM_PROMPTS
from runtime.messages import START_POMODORO_CAPTION
from pomodoro import PeriodStatus
from pomodoro.constants import CONFIRM_EXIT


class _UIServerStub:
    def __init__(self):
        self.events: list[tuple[str, dict[str, object]]] = []
        self.started = False
        self.stopped = False
        self.command_handler = None

    def start(self) -> None:
        self.started = True

    def stop(self, timeout_seconds: float = 5.0) -> None:
        self.stopped = True

    def publish(self, event_type: str, **payload) -> None:
        self.events.append((event_type, payload))

    def set_command_handler(self, handler) -> None:
        self.command_handler = handler


class _HeldOpenInput:
    """Yields the given lines, then stays open until released."""

    def __init__(self, *lines: str):
        self._lines = lines
        self.released = threading.Event()

    def __iter__(self):
        yield from self._lines
        self.released.wait(timeout=5.0)


def _app_config(confirm_timeout_seconds: float = 30.0) -> AppConfig:
    return AppConfig(
        pomodoro=PomodoroSettings(),
        runtime=RuntimeSettings(
            tick_interval_seconds=0.05,
            confirm_timeout_seconds=confirm_timeout_seconds,
        ),
        ui_server=UIServerSettings(),
        source_file="",
    )


class RuntimeLoopTests(unittest.TestCase):
    def _engine(self, text: str, ui_server=None) -> tuple[RuntimeEngine, list[str]]:
        output: list[str] = []
        engine = RuntimeEngine(
            RuntimeBootstrap(
                logger=logging.getLogger("test.runtime"),
                app_config=_app_config(),
                ui_server=ui_server,
                input_stream=io.StringIO(text),
                output=output.append,
            )
        )
        return engine, output

    def test_exit_while_running_is_confirmed_from_console(self) -> None:
        engine, output = self._engine("go\nexit\ny\n")

        exit_code = engine.run()

        self.assertEqual(0, exit_code)
        self.assertEqual(
            [
                "Ready. Press Enter or type 'go' to start, 'help' for commands.",
                "Pomodoro started (25:00).",
                CONFIRM_PROMPTS[CONFIRM_EXIT],
                "Bye.",
            ],
            output,
        )
        self.assertEqual(1, engine.pomodoro.snapshot().completed_work_periods)

    def test_declined_exit_keeps_running_until_input_closes(self) -> None:
        engine, output = self._engine("go\nquit\nn\nstatus\n")

        exit_code = engine.run()

        self.assertEqual(0, exit_code)
        self.assertIn("Exit cancelled.", output)
        self.assertTrue(output[-1].startswith("Pomodoro #1 running"))

    def test_unanswered_exit_prompt_times_out_as_declined(self) -> None:
        stream = _HeldOpenInput("go\n", "exit\n")
        output: list[str] = []

        def record(text: str) -> None:
            output.append(text)
            if text == "Exit cancelled.":
                stream.released.set()

        engine = RuntimeEngine(
            RuntimeBootstrap(
                logger=logging.getLogger("test.runtime"),
                app_config=_app_config(confirm_timeout_seconds=0.1),
                input_stream=stream,
                output=record,
            )
        )

        exit_code = engine.run()

        self.assertEqual(0, exit_code)
        self.assertEqual(CONFIRM_PROMPTS[CONFIRM_EXIT], output[2])
        self.assertEqual("Exit cancelled.", output[3])
        self.assertEqual(PeriodStatus.RUNNING, engine.pomodoro.snapshot().status)

    def test_ui_server_lifecycle_and_updates(self) -> None:
        ui_server = _UIServerStub()
        engine, _ = self._engine("go\n", ui_server=ui_server)

        engine.run()

        self.assertTrue(ui_server.started)
        self.assertTrue(ui_server.stopped)
        pomodoro_events = [payload for kind, payload in ui_server.events if kind == EVENT_POMODORO]
        self.assertEqual("stopped", pomodoro_events[0]["status"])
        self.assertEqual(START_POMODORO_CAPTION, pomodoro_events[0]["caption"])
        self.assertIn("running", [payload["status"] for payload in pomodoro_events])
        running = next(p for p in pomodoro_events if p["status"] == "running")
        self.assertIn("status", running["changed"])
        self.assertTrue(running["caption"])

    def test_commands_from_ui_clients_share_the_console_queue(self) -> None:
        ui_server = _UIServerStub()
        engine, output = self._engine("", ui_server=ui_server)

        ui_server.command_handler("start short")
        engine.run()

        self.assertIn("Short break started (05:00).", output)
        notices = [payload["message"] for kind, payload in ui_server.events if kind == EVENT_NOTICE]
        self.assertIn("Short break started (05:00).", notices)
        self.assertIsNone(ui_server.command_handler)

    def test_unexpected_error_returns_failure_code(self) -> None:
        ui_server = _UIServerStub()

        def broken_start() -> None:
            raise RuntimeError("port in use")

        ui_server.start = broken_start
        engine, _ = self._engine("", ui_server=ui_server)

        with self.assertLogs("test.runtime", level="ERROR"):
            exit_code = engine.run()

        self.assertEqual(1, exit_code)
        self.assertTrue(ui_server.stopped)


if __name__ == "__main__":
    unittest.main()
