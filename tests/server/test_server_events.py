import datetime as dt
import json
import unittest

from contracts.ui_protocol import EVENT_ERROR, EVENT_HELLO, EVENT_POMODORO, EVENT_POMODORO_COMPLETED
from pomodoro import PeriodStatus, PeriodType
from server.events import (
    ClientCommand,
    ClientMessageError,
    StickyEventStore,
    make_event,
    parse_client_message,
)


class ServerEventsTests(unittest.TestCase):
    def test_make_event_serializes_timestamp_and_payload(self) -> None:
        now = dt.datetime(2026, 2, 21, 10, 0, tzinfo=dt.timezone.utc)
        raw = make_event(EVENT_POMODORO, now_fn=lambda: now, display_time="04:59", progress=0.2)
        payload = json.loads(raw)

        self.assertEqual(EVENT_POMODORO, payload["type"])
        self.assertEqual(now.isoformat(), payload["timestamp"])
        self.assertEqual("04:59", payload["display_time"])
        self.assertEqual(0.2, payload["progress"])

    def test_make_event_encodes_enums_and_sets(self) -> None:
        raw = make_event(
            EVENT_POMODORO,
            period_type=PeriodType.SHORT_BREAK,
            status=PeriodStatus.PAUSED,
            changed=frozenset({"status", "progress"}),
        )
        payload = json.loads(raw)

        self.assertEqual("short_break", payload["period_type"])
        self.assertEqual("paused", payload["status"])
        self.assertEqual(["progress", "status"], payload["changed"])

    def test_make_event_rejects_unknown_objects(self) -> None:
        with self.assertRaises(TypeError):
            make_event(EVENT_POMODORO, payload=object())

    def test_sticky_store_ignores_non_sticky_events(self) -> None:
        store = StickyEventStore()
        store.remember(EVENT_HELLO, '{"type":"hello"}')
        self.assertEqual([], store.snapshot())

    def test_sticky_store_snapshot_follows_stable_order(self) -> None:
        store = StickyEventStore()
        store.remember(EVENT_POMODORO, '{"type":"pomodoro","n":1}')
        store.remember(EVENT_ERROR, '{"type":"error","n":2}')
        store.remember(EVENT_POMODORO_COMPLETED, '{"type":"pomodoro_completed","n":3}')

        decoded_types = [json.loads(item)["type"] for item in store.snapshot()]
        self.assertEqual([EVENT_POMODORO_COMPLETED, EVENT_POMODORO], decoded_types)

    def test_sticky_store_overwrites_latest_event_by_type(self) -> None:
        store = StickyEventStore()
        store.remember(EVENT_POMODORO, '{"type":"pomodoro","display_time":"00:10"}')
        store.remember(EVENT_POMODORO, '{"type":"pomodoro","display_time":"00:11"}')
        snapshot = store.snapshot()

        self.assertEqual(1, len(snapshot))
        self.assertEqual("00:11", json.loads(snapshot[0])["display_time"])


class ParseClientMessageTests(unittest.TestCase):
    def test_command_message_is_decoded(self) -> None:
        self.assertEqual(
            ClientCommand("pause"),
            parse_client_message('{"type": "command", "command": "  pause "}'),
        )
        self.assertEqual(
            ClientCommand("go"),
            parse_client_message(b'{"type": "command", "command": "go"}'),
        )

    def test_invalid_messages_are_rejected(self) -> None:
        cases = (
            "not json",
            "[1, 2]",
            '{"type": "chat", "command": "go"}',
            '{"type": "command", "command": 5}',
            '{"type": "command"}',
            b"\xff\xfe",
            '{"type": "command", "command": "' + "x" * 5000 + '"}',
        )
        for raw in cases:
            with self.subTest(raw=raw[:40]):
                with self.assertRaises(ClientMessageError):
                    parse_client_message(raw)


if __name__ == "__main__":
    unittest.main()
