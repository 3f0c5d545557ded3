"""JSON framing for outgoing events, inbound client commands, and replay state."""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable

from contracts.ui_protocol import (
    MAX_CLIENT_MESSAGE_BYTES,
    MESSAGE_COMMAND,
    STICKY_EVENT_ORDER,
    STICKY_EVENT_TYPES,
)


class ClientMessageError(ValueError):
    """Raised when a websocket client sends something that is not a command."""


@dataclass(frozen=True)
class ClientCommand:
    """A console-equivalent command line sent by a browser client."""
    text: str


def make_event(
    event_type: str,
    *,
    now_fn: Callable[[], datetime] | None = None,
    **payload: Any,
) -> str:
    """Encode one server event; enums are sent by value and sets as sorted lists."""
    timestamp = (now_fn or _utc_now)().isoformat()
    body = {"type": event_type, "timestamp": timestamp}
    body.update(payload)
    return json.dumps(body, default=_encode_value)


def parse_client_message(raw: str | bytes) -> ClientCommand:
    """Decode `{"type": "command", "command": "<line>"}` from a client."""
    if isinstance(raw, bytes):
        if len(raw) > MAX_CLIENT_MESSAGE_BYTES:
            raise ClientMessageError("Message too large.")
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as error:
            raise ClientMessageError("Message must be UTF-8 text.") from error
    elif len(raw.encode("utf-8")) > MAX_CLIENT_MESSAGE_BYTES:
        raise ClientMessageError("Message too large.")

    try:
        message = json.loads(raw)
    except json.JSONDecodeError as error:
        raise ClientMessageError("Message must be a JSON object.") from error

    if not isinstance(message, dict):
        raise ClientMessageError("Message must be a JSON object.")
    if message.get("type") != MESSAGE_COMMAND:
        raise ClientMessageError(f"Unsupported message type: {message.get('type')!r}")

    command = message.get("command")
    if not isinstance(command, str):
        raise ClientMessageError("Field 'command' must be a string.")
    return ClientCommand(text=command.strip())


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _encode_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class StickyEventStore:
    """Latest encoded event per sticky type, in replay order."""

    def __init__(self):
        self._latest: dict[str, str] = {}
        self._lock = threading.Lock()

    def remember(self, event_type: str, message: str) -> None:
        if event_type in STICKY_EVENT_TYPES:
            with self._lock:
                self._latest[event_type] = message

    def snapshot(self) -> list[str]:
        with self._lock:
            latest = dict(self._latest)
        return [latest[name] for name in STICKY_EVENT_ORDER if name in latest]
