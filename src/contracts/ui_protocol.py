"""Websocket message types exchanged with browser clients."""

from __future__ import annotations

# Server -> client
EVENT_HELLO = "hello"
EVENT_POMODORO = "pomodoro"
EVENT_POMODORO_COMPLETED = "pomodoro_completed"
EVENT_NOTICE = "notice"
EVENT_ERROR = "error"

# Client -> server
MESSAGE_COMMAND = "command"

# Latest event of each type is replayed to clients that connect later.
STICKY_EVENT_ORDER: tuple[str, ...] = (
    EVENT_POMODORO_COMPLETED,
    EVENT_POMODORO,
)
STICKY_EVENT_TYPES: frozenset[str] = frozenset(STICKY_EVENT_ORDER)

MAX_CLIENT_MESSAGE_BYTES = 4096
