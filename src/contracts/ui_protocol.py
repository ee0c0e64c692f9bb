"""Web UI websocket event, command, and state constants."""

from __future__ import annotations

# Websocket event types (server -> UI)
EVENT_HELLO = "hello"
EVENT_STATE_UPDATE = "state_update"
EVENT_POMODORO = "pomodoro"
EVENT_SESSION_COMPLETED = "session_completed"
EVENT_ERROR = "error"

# Websocket message types (UI -> server)
MESSAGE_COMMAND = "command"

# UI runtime states
STATE_IDLE = "idle"
STATE_RUNNING = "running"
STATE_PAUSED = "paused"
STATE_ERROR = "error"

STICKY_EVENT_TYPES: frozenset[str] = frozenset(
    {
        EVENT_STATE_UPDATE,
        EVENT_POMODORO,
        EVENT_SESSION_COMPLETED,
        EVENT_ERROR,
    }
)

STICKY_EVENT_ORDER: tuple[str, ...] = (
    EVENT_POMODORO,
    EVENT_SESSION_COMPLETED,
    EVENT_ERROR,
    EVENT_STATE_UPDATE,
)
