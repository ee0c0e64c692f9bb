"""Session, action, and reason constants used by the pomodoro engine."""

from __future__ import annotations

SESSION_WORK = "work"
SESSION_SHORT_BREAK = "short_break"
SESSION_LONG_BREAK = "long_break"

WORK_SECONDS = 25 * 60
SHORT_BREAK_SECONDS = 5 * 60
LONG_BREAK_SECONDS = 15 * 60

SESSION_DURATIONS: dict[str, int] = {
    SESSION_WORK: WORK_SECONDS,
    SESSION_SHORT_BREAK: SHORT_BREAK_SECONDS,
    SESSION_LONG_BREAK: LONG_BREAK_SECONDS,
}

SESSION_NAMES: dict[str, str] = {
    SESSION_WORK: "Work",
    SESSION_SHORT_BREAK: "Short Break",
    SESSION_LONG_BREAK: "Long Break",
}

FOCUS_LABEL = "Focus"

DEFAULT_LONG_BREAK_INTERVAL = 4
TICK_INTERVAL_SECONDS = 1.0

ACTION_START = "start"
ACTION_PAUSE = "pause"
ACTION_RESET = "reset"
ACTION_SKIP = "skip"

ACTION_SYNC = "sync"
ACTION_TICK = "tick"
ACTION_COMPLETED = "completed"

REASON_STARTED = "started"
REASON_PAUSED = "paused"
REASON_RESET = "reset"
REASON_SKIPPED = "skipped"
REASON_ALREADY_RUNNING = "already_running"
REASON_NOT_RUNNING = "not_running"
REASON_UNSUPPORTED_ACTION = "unsupported_action"

REASON_TICK = "tick"
REASON_COMPLETED = "completed"
REASON_STARTUP = "startup"
