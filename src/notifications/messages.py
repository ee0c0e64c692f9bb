"""Title and body text for session-completion notifications."""

from __future__ import annotations

from dataclasses import dataclass

from pomodoro import SessionCompleted, nominal_duration
from pomodoro.constants import (
    SESSION_LONG_BREAK,
    SESSION_SHORT_BREAK,
    SESSION_WORK,
)


@dataclass(frozen=True)
class NotificationContent:
    title: str
    body: str


def _minutes(session) -> int:
    return nominal_duration(session) // 60


def notification_for(event: SessionCompleted) -> NotificationContent:
    """Build the banner text for a finished session."""
    if event.finished_session == SESSION_WORK:
        if event.next_session == SESSION_LONG_BREAK:
            body = f"Time for a long break ({_minutes(SESSION_LONG_BREAK)} min)."
        else:
            body = f"Time for a short break ({_minutes(SESSION_SHORT_BREAK)} min)."
        return NotificationContent(title="Work Session Over!", body=body)

    if event.finished_session == SESSION_SHORT_BREAK:
        return NotificationContent(
            title="Break Over!",
            body=f"Time to get back to focus ({_minutes(SESSION_WORK)} min).",
        )

    return NotificationContent(
        title="Long Break Over!",
        body=f"Ready for the next focus session? ({_minutes(SESSION_WORK)} min).",
    )
