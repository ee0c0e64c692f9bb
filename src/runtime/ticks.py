"""Handlers that mirror engine updates and completions onto the UI."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from contracts.ui_protocol import STATE_IDLE, STATE_PAUSED, STATE_RUNNING
from notifications import notification_for
from pomodoro import EngineUpdate, SessionCompleted
from pomodoro.constants import (
    ACTION_COMPLETED,
    ACTION_TICK,
    REASON_COMPLETED,
    REASON_TICK,
)

from .messages import sessions_message, status_message
from .ui import RuntimeUIPublisher

_UPDATE_REASONS: dict[str, str] = {
    ACTION_TICK: REASON_TICK,
    ACTION_COMPLETED: REASON_COMPLETED,
}


@dataclass(frozen=True)
class TickDependencies:
    """Dependencies required for processing engine updates."""
    logger: logging.Logger
    ui: RuntimeUIPublisher


class TickProcessor:
    """Engine subscriber and notifier that keeps the web UI in sync.

    Registered both as an engine listener (every state change) and as a
    notifier (one call per finished session).
    """
    def __init__(self, dependencies: TickDependencies):
        self._dependencies = dependencies

    def handle_update(self, update: EngineUpdate) -> None:
        deps = self._dependencies
        snapshot = update.snapshot
        deps.ui.publish_pomodoro_update(
            snapshot,
            action=update.action,
            accepted=True,
            reason=_UPDATE_REASONS.get(update.action, ""),
        )
        if update.action == ACTION_TICK:
            return

        if snapshot.is_running:
            state = STATE_RUNNING
        elif snapshot.remaining_seconds < snapshot.total_seconds:
            state = STATE_PAUSED
        else:
            state = STATE_IDLE
        deps.ui.publish_state(
            state,
            message=status_message(snapshot),
            sessions=sessions_message(snapshot.completed_work_sessions),
        )

    def notify(self, event: SessionCompleted) -> None:
        content = notification_for(event)
        self._dependencies.logger.info(
            "%s -> %s (%s)",
            event.finished_session,
            event.next_session,
            content.body,
        )
        self._dependencies.ui.publish_session_completed(event, content)
