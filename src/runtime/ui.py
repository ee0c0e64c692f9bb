from __future__ import annotations

from typing import Any, Optional, Protocol

from contracts.ui_protocol import EVENT_POMODORO, EVENT_SESSION_COMPLETED
from notifications import NotificationContent
from pomodoro import EngineSnapshot, SessionCompleted


class UIServerLike(Protocol):
    def publish(self, event_type: str, **payload: Any) -> None:
        ...

    def publish_state(
        self,
        state: str,
        *,
        message: Optional[str] = None,
        **payload: Any,
    ) -> None:
        ...


class RuntimeUIPublisher:
    def __init__(self, ui_server: Optional[UIServerLike]):
        self._ui_server = ui_server

    def publish(self, event_type: str, **payload: Any) -> None:
        if self._ui_server:
            self._ui_server.publish(event_type, **payload)

    def publish_state(
        self,
        state: str,
        *,
        message: Optional[str] = None,
        **payload: Any,
    ) -> None:
        if self._ui_server:
            self._ui_server.publish_state(state, message=message, **payload)

    def publish_pomodoro_update(
        self,
        snapshot: EngineSnapshot,
        *,
        action: str,
        accepted: Optional[bool] = None,
        reason: str = "",
    ) -> None:
        payload: dict[str, Any] = {
            "action": action,
            "session": snapshot.current_session,
            "label": snapshot.label,
            "is_running": snapshot.is_running,
            "remaining_seconds": snapshot.remaining_seconds,
            "total_seconds": snapshot.total_seconds,
            "formatted_time": snapshot.formatted_time,
            "progress": snapshot.progress,
            "completed_work_sessions": snapshot.completed_work_sessions,
        }
        if accepted is not None:
            payload["accepted"] = accepted
        if reason:
            payload["reason"] = reason
        self.publish(EVENT_POMODORO, **payload)

    def publish_session_completed(
        self,
        event: SessionCompleted,
        content: NotificationContent,
    ) -> None:
        self.publish(
            EVENT_SESSION_COMPLETED,
            finished_session=event.finished_session,
            next_session=event.next_session,
            completed_work_sessions=event.completed_work_sessions,
            title=content.title,
            body=content.body,
        )
