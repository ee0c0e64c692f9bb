"""Status line text for the UI state banner."""

from __future__ import annotations

from pomodoro import EngineSnapshot


def status_message(snapshot: EngineSnapshot) -> str:
    """Build status text such as `Focus running (24:59 remaining)`."""
    if snapshot.is_running:
        return f"{snapshot.label} running ({snapshot.formatted_time} remaining)"
    if snapshot.remaining_seconds < snapshot.total_seconds:
        return f"{snapshot.label} paused ({snapshot.formatted_time} remaining)"
    return f"Ready for {snapshot.label} ({snapshot.formatted_time})"


def sessions_message(completed_work_sessions: int) -> str:
    if completed_work_sessions == 1:
        return "1 focus session completed"
    return f"{completed_work_sessions} focus sessions completed"
