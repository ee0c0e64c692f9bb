from .service import (
    EngineSnapshot,
    EngineUpdate,
    Notifier,
    PomodoroAction,
    PomodoroActionResult,
    PomodoroEngine,
    SessionCompleted,
    SessionType,
    display_label,
    format_time,
    nominal_duration,
    progress_fraction,
)
from .ticker import Ticker, TickSource

__all__ = [
    "EngineSnapshot",
    "EngineUpdate",
    "Notifier",
    "PomodoroAction",
    "PomodoroActionResult",
    "PomodoroEngine",
    "SessionCompleted",
    "SessionType",
    "TickSource",
    "Ticker",
    "display_label",
    "format_time",
    "nominal_duration",
    "progress_fraction",
]
