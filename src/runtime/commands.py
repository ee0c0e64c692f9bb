"""Maps UI command names onto pomodoro engine commands."""

from __future__ import annotations

import logging
from typing import Callable

from pomodoro import PomodoroActionResult, PomodoroEngine
from pomodoro.constants import (
    ACTION_PAUSE,
    ACTION_RESET,
    ACTION_SKIP,
    ACTION_START,
    REASON_UNSUPPORTED_ACTION,
)

from .ui import RuntimeUIPublisher


class CommandDispatcher:
    """Applies one UI command to the engine and reports rejections.

    Accepted commands are published by the engine subscription; only
    rejected ones are answered here.
    """
    def __init__(
        self,
        *,
        engine: PomodoroEngine,
        ui: RuntimeUIPublisher,
        logger: logging.Logger,
    ):
        self._engine = engine
        self._ui = ui
        self._logger = logger
        self._handlers: dict[str, Callable[[], PomodoroActionResult]] = {
            ACTION_START: engine.start,
            ACTION_PAUSE: engine.pause,
            ACTION_RESET: engine.reset,
            ACTION_SKIP: engine.skip,
        }

    def dispatch(self, action: str) -> PomodoroActionResult | None:
        handler = self._handlers.get(action)
        if handler is None:
            self._logger.warning("Unsupported UI command: %s", action)
            self._ui.publish_pomodoro_update(
                self._engine.snapshot(),
                action=action,
                accepted=False,
                reason=REASON_UNSUPPORTED_ACTION,
            )
            return None

        result = handler()
        self._logger.debug(
            "Command %s: accepted=%s reason=%s",
            action,
            result.accepted,
            result.reason,
        )
        if not result.accepted:
            self._ui.publish_pomodoro_update(
                result.snapshot,
                action=result.action,
                accepted=False,
                reason=result.reason,
            )
        return result
