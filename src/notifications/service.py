"""Fire-and-forget delivery of session-completion alerts."""

from __future__ import annotations

import concurrent.futures
import logging
from typing import Optional, Protocol

from pomodoro import SessionCompleted

from .errors import NotificationError
from .messages import NotificationContent, notification_for


class BannerLike(Protocol):
    def show(self, content: NotificationContent) -> None: ...


class ChimeLike(Protocol):
    def play(self, blocking: bool = True) -> None: ...


class NotificationService:
    """Notifier that shows a banner and plays a chime on a worker thread.

    `notify` returns immediately; delivery errors are logged and never
    propagate back into the engine.
    """

    def __init__(
        self,
        *,
        banner: Optional[BannerLike] = None,
        chime: Optional[ChimeLike] = None,
        logger: Optional[logging.Logger] = None,
        executor: Optional[concurrent.futures.Executor] = None,
    ):
        self._banner = banner
        self._chime = chime
        self._logger = logger or logging.getLogger("notifications")
        self._executor = executor or concurrent.futures.ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix="notifications",
        )

    def notify(self, event: SessionCompleted) -> None:
        content = notification_for(event)
        try:
            future = self._executor.submit(self._deliver, content)
        except RuntimeError as error:
            # Executor already shut down during teardown.
            self._logger.warning("Dropping notification '%s': %s", content.title, error)
            return
        future.add_done_callback(self._log_future_exception)

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)

    def _deliver(self, content: NotificationContent) -> None:
        self._logger.info("Notifying: %s %s", content.title, content.body)
        if self._banner is not None:
            try:
                self._banner.show(content)
            except NotificationError as error:
                self._logger.warning("Desktop notification failed: %s", error)

        if self._chime is not None:
            try:
                self._chime.play()
            except NotificationError as error:
                self._logger.warning("Notification sound failed: %s", error)

    def _log_future_exception(self, future: concurrent.futures.Future) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            self._logger.error("Notification worker failed: %s", error, exc_info=error)
