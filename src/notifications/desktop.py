"""Desktop banner delivery through plyer's notification facade."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from plyer import notification

from .config import NotificationConfig
from .errors import NotificationError
from .messages import NotificationContent


class DesktopNotifier:
    """Shows OS notification banners once authorization was granted.

    Authorization is requested once at startup. A denial (disabled in config
    or no platform backend available) only suppresses banners.
    """

    def __init__(
        self,
        config: NotificationConfig,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config
        self._logger = logger or logging.getLogger("notifications.desktop")
        self._lock = threading.Lock()
        self._granted: Optional[bool] = None

    @property
    def is_authorized(self) -> bool:
        with self._lock:
            return bool(self._granted)

    def request_authorization(self) -> bool:
        with self._lock:
            if self._granted is not None:
                return self._granted
            self._granted = self._config.enabled

        if self._granted:
            self._logger.info("Notification permission granted.")
        else:
            self._logger.info("Desktop notifications disabled by configuration.")
        return self._granted

    def show(self, content: NotificationContent) -> None:
        if not self.is_authorized:
            self._logger.debug("Notification suppressed: %s", content.title)
            return

        try:
            notification.notify(
                title=content.title,
                message=content.body,
                app_name=self._config.app_name,
                timeout=self._config.timeout_seconds,
            )
        except NotImplementedError as error:
            with self._lock:
                self._granted = False
            raise NotificationError(
                "No desktop notification backend available on this platform"
            ) from error
        except Exception as error:
            raise NotificationError(f"Desktop notification failed: {error}") from error
