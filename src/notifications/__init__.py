"""Public exports for session-completion notification components."""

from .config import NotificationConfig, NotificationConfigurationError
from .desktop import DesktopNotifier
from .errors import NotificationError
from .messages import NotificationContent, notification_for
from .service import NotificationService
from .sound import ChimePlayer

__all__ = [
    "ChimePlayer",
    "DesktopNotifier",
    "NotificationConfig",
    "NotificationConfigurationError",
    "NotificationContent",
    "NotificationError",
    "NotificationService",
    "notification_for",
]
