"""Configuration model for desktop banners and the completion chime."""

from dataclasses import dataclass
from typing import Optional


class NotificationConfigurationError(Exception):
    """Raised when notification configuration is invalid."""


@dataclass(frozen=True)
class NotificationConfig:
    """Validated notification settings derived from app settings."""
    enabled: bool = True
    app_name: str = "Pomodoro"
    timeout_seconds: int = 10
    sound_enabled: bool = True
    output_device_index: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.app_name.strip():
            raise NotificationConfigurationError("Notification app_name cannot be empty")
        if self.timeout_seconds <= 0:
            raise NotificationConfigurationError(
                f"Notification timeout_seconds must be positive, got: {self.timeout_seconds}"
            )

    @classmethod
    def from_settings(cls, settings) -> "NotificationConfig":
        return cls(
            enabled=bool(settings.enabled),
            app_name=(settings.app_name or "").strip(),
            timeout_seconds=settings.timeout_seconds,
            sound_enabled=bool(settings.sound_enabled),
            output_device_index=settings.output_device,
        )
