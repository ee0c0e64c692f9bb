class NotificationError(Exception):
    """Raised when a notification banner or chime cannot be delivered."""
