"""Timer page and websocket event server."""

from .config import ServerConfigurationError, UIServerConfig, default_index_file
from .service import UIServer

__all__ = [
    "ServerConfigurationError",
    "UIServer",
    "UIServerConfig",
    "default_index_file",
]
