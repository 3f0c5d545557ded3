"""Optional websocket server mirroring the pomodoro session to browser clients."""

from .config import ServerConfigurationError, UIServerConfig
from .events import ClientCommand, ClientMessageError
from .service import CommandHandler, UIServer

__all__ = [
    "ClientCommand",
    "ClientMessageError",
    "CommandHandler",
    "ServerConfigurationError",
    "UIServer",
    "UIServerConfig",
]
