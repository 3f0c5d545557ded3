"""Settings for the optional websocket event server."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


class ServerConfigurationError(Exception):
    """Raised when UI server configuration is invalid."""


WEBSOCKET_PATH = "/ws"
HEALTHZ_PATH = "/healthz"
INDEX_PATHS: frozenset[str] = frozenset({"/", "/index.html"})


@dataclass(frozen=True)
class UIServerConfig:
    """Where to listen, which page to serve, and whether clients may send commands."""
    enabled: bool = False
    host: str = "127.0.0.1"
    port: int = 8765
    index_file: str = ""
    accept_commands: bool = True

    def __post_init__(self) -> None:
        if not self.host.strip():
            raise ServerConfigurationError("ui_server.host cannot be empty")
        if self.port < 1 or self.port > 65535:
            raise ServerConfigurationError(
                f"ui_server.port must be in [1, 65535], got: {self.port}"
            )
        if self.enabled and self.index_file:
            _require_file(Path(self.index_file))

    @property
    def websocket_path(self) -> str:
        return WEBSOCKET_PATH

    @classmethod
    def from_settings(cls, settings) -> "UIServerConfig":
        return cls(
            enabled=bool(settings.enabled),
            host=settings.host,
            port=settings.port,
            index_file=(settings.index_file or "").strip(),
            accept_commands=bool(settings.accept_commands),
        )


def _require_file(path: Path) -> None:
    if not path.exists():
        raise ServerConfigurationError(f"UI index file not found: {path}")
    if not path.is_file():
        raise ServerConfigurationError(f"UI index path is not a file: {path}")
