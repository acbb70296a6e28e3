"""Configuration constants and the immutable server configuration value."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

HOST: str = "127.0.0.1"
PORT: int = 8000
BUFFER_SIZE: int = 8192
WRITE_CHUNK_SIZE: int = 65_536
MAX_REQUEST_LINE_BYTES: int = 8192
ACCEPT_TIMEOUT_SECS: float = 0.2
LISTEN_BACKLOG: int = 128
LOG_FORMAT: str = "plain"
IO_ERROR_STATUS: int = 400


class ServerConfigError(ValueError):
    """Raised when a server configuration is missing a required setting."""


@dataclass(frozen=True, slots=True)
class ServerConfig:
    prefix: str
    root: Path
    allowed_extensions: frozenset[str] | None = None
    host: str = HOST
    port: int = PORT
    io_error_status: int = IO_ERROR_STATUS

    def __post_init__(self) -> None:
        if not self.prefix:
            raise ServerConfigError("prefix is required")
        if self.root is None or not str(self.root):
            raise ServerConfigError("root is required")
        if not isinstance(self.root, Path):
            object.__setattr__(self, "root", Path(self.root))
        if self.allowed_extensions is not None and not isinstance(
            self.allowed_extensions, frozenset
        ):
            object.__setattr__(self, "allowed_extensions", frozenset(self.allowed_extensions))
        if self.io_error_status not in (400, 500):
            raise ServerConfigError("io_error_status must be 400 or 500")
