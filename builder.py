"""Fluent builder that collects settings before the server starts."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from config import HOST, IO_ERROR_STATUS, PORT, ServerConfig, ServerConfigError

if TYPE_CHECKING:
    from server import StaticFileServer


def normalize_extensions(exts: Iterable[str]) -> frozenset[str]:
    """Drop one leading dot so ``.png`` and ``png`` name the same extension."""
    return frozenset(ext[1:] if ext.startswith(".") else ext for ext in exts)


class ServerBuilder:
    def __init__(self) -> None:
        self._allowed_extensions: frozenset[str] | None = None
        self._prefix: str | None = None
        self._root: Path | None = None
        self._host = HOST
        self._port = PORT
        self._io_error_status = IO_ERROR_STATUS

    def allow_ext(self, *exts: str | Iterable[str]) -> ServerBuilder:
        """Restrict serving to these extensions; accepts names or lists of names."""
        names: list[str] = []
        for ext in exts:
            names.extend([ext] if isinstance(ext, str) else ext)
        self._allowed_extensions = normalize_extensions(names)
        return self

    def prefix(self, prefix: str) -> ServerBuilder:
        self._prefix = prefix
        return self

    def root(self, root: str | Path) -> ServerBuilder:
        self._root = Path(root)
        return self

    def host(self, host: str) -> ServerBuilder:
        self._host = host
        return self

    def port(self, port: int) -> ServerBuilder:
        self._port = port
        return self

    def io_error_status(self, status_code: int) -> ServerBuilder:
        self._io_error_status = status_code
        return self

    def build_config(self) -> ServerConfig:
        """Return the frozen configuration; prefix and root are required."""
        if self._prefix is None:
            raise ServerConfigError("prefix is required")
        if self._root is None:
            raise ServerConfigError("root is required")
        return ServerConfig(
            prefix=self._prefix,
            root=self._root,
            allowed_extensions=self._allowed_extensions,
            host=self._host,
            port=self._port,
            io_error_status=self._io_error_status,
        )

    def build(self, **server_kwargs: object) -> StaticFileServer:
        from server import StaticFileServer

        return StaticFileServer(self.build_config(), **server_kwargs)

    def run(self) -> None:
        self.build().start()
