"""Turn a parsed request into a status line and an open file."""

from __future__ import annotations

import logging

from config import ServerConfig
from request import MalformedRequestError, ParsedRequest
from resolver import PathResolutionError, resolve_path
from response import HTTPResponse

logger = logging.getLogger(__name__)


def error_status(exc: Exception, config: ServerConfig) -> int:
    """Map any request failure onto the status code sent to the client."""
    if isinstance(exc, (MalformedRequestError, PathResolutionError)):
        return exc.status_code
    if isinstance(exc, FileNotFoundError):
        return 404
    if isinstance(exc, OSError):
        return config.io_error_status
    # Path.open rejects embedded NUL bytes with ValueError instead of OSError.
    if isinstance(exc, ValueError):
        return config.io_error_status
    raise TypeError(f"No status mapping for {exc.__class__.__name__}") from exc


def serve_file(request: ParsedRequest, config: ServerConfig) -> HTTPResponse:
    """Resolve the request against ``config`` and open the target file.

    The caller owns the returned response and must close its body file.
    """
    try:
        file_path = resolve_path(
            request.requested_path,
            config.allowed_extensions,
            config.prefix,
            config.root,
        )
    except PathResolutionError as exc:
        logger.info("Rejected %s: %s", request.requested_path, exc)
        return HTTPResponse(status_code=error_status(exc, config))

    try:
        file_obj = file_path.open("rb")
    except (OSError, ValueError) as exc:
        logger.debug("Cannot open %s: %s", file_path, exc)
        return HTTPResponse(status_code=error_status(exc, config))

    return HTTPResponse(status_code=200, body_file=file_obj)
