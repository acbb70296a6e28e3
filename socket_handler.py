"""Low-level socket read/write utilities."""

from __future__ import annotations

import errno
import os
import socket

from config import BUFFER_SIZE, MAX_REQUEST_LINE_BYTES, WRITE_CHUNK_SIZE
from request import MalformedRequestError
from response import HTTPResponse

_SENDFILE_UNSUPPORTED = {errno.EINVAL, errno.ENOSYS, errno.ENOTSOCK, errno.EOPNOTSUPP}


class RequestLineTooLongError(MalformedRequestError):
    """Raised when no newline arrives within MAX_REQUEST_LINE_BYTES."""


def extract_request_line(buffer: bytes) -> bytes | None:
    """Return the first line of ``buffer`` including its newline, if complete."""
    newline_index = buffer.find(b"\n")
    if newline_index == -1:
        if len(buffer) > MAX_REQUEST_LINE_BYTES:
            raise RequestLineTooLongError("Request line exceeded MAX_REQUEST_LINE_BYTES")
        return None
    if newline_index + 1 > MAX_REQUEST_LINE_BYTES:
        raise RequestLineTooLongError("Request line exceeded MAX_REQUEST_LINE_BYTES")
    return bytes(buffer[: newline_index + 1])


def read_request_line(client_socket: socket.socket) -> bytes:
    """Read one request line; bytes after it are read but discarded.

    Returns whatever arrived if the client closes before sending a newline,
    and ``b""`` if it closes before sending anything.
    """
    buffer = bytearray()
    while True:
        line = extract_request_line(bytes(buffer))
        if line is not None:
            return line

        chunk = client_socket.recv(BUFFER_SIZE)
        if not chunk:
            return bytes(buffer)
        buffer.extend(chunk)


def write_http_response_message(
    client_socket: socket.socket,
    response: HTTPResponse,
    *,
    write_chunk_size: int = WRITE_CHUNK_SIZE,
) -> int:
    """Write the status line, then stream the body file if there is one."""
    bytes_sent = 0
    client_socket.sendall(response.head)
    bytes_sent += len(response.head)

    file_obj = response.body_file
    if file_obj is None:
        return bytes_sent

    # Read until EOF instead of trusting st_size; /proc files report 0.
    if hasattr(os, "sendfile"):
        offset = 0
        while True:
            try:
                sent = os.sendfile(
                    client_socket.fileno(),
                    file_obj.fileno(),
                    offset,
                    write_chunk_size,
                )
            except OSError as exc:
                if offset or exc.errno not in _SENDFILE_UNSUPPORTED:
                    raise
                break
            if sent <= 0:
                return bytes_sent + offset
            offset += sent
        bytes_sent += offset

    while True:
        chunk = file_obj.read(write_chunk_size)
        if not chunk:
            break
        client_socket.sendall(chunk)
        bytes_sent += len(chunk)
    return bytes_sent
