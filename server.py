"""Static file server entry point and connection lifecycle orchestration."""

from __future__ import annotations

import argparse
import itertools
import json
import logging
import socket
import threading
import time
from collections.abc import Sequence

from builder import ServerBuilder
from config import (
    ACCEPT_TIMEOUT_SECS,
    HOST,
    IO_ERROR_STATUS,
    LISTEN_BACKLOG,
    LOG_FORMAT,
    PORT,
    ServerConfig,
)
from handlers.file_handler import error_status, serve_file
from request import MalformedRequestError, ParsedRequest
from response import HTTPResponse
from socket_handler import read_request_line, write_http_response_message

logger = logging.getLogger(__name__)


class StaticFileServer:
    """Accepts connections and serves each one on its own worker thread.

    Workers share nothing but the frozen ``ServerConfig``.
    """

    def __init__(self, config: ServerConfig, *, log_format: str = LOG_FORMAT) -> None:
        self.config = config
        self.host = config.host
        self.port = config.port
        self.log_format = log_format

        self._server_socket: socket.socket | None = None
        self._connection_ids = itertools.count(1)
        self._stop_requested = threading.Event()
        self._bound = threading.Event()

    @staticmethod
    def builder() -> ServerBuilder:
        return ServerBuilder()

    def wait_until_bound(self, timeout: float | None = None) -> bool:
        return self._bound.wait(timeout)

    def start(self) -> None:
        """Listen and spawn one worker per accepted connection until stopped."""
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server_socket:
            server_socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            server_socket.bind((self.host, self.port))
            server_socket.listen(LISTEN_BACKLOG)
            server_socket.settimeout(ACCEPT_TIMEOUT_SECS)
            self.port = server_socket.getsockname()[1]
            self._server_socket = server_socket
            self._bound.set()
            logger.info("listening for connections at %s:%s", self.host, self.port)

            while not self._stop_requested.is_set():
                try:
                    client_socket, address = server_socket.accept()
                except socket.timeout:
                    continue
                except OSError as exc:
                    if not self._stop_requested.is_set():
                        logger.warning("unable to accept connection: %s", exc)
                        continue
                    break

                connection_id = next(self._connection_ids)
                worker = threading.Thread(
                    target=self._handle_client,
                    args=(client_socket, address, connection_id),
                    name=f"static-worker-{connection_id}",
                    daemon=True,
                )
                worker.start()

    def stop(self) -> None:
        """Ask the accept loop to exit; safe to call before ``start``."""
        self._stop_requested.set()
        if self._server_socket is not None:
            self._server_socket.close()
            self._server_socket = None

    def _handle_client(
        self,
        client_socket: socket.socket,
        address: tuple[str, int],
        connection_id: int,
    ) -> None:
        with client_socket:
            try:
                self._serve_connection(client_socket, address, connection_id)
            except Exception:
                logger.exception("Unhandled error on connection %s", connection_id)

    def _serve_connection(
        self,
        client_socket: socket.socket,
        address: tuple[str, int],
        connection_id: int,
    ) -> None:
        client_socket.settimeout(None)
        started_at = time.perf_counter()
        method = "-"
        path = "-"

        try:
            raw_line = read_request_line(client_socket)
            if not raw_line:
                logger.debug("connection %s closed before sending a request", connection_id)
                return
            request = ParsedRequest.from_line(raw_line)
        except MalformedRequestError as exc:
            logger.info("Malformed request on connection %s: %s", connection_id, exc)
            response = HTTPResponse(status_code=error_status(exc, self.config))
        except OSError as exc:
            logger.warning("Read failed on connection %s: %s", connection_id, exc)
            return
        else:
            method = request.method
            path = request.requested_path
            response = serve_file(request, self.config)

        try:
            bytes_sent = write_http_response_message(client_socket, response)
        except OSError as exc:
            logger.warning("Write aborted on connection %s: %s", connection_id, exc)
            return
        finally:
            response.close_resources()

        self._record_and_log(
            address=address,
            method=method,
            path=path,
            status_code=response.status_code,
            bytes_out=bytes_sent,
            started_at=started_at,
            connection_id=connection_id,
        )

    def _record_and_log(
        self,
        *,
        address: tuple[str, int],
        method: str,
        path: str,
        status_code: int,
        bytes_out: int,
        started_at: float,
        connection_id: int,
    ) -> None:
        duration_ms = (time.perf_counter() - started_at) * 1000
        event = {
            "client": address[0],
            "method": method,
            "path": path,
            "status": status_code,
            "connection_id": connection_id,
            "bytes_out": bytes_out,
            "latency_ms": round(duration_ms, 3),
        }
        if self.log_format == "json":
            logger.info(json.dumps(event, sort_keys=True))
            return

        logger.info(
            "client=%s method=%s path=%s status=%s connection_id=%s bytes_out=%s duration_ms=%.2f",
            event["client"],
            event["method"],
            event["path"],
            event["status"],
            event["connection_id"],
            event["bytes_out"],
            duration_ms,
        )


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve files under a root directory")
    parser.add_argument("--prefix", required=True, help="URL path prefix stripped from requests")
    parser.add_argument("--root", required=True, help="directory the remaining path is joined to")
    parser.add_argument(
        "--allow-ext",
        action="extend",
        nargs="+",
        default=None,
        metavar="EXT",
        help="only serve files with these extensions (default: any)",
    )
    parser.add_argument("--host", default=HOST)
    parser.add_argument("--port", type=int, default=PORT)
    parser.add_argument("--log-format", choices=["plain", "json"], default=LOG_FORMAT)
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
    )
    parser.add_argument(
        "--io-error-status",
        type=int,
        choices=[400, 500],
        default=IO_ERROR_STATUS,
        help="status sent when a file exists but cannot be opened",
    )
    return parser.parse_args(argv)


def build_server(args: argparse.Namespace) -> StaticFileServer:
    builder = (
        StaticFileServer.builder()
        .prefix(args.prefix)
        .root(args.root)
        .host(args.host)
        .port(args.port)
        .io_error_status(args.io_error_status)
    )
    if args.allow_ext is not None:
        builder.allow_ext(*args.allow_ext)
    return builder.build(log_format=args.log_format)


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))
    server = build_server(args)
    try:
        server.start()
    except KeyboardInterrupt:
        server.stop()


if __name__ == "__main__":
    main()
