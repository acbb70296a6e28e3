"""Tests for the command-line entry point."""

from pathlib import Path

import pytest

from server import _parse_args, build_server


def test_prefix_and_root_are_required() -> None:
    with pytest.raises(SystemExit):
        _parse_args(["--root", "/"])
    with pytest.raises(SystemExit):
        _parse_args(["--prefix", "/local"])


def test_cli_builds_configured_server() -> None:
    args = _parse_args(
        [
            "--prefix",
            "/local",
            "--root",
            "/srv/files",
            "--allow-ext",
            "png",
            "svg",
            "--allow-ext",
            ".jpg",
            "--port",
            "9000",
            "--log-format",
            "json",
            "--io-error-status",
            "500",
        ]
    )

    server = build_server(args)

    assert server.config.prefix == "/local"
    assert server.config.root == Path("/srv/files")
    assert server.config.allowed_extensions == frozenset({"png", "svg", "jpg"})
    assert server.port == 9000
    assert server.log_format == "json"
    assert server.config.io_error_status == 500


def test_cli_defaults_to_no_extension_restriction() -> None:
    server = build_server(_parse_args(["--prefix", "/local", "--root", "/"]))

    assert server.config.allowed_extensions is None
    assert (server.host, server.port) == ("127.0.0.1", 8000)
    assert server.config.io_error_status == 400


def test_cli_rejects_unsupported_io_error_status() -> None:
    with pytest.raises(SystemExit):
        _parse_args(["--prefix", "/local", "--root", "/", "--io-error-status", "503"])
