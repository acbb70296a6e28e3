"""Unit tests for request-line parsing."""

import pytest

from request import MalformedRequestError, ParsedRequest


def test_parse_get_with_version() -> None:
    request = ParsedRequest.from_line(b"GET /local/etc/hosts HTTP/1.1\r\n")

    assert request.method == "GET"
    assert request.requested_path == "/local/etc/hosts"


def test_parse_get_without_version_trims_crlf() -> None:
    request = ParsedRequest.from_line(b"GET /local/image.png\r\n")

    assert request.requested_path == "/local/image.png"


def test_parse_keeps_query_string_in_path() -> None:
    request = ParsedRequest.from_line(b"GET /local/a.png?v=2 HTTP/1.0\r\n")

    assert request.requested_path == "/local/a.png?v=2"


def test_parse_missing_path_raises_value_error() -> None:
    with pytest.raises(ValueError, match="missing the path"):
        ParsedRequest.from_line(b"GET\r\n")


@pytest.mark.parametrize("raw", [b"\r\n", b" /local/a.png HTTP/1.1\r\n", b"GET  HTTP/1.1\r\n"])
def test_parse_empty_tokens_raise(raw: bytes) -> None:
    with pytest.raises(MalformedRequestError):
        ParsedRequest.from_line(raw)


@pytest.mark.parametrize("method", [b"POST", b"HEAD", b"get"])
def test_parse_rejects_methods_other_than_get(method: bytes) -> None:
    with pytest.raises(MalformedRequestError, match="Unsupported method") as exc_info:
        ParsedRequest.from_line(method + b" /local/a.png HTTP/1.1\r\n")

    assert exc_info.value.status_code == 400


def test_parse_rejects_invalid_utf8() -> None:
    with pytest.raises(MalformedRequestError, match="UTF-8"):
        ParsedRequest.from_line(b"GET /local/\xff.png HTTP/1.1\r\n")
