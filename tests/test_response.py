"""Unit tests for status-line serialization."""

import io

import pytest

from response import HTTPResponse


def test_ok_response_has_status_line_only() -> None:
    response = HTTPResponse(status_code=200, body_file=io.BytesIO(b"hello"))

    assert response.head == b"HTTP/1.1 200 OK\r\n\r\n"
    assert b"Content-Length" not in response.head


@pytest.mark.parametrize(
    ("status_code", "expected"),
    [
        (404, b"HTTP/1.1 404 ServerError\r\n\r\n"),
        (400, b"HTTP/1.1 400 ServerError\r\n\r\n"),
        (500, b"HTTP/1.1 500 ServerError\r\n\r\n"),
    ],
)
def test_error_responses_have_no_body(status_code: int, expected: bytes) -> None:
    assert HTTPResponse(status_code=status_code).head == expected


def test_error_response_cannot_carry_body() -> None:
    with pytest.raises(ValueError, match="Only 200"):
        HTTPResponse(status_code=404, body_file=io.BytesIO(b"x"))


def test_close_resources_closes_body_file() -> None:
    body = io.BytesIO(b"data")
    response = HTTPResponse(status_code=200, body_file=body)

    response.close_resources()
    response.close_resources()

    assert body.closed
    assert response.body_file is None
