"""Status-line response model and serializer."""

from dataclasses import dataclass
from typing import BinaryIO

OK_REASON = "OK"
ERROR_REASON = "ServerError"


def reason_phrase(status_code: int) -> str:
    return OK_REASON if status_code == 200 else ERROR_REASON


@dataclass(slots=True)
class HTTPResponse:
    """A status line and an optional open file to stream as the body.

    No headers are ever written, so the head is the status line followed by
    an empty line.
    """

    status_code: int
    body_file: BinaryIO | None = None

    def __post_init__(self) -> None:
        if self.body_file is not None and self.status_code != 200:
            raise ValueError("Only 200 responses can carry a body")

    @property
    def head(self) -> bytes:
        status_line = f"HTTP/1.1 {self.status_code} {reason_phrase(self.status_code)}"
        return status_line.encode("ascii") + b"\r\n\r\n"

    def close_resources(self) -> None:
        if self.body_file is not None:
            self.body_file.close()
            self.body_file = None
