"""Request-line model and parser."""

from dataclasses import dataclass

ALLOWED_METHOD = "GET"


class MalformedRequestError(ValueError):
    """Request line that cannot be served, carrying an HTTP status code."""

    def __init__(self, message: str, *, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(slots=True)
class ParsedRequest:
    method: str
    requested_path: str

    @classmethod
    def from_line(cls, raw_line: bytes) -> "ParsedRequest":
        """Parse ``METHOD SP PATH [SP version] CRLF`` into a request.

        Anything after the path token is ignored.
        """
        try:
            line = raw_line.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedRequestError("Request line is not valid UTF-8") from exc

        parts = line.split(" ")
        if len(parts) < 2:
            raise MalformedRequestError("Request line is missing the path")

        method = parts[0]
        requested_path = parts[1].strip()
        if not method or not requested_path:
            raise MalformedRequestError("Request line contains empty tokens")

        if method != ALLOWED_METHOD:
            raise MalformedRequestError(f"Unsupported method: {method!r}")

        return cls(method=method, requested_path=requested_path)
