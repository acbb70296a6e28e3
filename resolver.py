"""Map a requested URL path onto a file beneath the configured root."""

from __future__ import annotations

from collections.abc import Collection
from pathlib import Path, PurePosixPath

PREFIX_ERR = "prefix not found in url"
EXTENSION_MISMATCH_ERR = "path extension doesn't match allowed values"


class PathResolutionError(ValueError):
    """Base error for requested paths the server refuses to resolve."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)


class PrefixMismatchError(PathResolutionError):
    status_code = 404

    def __init__(self) -> None:
        super().__init__(PREFIX_ERR)


class ExtensionMismatchError(PathResolutionError):
    status_code = 400

    def __init__(self) -> None:
        super().__init__(EXTENSION_MISMATCH_ERR)


def path_extension(path: PurePosixPath) -> str | None:
    """Return the text after the last dot of the final component, if any.

    Names made only of a leading dot and a stem (``.bashrc``) and ``..`` have
    no extension; ``name.`` has the empty extension.
    """
    name = path.name
    if not name or name == "..":
        return None
    stem, dot, extension = name.rpartition(".")
    if not dot or not stem:
        return None
    return extension


def _posix_path(raw: str) -> PurePosixPath:
    # POSIX keeps a leading "//" as a distinct root; treat it as "/".
    if raw.startswith("//"):
        raw = "/" + raw.lstrip("/")
    return PurePosixPath(raw)


def resolve_path(
    requested_path: str,
    allowed_extensions: Collection[str] | None,
    prefix: str,
    root: str | Path,
) -> Path:
    """Strip ``prefix`` from ``requested_path`` and join the rest onto ``root``.

    The prefix is compared component by component, so ``/static`` matches
    ``/static/a.png`` but not ``/staticfiles/a.png``. ``..`` components in the
    remainder are joined as-is.
    """
    try:
        remainder = _posix_path(requested_path).relative_to(_posix_path(prefix))
    except ValueError as exc:
        raise PrefixMismatchError() from exc

    if allowed_extensions is not None:
        extension = path_extension(remainder)
        if extension is None or extension not in allowed_extensions:
            raise ExtensionMismatchError()

    return Path(root) / remainder
