"""Error taxonomy for githelper.

Every component raises the first error it encounters; nothing is retried.
The CLI catches :class:`GitHelperError` and aborts the current command.
"""

from __future__ import annotations

from collections.abc import Sequence


class GitHelperError(Exception):
    """Base class for all githelper failures."""


class ExternalToolError(GitHelperError):
    """Raised when a child process cannot be started or exits non-zero."""

    def __init__(
        self,
        message: str,
        *,
        argv: Sequence[str] = (),
        returncode: int | None = None,
    ) -> None:
        super().__init__(message)
        self.argv = list(argv)
        self.returncode = returncode


class NetworkError(GitHelperError):
    """Raised when a download fails.

    ``path`` names the partially written temp file, if one was created.
    The caller owns it.
    """

    def __init__(
        self,
        message: str,
        *,
        url: str,
        path: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.path = path
        self.status_code = status_code


class ArchiveError(GitHelperError):
    """Raised on malformed gzip/tar input or a read failure mid-stream."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class InstallError(GitHelperError):
    """Raised when the destination executable cannot be prepared or written."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class PathResolutionError(GitHelperError):
    """Raised when an executable reference cannot be resolved."""

    def __init__(self, message: str, *, ref: str = "") -> None:
        super().__init__(message)
        self.ref = ref
