"""Scoped temporary files handed from one self-update step to the next."""

from __future__ import annotations

import contextlib
import os
import tempfile
from types import TracebackType
from typing import IO

from githelper.logging import get_logger

log = get_logger("githelper.tempfiles")


class TempFile:
    """Owning handle for a named temporary file.

    The file survives until :meth:`release` is called or the ``with`` block
    exits. ``release`` is idempotent.
    """

    def __init__(self, path: str) -> None:
        self._path = path
        self._released = False

    @classmethod
    def create(cls, prefix: str, directory: str | None = None) -> tuple[TempFile, IO[bytes]]:
        """Create an empty file and return its handle with an open binary writer."""
        fd, path = tempfile.mkstemp(prefix=prefix, dir=directory)
        return cls(path), os.fdopen(fd, "wb")

    @property
    def path(self) -> str:
        return self._path

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        """Delete the file if it still exists."""
        if self._released:
            return
        self._released = True
        discard(self._path)

    def __enter__(self) -> TempFile:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()

    def __fspath__(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f"TempFile({self._path!r})"


def discard(path: str | None) -> None:
    """Remove ``path`` if set; a missing file is not an error."""
    if not path:
        return
    with contextlib.suppress(FileNotFoundError):
        os.remove(path)
        log.debug("temp_file_removed", path=path)
