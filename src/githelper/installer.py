"""In-place replacement of the running executable.

Warning: the destination is truncated before the new content is read. If
anything fails after that point the on-disk executable is left corrupted
(the running process keeps working until it exits). Back up the binary
before self-installing.

If the executable is a symlink, the link target is used exactly as stored.
A relative target such as ``githelper -> build/githelper`` is therefore
opened relative to the current directory, not the link's directory.
"""

from __future__ import annotations

import os
import shutil
import sys

from githelper.errors import InstallError
from githelper.logging import get_logger
from githelper.paths import is_executable, path_exists, resolve_executable_path

log = get_logger("githelper.installer")

EXECUTABLE_MODE = 0o755


class SelfInstaller:
    """Overwrites the currently running program with new content."""

    def __init__(self, executable_ref: str | None = None) -> None:
        """Initialize the installer.

        Args:
            executable_ref: argv[0]-style reference to the program to
                replace. Defaults to ``sys.argv[0]`` at install time.
        """
        self._executable_ref = executable_ref

    @property
    def executable_ref(self) -> str:
        return self._executable_ref if self._executable_ref is not None else sys.argv[0]

    def destination(self) -> str:
        """Resolve the path that :meth:`install` will overwrite."""
        return resolve_executable_path(self.executable_ref)

    def install(self, new_binary_path: str | os.PathLike[str]) -> str:
        """Replace the running executable with ``new_binary_path``.

        The mode is set to 0755 before any bytes are written.

        Returns:
            The destination path.

        Raises:
            PathResolutionError: the running executable cannot be located.
            InstallError: the destination cannot be stat'd, created or chmod'd, or
                the source cannot be opened or read.
        """
        dest = self.destination()
        try:
            existed = path_exists(dest)
        except OSError as exc:
            raise InstallError(f"cannot stat {dest}: {exc}", path=dest) from exc
        log.info("install_started", source=str(new_binary_path), dest=dest, replacing=existed)

        try:
            out = open(dest, "wb")  # noqa: SIM115
        except OSError as exc:
            raise InstallError(f"cannot create {dest}: {exc}", path=dest) from exc

        with out:
            try:
                os.chmod(dest, EXECUTABLE_MODE)
            except OSError as exc:
                raise InstallError(f"cannot chmod {dest}: {exc}", path=dest) from exc

            try:
                with open(new_binary_path, "rb") as src:
                    shutil.copyfileobj(src, out)
            except OSError as exc:
                log.error("install_failed", dest=dest, error=str(exc))
                raise InstallError(
                    f"cannot copy {new_binary_path} to {dest}: {exc}", path=dest
                ) from exc

        log.info("install_complete", dest=dest, executable=is_executable(os.stat(dest)))
        return dest
