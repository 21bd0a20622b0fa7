"""Executable path resolution and small filesystem predicates."""

from __future__ import annotations

import os
import shutil
import stat
import sys

from githelper.errors import PathResolutionError


def resolve_executable_path(ref: str) -> str:
    """Return the path of the executable named by an argv[0]-style ``ref``.

    References starting with ``.`` are made absolute against the current
    directory; anything else is looked up on ``PATH`` (a reference that
    contains a directory part is checked in place). If the result is a
    symlink, its stored target is returned as-is. Only one hop is followed.

    Raises:
        PathResolutionError: ``ref`` is empty, the lookup fails, or the
            result cannot be ``lstat``ed.
    """
    if not ref:
        raise PathResolutionError("empty executable reference", ref=ref)

    if ref.startswith("."):
        try:
            name = os.path.abspath(ref)
        except OSError:
            # cwd is gone
            name = os.path.normpath(ref)
    else:
        found = shutil.which(os.path.normpath(ref))
        if found is None:
            raise PathResolutionError(f"{ref}: executable file not found in $PATH", ref=ref)
        name = found

    try:
        info = os.lstat(name)
    except OSError as exc:
        raise PathResolutionError(f"cannot stat {name}: {exc}", ref=ref) from exc

    if stat.S_ISLNK(info.st_mode):
        try:
            name = os.readlink(name)
        except OSError as exc:
            raise PathResolutionError(f"cannot read link {name}: {exc}", ref=ref) from exc

    return name


def path_exists(path: str | os.PathLike[str]) -> bool:
    """Return whether ``path`` exists.

    Only "not found" maps to False; other errors such as permission denied
    are raised.
    """
    try:
        os.stat(path)
    except FileNotFoundError:
        return False
    return True


def is_executable(info: os.stat_result) -> bool:
    """Return True if any execute bit is set. Always True on Windows."""
    return bool(info.st_mode & 0o111) or sys.platform == "win32"
