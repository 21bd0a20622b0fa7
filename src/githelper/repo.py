"""Working-tree queries backed by the git executable."""

from __future__ import annotations

import os

from githelper.config import get_settings
from githelper.process import run


def git(*args: str, cwd: str | os.PathLike[str] | None = None) -> str:
    """Run a git subcommand in ``cwd`` (default: the current directory)."""
    working_dir = os.getcwd() if cwd is None else cwd
    return run(working_dir, [get_settings().git_binary, *args])


def repo_root(cwd: str | os.PathLike[str] | None = None) -> str:
    """Return the top-level directory of the working tree."""
    return git("rev-parse", "--show-toplevel", cwd=cwd)


def git_dir(cwd: str | os.PathLike[str] | None = None) -> str:
    """Return the repository metadata directory.

    The path is as git reports it, which is relative to ``cwd`` when run
    from the top level (usually ``.git``).
    """
    return git("rev-parse", "--git-dir", cwd=cwd)
