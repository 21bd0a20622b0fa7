"""Shared fixtures for githelper tests."""

from __future__ import annotations

import io
import os
import shutil
import subprocess
import tarfile
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import structlog

from githelper.config import get_settings

# (name, data) pairs; data=None makes a directory entry
TarEntries = list[tuple[str, bytes | None]]


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop GITHELPER_* variables and the cached Settings around each test."""
    for key in list(os.environ):
        if key.upper().startswith("GITHELPER_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()


def build_tarball(path: Path, entries: TarEntries) -> Path:
    """Write a gzip-compressed tar holding ``entries`` in order."""
    with tarfile.open(path, "w:gz") as tar:
        for name, data in entries:
            info = tarfile.TarInfo(name)
            if data is None:
                info.type = tarfile.DIRTYPE
                info.mode = 0o755
                tar.addfile(info)
            else:
                info.size = len(data)
                info.mode = 0o755
                tar.addfile(info, io.BytesIO(data))
    return path


@pytest.fixture
def make_tarball(tmp_path: Path) -> Callable[[TarEntries], Path]:
    """Factory fixture writing numbered tarballs under ``tmp_path``."""
    counter = iter(range(1000))

    def _make(entries: TarEntries) -> Path:
        return build_tarball(tmp_path / f"release-{next(counter)}.tar.gz", entries)

    return _make


@pytest.fixture
def git_repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create an empty git repository with one subdirectory."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    # keep git from discovering a repository above tmp_path
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    repo = tmp_path / "repo"
    repo.mkdir()
    subprocess.run(["git", "init", "-q", str(repo)], check=True, capture_output=True)
    (repo / "src" / "pkg").mkdir(parents=True)
    return repo
