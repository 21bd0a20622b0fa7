"""Unit tests for githelper.installer."""

from __future__ import annotations

import os
import stat
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from githelper.errors import InstallError, PathResolutionError
from githelper.installer import EXECUTABLE_MODE, SelfInstaller


@pytest.fixture
def running_exe(tmp_path: Path) -> Path:
    """Stand-in for the currently running executable."""
    exe = tmp_path / "bin" / "githelper"
    exe.parent.mkdir()
    exe.write_bytes(b"old build")
    exe.chmod(0o755)
    return exe


@pytest.fixture
def new_build(tmp_path: Path) -> Path:
    src = tmp_path / "payload"
    src.write_bytes(b"#!/bin/sh\necho 'new build'\n")
    src.chmod(0o600)
    return src


class TestInstall:
    """Tests for SelfInstaller.install()."""

    def test_overwrites_destination(self, running_exe: Path, new_build: Path) -> None:
        dest = SelfInstaller(str(running_exe)).install(new_build)

        assert dest == str(running_exe)
        assert running_exe.read_bytes() == new_build.read_bytes()

    def test_sets_executable_mode(self, running_exe: Path, new_build: Path) -> None:
        running_exe.chmod(0o711)

        SelfInstaller(str(running_exe)).install(new_build)

        mode = stat.S_IMODE(os.stat(running_exe).st_mode)
        assert mode & stat.S_IXUSR
        assert mode == EXECUTABLE_MODE

    def test_shrinking_content_truncates(self, running_exe: Path, tmp_path: Path) -> None:
        running_exe.write_bytes(b"x" * 10_000)
        small = tmp_path / "small"
        small.write_bytes(b"tiny")

        SelfInstaller(str(running_exe)).install(small)

        assert running_exe.read_bytes() == b"tiny"

    def test_dot_relative_reference(
        self, running_exe: Path, new_build: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(running_exe.parent)

        dest = SelfInstaller("./githelper").install(new_build)

        assert dest == os.path.join(os.getcwd(), "githelper")
        assert running_exe.read_bytes() == new_build.read_bytes()

    def test_reference_looked_up_on_path(
        self, running_exe: Path, new_build: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PATH", str(running_exe.parent))

        SelfInstaller("githelper").install(new_build)

        assert running_exe.read_bytes() == new_build.read_bytes()

    def test_symlinked_executable_writes_link_target(
        self, running_exe: Path, new_build: Path, tmp_path: Path
    ) -> None:
        link = tmp_path / "githelper-link"
        link.symlink_to(running_exe)

        dest = SelfInstaller(str(link)).install(new_build)

        assert dest == str(running_exe)
        assert link.is_symlink()
        assert running_exe.read_bytes() == new_build.read_bytes()

    def test_relative_symlink_target_opens_from_cwd(
        self, tmp_path: Path, new_build: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A relative link target is used as stored, against the current directory."""
        link_dir = tmp_path / "bin"
        link_dir.mkdir()
        beside_link = link_dir / "githelper-real"
        beside_link.write_bytes(b"old build")
        beside_link.chmod(0o755)
        (link_dir / "githelper").symlink_to("githelper-real")
        work = tmp_path / "work"
        work.mkdir()
        monkeypatch.chdir(work)

        dest = SelfInstaller(str(link_dir / "githelper")).install(new_build)

        assert dest == "githelper-real"
        assert (work / "githelper-real").read_bytes() == new_build.read_bytes()
        assert beside_link.read_bytes() == b"old build"

    def test_defaults_to_argv0(
        self, running_exe: Path, new_build: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(sys, "argv", [str(running_exe), "self-update"])

        installer = SelfInstaller()

        assert installer.executable_ref == str(running_exe)
        assert installer.install(new_build) == str(running_exe)


class TestInstallErrors:
    """Tests for failure paths, including the corrupting window."""

    def test_unresolvable_executable_propagates(self, tmp_path: Path, new_build: Path) -> None:
        with pytest.raises(PathResolutionError):
            SelfInstaller(str(tmp_path / "not-installed")).install(new_build)

    def test_missing_source_leaves_destination_truncated(
        self, running_exe: Path, tmp_path: Path
    ) -> None:
        with pytest.raises(InstallError) as exc_info:
            SelfInstaller(str(running_exe)).install(tmp_path / "absent")

        assert exc_info.value.path == str(running_exe)
        # truncated before the source was opened
        assert running_exe.read_bytes() == b""
        assert os.stat(running_exe).st_mode & stat.S_IXUSR

    def test_stat_failure_raises_install_error(self, running_exe: Path, new_build: Path) -> None:
        with patch(
            "githelper.installer.path_exists", side_effect=PermissionError(13, "denied")
        ):
            with pytest.raises(InstallError, match="cannot stat") as exc_info:
                SelfInstaller(str(running_exe)).install(new_build)

        assert isinstance(exc_info.value.__cause__, PermissionError)
        assert running_exe.read_bytes() == b"old build"

    def test_chmod_failure_raises(self, running_exe: Path, new_build: Path) -> None:
        with patch("githelper.installer.os.chmod", side_effect=PermissionError(1, "denied")):
            with pytest.raises(InstallError, match="chmod"):
                SelfInstaller(str(running_exe)).install(new_build)

    def test_create_failure_raises(
        self, tmp_path: Path, new_build: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        # resolves, but a directory cannot be opened for writing
        (tmp_path / "dir-exe").mkdir()
        monkeypatch.chdir(tmp_path)

        with pytest.raises(InstallError, match="cannot create"):
            SelfInstaller("./dir-exe").install(new_build)
