"""Self-update: download a release tarball, extract it, install the payload.

Typical flow::

    updater = SelfUpdater.from_settings(get_settings())
    updater.update("https://example.com/githelper-linux-amd64.tar.gz")

Temporary files from both steps are removed on every exit path.
"""

from __future__ import annotations

import contextlib

from githelper.archive import ArchiveExtractor
from githelper.config import Settings
from githelper.errors import ArchiveError, NetworkError
from githelper.fetcher import Fetcher
from githelper.installer import SelfInstaller
from githelper.logging import get_logger
from githelper.tempfiles import discard

log = get_logger("githelper.updater")


class SelfUpdater:
    """Runs Fetcher → ArchiveExtractor → SelfInstaller in sequence."""

    def __init__(
        self,
        fetcher: Fetcher,
        extractor: ArchiveExtractor,
        installer: SelfInstaller,
    ) -> None:
        self._fetcher = fetcher
        self._extractor = extractor
        self._installer = installer

    @classmethod
    def from_settings(cls, settings: Settings, executable_ref: str | None = None) -> SelfUpdater:
        """Build an updater whose collaborators follow ``settings``."""
        return cls(
            fetcher=Fetcher(
                settings.temp_prefix,
                directory=settings.temp_dir,
                timeout=settings.download_timeout,
                check_status=settings.check_http_status,
            ),
            extractor=ArchiveExtractor(settings.temp_prefix, directory=settings.temp_dir),
            installer=SelfInstaller(executable_ref),
        )

    def update(self, url: str) -> str:
        """Replace the running executable with the payload of the tarball at ``url``.

        Returns the installed destination path. Errors from each step
        propagate unchanged after temp files are removed.
        """
        log.info("self_update_started", url=url)
        with contextlib.ExitStack() as stack:
            try:
                archive = stack.enter_context(self._fetcher.download(url))
                payload = stack.enter_context(self._extractor.extract(archive.path))
            except (NetworkError, ArchiveError) as exc:
                discard(exc.path)
                raise
            dest = self._installer.install(payload.path)

        log.info("self_update_complete", url=url, dest=dest)
        return dest
