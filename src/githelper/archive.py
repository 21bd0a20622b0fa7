"""Payload extraction from gzip-compressed tar archives.

Release archives carry a single file. Every non-directory entry is copied,
in archive order, into one output file, so an archive with several files
yields their concatenation.
"""

from __future__ import annotations

import gzip
import os
import shutil
import tarfile
import zlib

from githelper.errors import ArchiveError
from githelper.logging import get_logger
from githelper.tempfiles import TempFile

log = get_logger("githelper.archive")


class ArchiveExtractor:
    """Extracts the payload of a ``.tar.gz`` into a fresh temporary file."""

    def __init__(self, prefix: str, *, directory: str | None = None) -> None:
        self._prefix = prefix
        self._directory = directory

    def extract(self, archive_path: str | os.PathLike[str]) -> TempFile:
        """Copy the payload of ``archive_path`` into a temp file.

        The handle is returned even when nothing was copied, e.g. for an
        archive holding only directories.

        Raises:
            ArchiveError: the output file could not be created, the input is
                not valid gzip/tar, or reading failed mid-stream. ``path``
                names the partial output, which the caller must discard.
        """
        try:
            handle, out = TempFile.create(self._prefix, self._directory)
        except OSError as exc:
            raise ArchiveError(f"cannot create temp file: {exc}") from exc

        entries = 0
        copied = 0
        with out:
            try:
                # "r|gz" reads sequentially, entries in archive order
                with tarfile.open(archive_path, mode="r|gz") as tar:
                    for member in tar:
                        if member.isdir():
                            continue
                        if not member.isfile():
                            # links and device nodes carry no data
                            continue
                        source = tar.extractfile(member)
                        if source is None:
                            continue
                        with source:
                            shutil.copyfileobj(source, out)
                        entries += 1
                        copied += member.size
            except tarfile.ReadError as exc:
                if entries == 0 and _decompresses_to_nothing(archive_path):
                    log.info("extract_empty_archive", archive=str(archive_path), path=handle.path)
                    return handle
                log.warning("extract_failed", archive=str(archive_path), error=str(exc))
                raise ArchiveError(
                    f"cannot extract {archive_path}: {exc}", path=handle.path
                ) from exc
            except (tarfile.TarError, zlib.error, EOFError, OSError) as exc:
                log.warning("extract_failed", archive=str(archive_path), error=str(exc))
                raise ArchiveError(
                    f"cannot extract {archive_path}: {exc}", path=handle.path
                ) from exc

        log.info(
            "extract_complete",
            archive=str(archive_path),
            path=handle.path,
            entries=entries,
            bytes=copied,
        )
        return handle


def _decompresses_to_nothing(archive_path: str | os.PathLike[str]) -> bool:
    """Return True if ``archive_path`` is valid gzip holding zero bytes.

    A zero-length file has no gzip header and does not count.
    """
    try:
        if os.path.getsize(archive_path) == 0:
            return False
        with gzip.open(archive_path, "rb") as stream:
            return stream.read(1) == b""
    except (zlib.error, EOFError, OSError):
        return False
