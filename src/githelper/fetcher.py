"""HTTP download of release artifacts into temporary files."""

from __future__ import annotations

from typing import IO

import httpx

from githelper.errors import NetworkError
from githelper.logging import get_logger
from githelper.tempfiles import TempFile

log = get_logger("githelper.fetcher")

CHUNK_SIZE = 64 * 1024


class Fetcher:
    """Downloads a URL into a fresh temporary file.

    One unauthenticated GET per call, no retry. With ``timeout=None`` a
    stalled server blocks the caller indefinitely.
    """

    def __init__(
        self,
        prefix: str,
        *,
        directory: str | None = None,
        timeout: float | None = None,
        check_status: bool = True,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            prefix: Name prefix for created temp files.
            directory: Where temp files are created (OS default when None).
            timeout: HTTP timeout in seconds, None for no timeout.
            check_status: Raise on non-2xx responses instead of saving the body.
            client: Pre-built client to use; the caller keeps ownership of it.
        """
        self._prefix = prefix
        self._directory = directory
        self._timeout = timeout
        self._check_status = check_status
        self._client = client

    def download(self, url: str) -> TempFile:
        """Stream ``url`` into a temp file and return its handle.

        On success the file is closed and complete.

        Raises:
            NetworkError: the temp file could not be created, the transfer
                failed, or the status was not 2xx while status checking is
                enabled. ``path`` names the partial file, which the caller
                must discard.
        """
        try:
            handle, out = TempFile.create(self._prefix, self._directory)
        except OSError as exc:
            raise NetworkError(f"cannot create temp file: {exc}", url=url) from exc

        with out:
            try:
                written = self._fetch_into(url, out, handle.path)
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                log.warning("download_failed", url=url, error=str(exc))
                raise NetworkError(
                    f"download of {url} failed: {exc}", url=url, path=handle.path
                ) from exc
            except OSError as exc:
                log.warning("download_write_failed", url=url, path=handle.path, error=str(exc))
                raise NetworkError(
                    f"writing {handle.path} failed: {exc}", url=url, path=handle.path
                ) from exc

        log.info("download_complete", url=url, path=handle.path, bytes=written)
        return handle

    def _fetch_into(self, url: str, out: IO[bytes], path: str) -> int:
        if self._client is not None:
            return self._stream(self._client, url, out, path)
        with httpx.Client(timeout=self._timeout, follow_redirects=True) as client:
            return self._stream(client, url, out, path)

    def _stream(self, client: httpx.Client, url: str, out: IO[bytes], path: str) -> int:
        written = 0
        with client.stream("GET", url) as response:
            if self._check_status and not response.is_success:
                log.warning("download_bad_status", url=url, status=response.status_code)
                raise NetworkError(
                    f"download of {url} returned HTTP {response.status_code}",
                    url=url,
                    path=path,
                    status_code=response.status_code,
                )
            for chunk in response.iter_bytes(CHUNK_SIZE):
                out.write(chunk)
                written += len(chunk)
        return written
