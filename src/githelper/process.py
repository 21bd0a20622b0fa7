"""Synchronous external process execution.

All subprocess calls in githelper go through :func:`run`.
"""

from __future__ import annotations

import os
import subprocess  # nosec B404
from collections.abc import Sequence

from githelper.errors import ExternalToolError
from githelper.logging import get_logger

log = get_logger("githelper.process")


def split_command_line(command_line: str) -> list[str]:
    """Split a command line on whitespace.

    Quoting is not understood: ``'a "b c"'`` yields three tokens. Prefer
    passing argument lists to :func:`run`.
    """
    return command_line.split()


def run(
    working_dir: str | os.PathLike[str],
    argv: Sequence[str],
    *,
    timeout: float | None = None,
) -> str:
    """Run ``argv`` in ``working_dir`` and return its stdout.

    Stderr is discarded and trailing newlines are stripped from the output.
    Bytes are decoded with the filesystem encoding, so paths git prints
    round-trip even when they are not valid UTF-8.
    Blocks until the process exits, or until ``timeout`` seconds pass when
    one is given.

    Raises:
        ExternalToolError: the program could not be started, timed out or
            exited non-zero.
    """
    args = list(argv)
    if not args:
        raise ExternalToolError("empty command", argv=args)

    try:
        proc = subprocess.run(  # nosec B603
            args,
            cwd=working_dir,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError as exc:
        log.debug("process_not_found", program=args[0])
        raise ExternalToolError(f"cannot start {args[0]}: {exc}", argv=args) from exc
    except subprocess.TimeoutExpired as exc:
        log.warning("process_timeout", argv=args, timeout=timeout)
        raise ExternalToolError(f"{args[0]}: timed out after {timeout}s", argv=args) from exc
    except OSError as exc:
        raise ExternalToolError(f"{args[0]}: {exc}", argv=args) from exc

    if proc.returncode != 0:
        log.debug("process_failed", argv=args, returncode=proc.returncode)
        raise ExternalToolError(
            f"{args[0]} exited with status {proc.returncode}",
            argv=args,
            returncode=proc.returncode,
        )

    return os.fsdecode(proc.stdout).rstrip("\r\n")
