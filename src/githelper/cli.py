"""Command-line entry point for githelper."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Sequence

from githelper import __version__
from githelper.config import get_settings
from githelper.errors import GitHelperError
from githelper.logging import get_logger, setup_logging
from githelper.repo import git_dir, repo_root
from githelper.updater import SelfUpdater

Handler = Callable[[argparse.Namespace], None]


def _printing(query: Callable[[], str]) -> Handler:
    """Bind a no-argument query to a handler that prints its result."""

    def handler(args: argparse.Namespace) -> None:
        print(query())

    return handler


def _self_update(args: argparse.Namespace) -> None:
    settings = get_settings()
    url = args.url or settings.update_url
    if not url:
        raise SystemExit("self-update: no URL given and GITHELPER_UPDATE_URL is not set")
    dest = SelfUpdater.from_settings(settings).update(url)
    print(f"installed {dest}")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(prog="githelper", description=__doc__)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    root = subparsers.add_parser("root", help="Print the working tree top-level directory")
    root.set_defaults(handler=_printing(repo_root))

    meta = subparsers.add_parser("git-dir", help="Print the repository metadata directory")
    meta.set_defaults(handler=_printing(git_dir))

    update = subparsers.add_parser(
        "self-update",
        help="Download a release tarball and replace this executable with its payload",
    )
    update.add_argument("url", nargs="?", help="Tarball URL (default: GITHELPER_UPDATE_URL)")
    update.set_defaults(handler=_self_update)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Parse ``argv``, run the selected command and return the exit status."""
    args = build_parser().parse_args(argv)
    setup_logging()
    log = get_logger("githelper.cli")

    try:
        args.handler(args)
    except GitHelperError as exc:
        log.error("command_failed", command=args.command, error=str(exc))
        print(f"githelper {args.command}: {exc}", file=sys.stderr)
        return 1
    return 0
