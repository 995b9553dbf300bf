"""CLI entry-point for git-status-tracker."""
from __future__ import annotations

import argparse
import logging
import sys

from git_status_tracker import __version__
from git_status_tracker.core import app_config
from git_status_tracker.core.errors import TrackerError
from git_status_tracker.core.status_service import (
    get_status,
    list_statuses,
    put_status,
)
from git_status_tracker.core.store import StatusStore

_logger = logging.getLogger("git_status_tracker")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-status-tracker",
        description="Store directory statuses for status bars.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="log store activity to stderr",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    put = commands.add_parser(
        "put", help="Put (insert or update) a status into the database."
    )
    put.add_argument("-p", "--path", required=True, help="The path of the folder.")
    put.add_argument("-b", "--branch", default="", help="The git branch, if any.")
    put.add_argument(
        "-g",
        "--git-status",
        default="",
        help='Status counts, e.g. "2 M|1 ??".',
    )

    get = commands.add_parser("get", help="Get a status from the database.")
    get.add_argument("-p", "--path", required=True, help="The path of the folder.")

    commands.add_parser("list", help="List all statuses in the database.")
    return parser


def _run(args: argparse.Namespace) -> None:
    cfg = app_config.load()
    cfg.store_dir.mkdir(parents=True, exist_ok=True)
    with StatusStore.open(
        cfg.store_dir,
        max_attempts=cfg.open_attempts,
        retry_delay=cfg.retry_delay,
    ) as store:
        if args.command == "put":
            put_status(store, args.path, args.branch, args.git_status)
        elif args.command == "get":
            print(get_status(store, args.path))
        else:
            for line in list_statuses(store):
                print(line)


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )
    try:
        _run(args)
    except (TrackerError, OSError) as exc:
        _logger.debug("%s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
