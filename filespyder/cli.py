"""Command line interface.

Usage:
    filespyder <path> <pattern>
    filespyder <path> <pattern> --recurse --parallel
    filespyder <path> "*.log;*.gz" --recurse --json
    python -m filespyder <path> <pattern> --suppress-errors
"""

from __future__ import annotations

import argparse
import sys
from enum import IntEnum
from typing import IO, Sequence

import orjson

from filespyder import __version__
from filespyder.exceptions import EnumerationError
from filespyder.logging import configure_logging, get_logger
from filespyder.model import EntryRecord, FailureRecord, SearchRequest
from filespyder.search import search
from filespyder.settings import Settings

log = get_logger(__name__)


class ExitCode(IntEnum):
    OK = 0
    FAILURES = 1
    ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    settings = Settings()
    parser = argparse.ArgumentParser(
        prog="filespyder",
        description="Search a directory (tree) for files matching a wildcard pattern.",
    )
    parser.add_argument("path", help="Directory to search for the specified file(s)")
    parser.add_argument(
        "pattern",
        nargs="?",
        default="*",
        help="Name of the file(s) to search for, wildcards `*` and `?`, "
        "several patterns separated by `;` (default: `*`)",
    )
    parser.add_argument(
        "-r", "--recurse", action="store_true", help="Search subdirectories"
    )
    parser.add_argument(
        "-p",
        "--parallel",
        action="store_true",
        help="Search multiple subdirectories at once",
    )
    parser.add_argument(
        "-s",
        "--suppress-errors",
        action="store_true",
        default=settings.suppress_errors,
        help="Don't report directories that can't be searched",
    )
    parser.add_argument(
        "--large-fetch",
        action="store_true",
        default=settings.large_fetch,
        help="Use a larger buffer for directory queries (windows)",
    )
    parser.add_argument(
        "--include-dirs",
        action="store_true",
        help="Match directory names too (if not recursing)",
    )
    parser.add_argument(
        "--hidden", action="store_true", help="List hidden entries on stderr"
    )
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Record unexpected enumeration errors instead of aborting",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=settings.max_workers,
        help="Worker threads for --parallel",
    )
    parser.add_argument("--json", action="store_true", help="Output json lines")
    parser.add_argument("--log-level", default=None, help="Log level")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def write_match(entry: EntryRecord, as_json: bool, out: IO[str]) -> None:
    if as_json:
        out.write(orjson.dumps(entry.model_dump(mode="json")).decode() + "\n")
    else:
        out.write(entry.path + "\n")


def write_failure(failure: FailureRecord, as_json: bool, out: IO[str]) -> None:
    if as_json:
        out.write(orjson.dumps(failure.model_dump(mode="json")).decode() + "\n")
    else:
        out.write(f"error: {failure}\n")


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level)

    request = SearchRequest(
        root_path=args.path,
        pattern=args.pattern,
        recurse=args.recurse,
        parallel=args.parallel,
        suppress_errors=args.suppress_errors,
        use_large_fetch_hint=args.large_fetch,
        include_directory_matches=args.include_dirs,
        collect_hidden=args.hidden,
        strict=not args.lenient,
        max_workers=args.workers,
    )
    try:
        outcome = search(request)
    except EnumerationError as e:
        log.error(f"Search aborted: {e}", path=e.path, code=e.code)
        return ExitCode.ERROR

    for entry in outcome.matches:
        write_match(entry, args.json, sys.stdout)
    for failure in outcome.failures:
        write_failure(failure, args.json, sys.stderr)
    for path in outcome.hidden:
        sys.stderr.write(f"hidden: {path}\n")

    if outcome.failures:
        return ExitCode.FAILURES
    return ExitCode.OK


def cli() -> None:
    sys.exit(main())
