"""Command line entry point: copy a DNF 4 history database into a DNF 5 one."""

from __future__ import annotations

import argparse
import sqlite3
import sys
from collections.abc import Sequence
from contextlib import ExitStack, closing

from .check import CheckError, check_config4, check_config5, check_sqlite_sequence
from .errors import EnumError, FuncError
from .pipeline import migrate


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dnfmigrate",
        description="Migrate a DNF 4 history database into a DNF 5 history database.",
    )
    parser.add_argument("source", nargs="?", default="", help="DNF 4 history database")
    parser.add_argument("target", nargs="?", default="", help="DNF 5 history database")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the migration and return the process exit status."""
    args = _parser().parse_args(argv)

    print(f"Source DNF 4 database: {args.source}")
    print(f"Target DNF 5 database: {args.target}")

    with ExitStack() as stack:
        try:
            db4 = stack.enter_context(closing(sqlite3.connect(args.source)))
        except sqlite3.Error as exc:
            print(f"Open DNF 4 database error: {exc}", file=sys.stderr)
            return 1

        try:
            check_config4(db4)
        except CheckError as exc:
            print(exc, file=sys.stderr)
            return 2

        try:
            db5 = stack.enter_context(closing(sqlite3.connect(args.target)))
        except sqlite3.Error as exc:
            print(f"Open DNF 5 database error: {exc}", file=sys.stderr)
            return 1

        try:
            check_config5(db5)
        except CheckError as exc:
            print(exc, file=sys.stderr)
            return 2

        try:
            migrate(db4, db5)
        except (FuncError, EnumError, sqlite3.Error) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 3

        try:
            check_sqlite_sequence(db4, db5)
        except CheckError as exc:
            print(exc, file=sys.stderr)
            return 4
    return 0


if __name__ == "__main__":
    sys.exit(main())