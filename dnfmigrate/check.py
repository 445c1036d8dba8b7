"""Sanity checks on the history databases before and after migration."""

from __future__ import annotations

import sqlite3

DNF4_VERSION = "1.2"
DNF5_VERSION = "1.1"

SEQUENCE_TABLES = (
    "comps_environment_group",
    "comps_group_package",
    "trans",
    "trans_item",
)


class CheckError(Exception):
    """A database failed a sanity check."""


def read_version(db: sqlite3.Connection) -> str:
    """Return the schema version recorded in the config table."""
    row = db.execute("SELECT value FROM config WHERE key = 'version'").fetchone()
    if row is None:
        raise LookupError("no version entry in config")
    value = row[0]
    if value is None:
        raise ValueError("version is NULL")
    if isinstance(value, bytes):
        return value.decode()
    return str(value)


def _check_config(db: sqlite3.Connection, label: str, expected: str) -> str:
    try:
        actual = read_version(db)
    except (sqlite3.Error, LookupError, ValueError) as exc:
        raise CheckError(f"Read {label} database version error: {exc}") from exc
    if actual != expected:
        raise CheckError(
            f"Bad {label} database version {actual} (should be {expected})"
        )
    return actual


def check_config4(db: sqlite3.Connection) -> str:
    """Ensure the source database has the expected schema version and return it."""
    return _check_config(db, "DNF 4", DNF4_VERSION)


def check_config5(db: sqlite3.Connection) -> str:
    """Ensure the target database has the expected schema version and return it."""
    return _check_config(db, "DNF 5", DNF5_VERSION)


def read_sqlite_sequence(db: sqlite3.Connection, name: str) -> int:
    """Return the autoincrement counter SQLite keeps for a table."""
    row = db.execute("SELECT seq FROM sqlite_sequence WHERE name = ?", (name,)).fetchone()
    if row is None:
        raise LookupError(f"no sqlite_sequence entry for {name}")
    if row[0] is None:
        raise ValueError(f"sqlite_sequence entry for {name} is NULL")
    return int(row[0])


def check_sqlite_sequence(
    db4: sqlite3.Connection, db5: sqlite3.Connection
) -> dict[str, int]:
    """Ensure both databases agree on the autoincrement counters; return them."""
    sequences: dict[str, int] = {}
    for name in SEQUENCE_TABLES:
        try:
            seq4 = read_sqlite_sequence(db4, name)
        except (sqlite3.Error, LookupError, ValueError) as exc:
            raise CheckError(f"Read DNF 4 sqlite_sequence {name} error: {exc}") from exc
        try:
            seq5 = read_sqlite_sequence(db5, name)
        except (sqlite3.Error, LookupError, ValueError) as exc:
            raise CheckError(f"Read DNF 5 sqlite_sequence {name} error: {exc}") from exc
        if seq4 != seq5:
            raise CheckError(
                f"sqlite_sequence {name} error: {seq4} (DNF 4) \u2260 {seq5} (DNF 5)"
            )
        sequences[name] = seq4
    return sequences