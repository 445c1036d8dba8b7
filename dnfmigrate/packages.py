"""Copy package and comps tables into the new history schema."""

from __future__ import annotations

import sqlite3
from collections.abc import Callable
from typing import Any

from .errors import FuncError
from .history import Row, _copy, _scan


def _lookup_id(conn: sqlite3.Connection, table: str, name: str) -> int:
    """Insert a name into a lookup table if missing and return its id."""
    try:
        conn.execute(
            f"INSERT INTO {table} (name) VALUES (?) ON CONFLICT DO NOTHING", (name,)
        )
    except sqlite3.Error as exc:
        raise FuncError("db5.execute", exc) from exc

    try:
        found = conn.execute(f"SELECT id FROM {table} WHERE name = ?", (name,)).fetchone()
    except sqlite3.Error as exc:
        raise FuncError("db5.query_row", exc) from exc
    if found is None:
        raise FuncError("db5.query_row", LookupError(f"no {table} row named {name!r}"))
    return found[0]


def insert_pkg_name(conn: sqlite3.Connection, name: str) -> int:
    """Return the id of a package name, adding it to pkg_name when new."""
    return _lookup_id(conn, "pkg_name", name)


def insert_arch(conn: sqlite3.Connection, arch: str) -> int:
    """Return the id of an architecture, adding it to arch when new."""
    return _lookup_id(conn, "arch", arch)


def _resolve(
    func: Callable[[sqlite3.Connection, str], int],
    label: str,
    conn: sqlite3.Connection,
    value: str,
) -> int:
    try:
        return func(conn, value)
    except FuncError as exc:
        raise FuncError(label, exc) from exc


def _plain(columns: tuple[str, ...]) -> Callable[[Row], tuple[Any, ...]]:
    return lambda row: tuple(_scan(row, columns))


_RPM_COLUMNS = ("item_id", "name", "epoch", "version", "release", "arch")


def migrate_rpm(db4: sqlite3.Connection, db5: sqlite3.Connection) -> None:
    """Copy the rpm table, moving names and architectures into lookup tables."""

    def convert(row: Row) -> tuple[Any, ...]:
        item_id, name, epoch, version, release, arch = _scan(row, _RPM_COLUMNS)
        name_id = _resolve(insert_pkg_name, "insert_pkg_name", db5, name)
        arch_id = _resolve(insert_arch, "insert_arch", db5, arch)
        return (item_id, name_id, epoch, version, release, arch_id)

    _copy(
        db4,
        db5,
        """SELECT item_id, name, epoch, version, release, arch
           FROM rpm ORDER BY item_id ASC""",
        """INSERT INTO rpm (item_id, name_id, epoch, version, release, arch_id)
           VALUES (?, ?, ?, ?, ?, ?)""",
        convert,
    )


_COMPS_GROUP_COLUMNS = ("item_id", "groupid", "name", "translated_name", "pkg_types")


def migrate_comps_group(db4: sqlite3.Connection, db5: sqlite3.Connection) -> None:
    """Copy the comps_group table unchanged."""
    _copy(
        db4,
        db5,
        """SELECT item_id, groupid, name, translated_name, pkg_types
           FROM comps_group ORDER BY item_id ASC""",
        """INSERT INTO comps_group (item_id, groupid, name, translated_name, pkg_types)
           VALUES (?, ?, ?, ?, ?)""",
        _plain(_COMPS_GROUP_COLUMNS),
    )


_COMPS_GROUP_PACKAGE_COLUMNS = ("id", "group_id", "name", "installed", "pkg_type")


def migrate_comps_group_package(db4: sqlite3.Connection, db5: sqlite3.Connection) -> None:
    """Copy the comps_group_package table, referring to names through pkg_name."""

    def convert(row: Row) -> tuple[Any, ...]:
        row_id, group_id, name, installed, pkg_type = _scan(row, _COMPS_GROUP_PACKAGE_COLUMNS)
        name_id = _resolve(insert_pkg_name, "insert_pkg_name", db5, name)
        return (row_id, group_id, name_id, installed, pkg_type)

    _copy(
        db4,
        db5,
        """SELECT id, group_id, name, installed, pkg_type
           FROM comps_group_package ORDER BY id ASC""",
        """INSERT INTO comps_group_package (id, group_id, name_id, installed, pkg_type)
           VALUES (?, ?, ?, ?, ?)""",
        convert,
    )


_COMPS_ENVIRONMENT_COLUMNS = (
    "item_id", "environmentid", "name", "translated_name", "pkg_types",
)


def migrate_comps_environment(db4: sqlite3.Connection, db5: sqlite3.Connection) -> None:
    """Copy the comps_environment table unchanged."""
    _copy(
        db4,
        db5,
        """SELECT item_id, environmentid, name, translated_name, pkg_types
           FROM comps_environment ORDER BY item_id ASC""",
        """INSERT INTO comps_environment (
                  item_id, environmentid, name, translated_name, pkg_types
           ) VALUES (?, ?, ?, ?, ?)""",
        _plain(_COMPS_ENVIRONMENT_COLUMNS),
    )


_COMPS_ENVIRONMENT_GROUP_COLUMNS = (
    "id", "environment_id", "groupid", "installed", "group_type",
)


def migrate_comps_environment_group(
    db4: sqlite3.Connection, db5: sqlite3.Connection
) -> None:
    """Copy the comps_environment_group table unchanged."""
    _copy(
        db4,
        db5,
        """SELECT id, environment_id, groupid, installed, group_type
           FROM comps_environment_group ORDER BY id ASC""",
        """INSERT INTO comps_environment_group (
                  id, environment_id, groupid, installed, group_type
           ) VALUES (?, ?, ?, ?, ?)""",
        _plain(_COMPS_ENVIRONMENT_GROUP_COLUMNS),
    )