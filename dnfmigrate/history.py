"""Copy transaction, repository and item tables into the new history schema."""

from __future__ import annotations

import sqlite3
from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import Any

from .errors import EnumError, FuncError, transaction
from .states import (
    cast_trans_item_action,
    cast_trans_item_reason,
    cast_trans_item_state,
    cast_trans_state,
)

Row = Sequence[Any]


def _fetch(rows: Iterable[Row]) -> Iterator[Row]:
    iterator = iter(rows)
    while True:
        try:
            row = next(iterator)
        except StopIteration:
            return
        except sqlite3.Error as exc:
            raise FuncError("rows.fetch", exc) from exc
        yield row


def _scan(row: Row, columns: Sequence[str], nullable: Iterable[str] = ()) -> Row:
    """Reject NULL in any column that the old schema declares NOT NULL."""
    allowed = set(nullable)
    for column, value in zip(columns, row):
        if value is None and column not in allowed:
            raise FuncError("rows.scan", ValueError(f"column {column} is NULL"))
    return row


def _cast(func: Callable[[int], int], name: str, value: int) -> int:
    try:
        return int(func(value))
    except EnumError as exc:
        raise FuncError(name, exc) from exc


def _copy(
    db4: sqlite3.Connection,
    db5: sqlite3.Connection,
    select: str,
    insert: str,
    convert: Callable[[Row], Sequence[Any]],
) -> None:
    """Read every row of a table in db4 and insert its converted form into db5."""
    try:
        rows = db4.execute(select)
    except sqlite3.Error as exc:
        raise FuncError("db4.execute", exc) from exc

    with transaction(db5):
        for row in _fetch(rows):
            values = convert(row)
            try:
                db5.execute(insert, values)
            except sqlite3.Error as exc:
                raise FuncError("db5.execute", exc) from exc


_TRANS_COLUMNS = (
    "id", "dt_begin", "dt_end", "rpmdb_version_begin", "rpmdb_version_end",
    "releasever", "user_id", "cmdline", "state", "comment",
)


def _convert_trans(row: Row) -> tuple:
    (
        trans_id, dt_begin, dt_end, rpmdb_begin, rpmdb_end,
        releasever, user_id, cmdline, state, comment,
    ) = _scan(
        row,
        _TRANS_COLUMNS,
        nullable=("dt_end", "rpmdb_version_begin", "rpmdb_version_end", "cmdline", "comment"),
    )
    state_id = _cast(cast_trans_state, "cast_trans_state", state)
    # The command line is now stored as the transaction's description.
    return (
        trans_id, dt_begin, dt_end, rpmdb_begin, rpmdb_end,
        releasever, user_id, cmdline, comment, state_id,
    )


def migrate_trans(db4: sqlite3.Connection, db5: sqlite3.Connection) -> None:
    """Copy the trans table, renaming cmdline to description and mapping states."""
    _copy(
        db4,
        db5,
        """SELECT id, dt_begin, dt_end,
                  rpmdb_version_begin, rpmdb_version_end,
                  releasever, user_id, cmdline, state, comment
           FROM trans ORDER BY id ASC""",
        """INSERT INTO trans (
                  id, dt_begin, dt_end,
                  rpmdb_version_begin, rpmdb_version_end,
                  releasever, user_id, description, comment, state_id
           ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
        _convert_trans,
    )


def migrate_repo(db4: sqlite3.Connection, db5: sqlite3.Connection) -> None:
    """Copy the repo table unchanged."""
    _copy(
        db4,
        db5,
        "SELECT id, repoid FROM repo ORDER BY id ASC",
        "INSERT INTO repo (id, repoid) VALUES (?, ?)",
        lambda row: tuple(_scan(row, ("id", "repoid"))),
    )


def migrate_item(db4: sqlite3.Connection, db5: sqlite3.Connection) -> None:
    """Copy the item table; the item type column no longer exists."""
    _copy(
        db4,
        db5,
        "SELECT id, item_type FROM item ORDER BY id ASC",
        "INSERT INTO item (id) VALUES (?)",
        lambda row: (_scan(row, ("id", "item_type"))[0],),
    )


_TRANS_ITEM_COLUMNS = ("id", "trans_id", "item_id", "repo_id", "action", "reason", "state")


def _convert_trans_item(row: Row) -> tuple:
    item_id_, trans_id, item_id, repo_id, action, reason, state = _scan(
        row, _TRANS_ITEM_COLUMNS, nullable=("trans_id", "item_id", "repo_id")
    )
    return (
        item_id_, trans_id, item_id, repo_id,
        _cast(cast_trans_item_action, "cast_trans_item_action", action),
        _cast(cast_trans_item_reason, "cast_trans_item_reason", reason),
        _cast(cast_trans_item_state, "cast_trans_item_state", state),
    )


def migrate_trans_item(db4: sqlite3.Connection, db5: sqlite3.Connection) -> None:
    """Copy the trans_item table, mapping action, reason and state."""
    _copy(
        db4,
        db5,
        """SELECT id, trans_id, item_id, repo_id, action, reason, state
           FROM trans_item ORDER BY id ASC""",
        """INSERT INTO trans_item (
                  id, trans_id, item_id, repo_id, action_id, reason_id, state_id
           ) VALUES (?, ?, ?, ?, ?, ?, ?)""",
        _convert_trans_item,
    )


def migrate_item_replaced_by(db4: sqlite3.Connection, db5: sqlite3.Connection) -> None:
    """Copy the item_replaced_by relation unchanged."""
    _copy(
        db4,
        db5,
        """SELECT trans_item_id, by_trans_item_id FROM item_replaced_by
           ORDER BY trans_item_id ASC, by_trans_item_id ASC""",
        "INSERT INTO item_replaced_by (trans_item_id, by_trans_item_id) VALUES (?, ?)",
        tuple,
    )