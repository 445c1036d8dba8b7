"""Error types and the transaction helper shared by the migration steps."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager


class EnumError(ValueError):
    """An enum column held a value that has no counterpart."""

    def __init__(self, name: str, value: int) -> None:
        super().__init__(name, value)
        self.name = name
        self.value = value

    def __str__(self) -> str:
        return f"unknown {self.name} value: {self.value}"


class FuncError(Exception):
    """A named operation failed; the underlying error is kept as the cause."""

    def __init__(self, name: str, cause: BaseException) -> None:
        super().__init__(name, cause)
        self.name = name
        self.cause = cause
        self.__cause__ = cause

    def __str__(self) -> str:
        return f"call {self.name} error: {self.cause}"


@contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """Run the body in one transaction: commit on success, roll back on error."""
    if not conn.in_transaction:
        conn.execute("BEGIN")
    try:
        yield conn
    except BaseException:
        conn.rollback()
        raise
    conn.commit()