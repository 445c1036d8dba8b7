"""The ordered list of migration steps and the function that runs them."""

from __future__ import annotations

import sqlite3
import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import TextIO

from .history import (
    migrate_item,
    migrate_item_replaced_by,
    migrate_repo,
    migrate_trans,
    migrate_trans_item,
)
from .packages import (
    migrate_comps_environment,
    migrate_comps_environment_group,
    migrate_comps_group,
    migrate_comps_group_package,
    migrate_rpm,
)

Migration = Callable[[sqlite3.Connection, sqlite3.Connection], None]


@dataclass(frozen=True)
class Step:
    """One named table migration."""

    name: str
    run: Migration


# The console_output and trans_with tables no longer exist, so they are not copied.
STEPS: tuple[Step, ...] = (
    Step("migrate_trans", migrate_trans),
    Step("migrate_repo", migrate_repo),
    Step("migrate_item", migrate_item),
    Step("migrate_trans_item", migrate_trans_item),
    Step("migrate_item_replaced_by", migrate_item_replaced_by),
    Step("migrate_rpm", migrate_rpm),
    Step("migrate_comps_group", migrate_comps_group),
    Step("migrate_comps_group_package", migrate_comps_group_package),
    Step("migrate_comps_environment", migrate_comps_environment),
    Step("migrate_comps_environment_group", migrate_comps_environment_group),
)


def migrate(
    db4: sqlite3.Connection,
    db5: sqlite3.Connection,
    out: TextIO | None = None,
) -> None:
    """Run every step in order, announcing each one; stop at the first error."""
    stream = sys.stdout if out is None else out
    for step in STEPS:
        print(f"Run {step.name}", file=stream)
        step.run(db4, db5)