# dnfmigrate

Copies the transaction history from a DNF 4 history database (`history.sqlite`, schema version 1.2) into a DNF 5 history database (schema version 1.1). After the copy, `dnf5 history` shows transactions that were made with DNF 4.

It needs only the Python standard library.

## Installation

```
pip install .
```

## Usage

```
dnfmigrate SOURCE_DNF4_DB TARGET_DNF5_DB
```

The tool prints both paths and then does the following:

1. It reads the `version` entry in the `config` table of the source database. It stops if the entry is missing or is not `1.2`. Then it does the same for the target database, which must be `1.1`.
2. It copies these tables in order. Each table is copied in its own SQLite transaction on the target, and the tool prints `Run <step>` before each one:
   - `migrate_trans`
   - `migrate_repo`
   - `migrate_item`
   - `migrate_trans_item`
   - `migrate_item_replaced_by`
   - `migrate_rpm`
   - `migrate_comps_group`
   - `migrate_comps_group_package`
   - `migrate_comps_environment`
   - `migrate_comps_environment_group`
3. Along the way it changes some data to fit the DNF 5 schema:
   - Transaction states and item actions, reasons and states become their DNF 5 codes. The item action `OBSOLETE` has no DNF 5 code, so a row that uses it is an error.
   - The `cmdline` column of a transaction becomes `description`.
   - The item type is dropped.
   - Package names and architectures move into the `pkg_name` and `arch` lookup tables.
4. At the end it checks that the `sqlite_sequence` counters for `comps_environment_group`, `comps_group_package`, `trans` and `trans_item` are the same in both databases.

The copy stops at the first error. A table whose step failed is rolled back. Tables that were copied before it stay copied. Keep a backup of both files before you run the tool.

### Exit status

| Code | Meaning |
|------|---------|
| 0 | success |
| 1 | a database could not be opened |
| 2 | a database has the wrong version or no version |
| 3 | the migration failed |
| 4 | the `sqlite_sequence` counters do not match |

SQLite creates a database file that does not exist. If you give a path that does not exist, you get an empty database, and the version check then fails with status 2.

## What it does not do

- It does not create the DNF 5 schema. The target must already be an empty DNF 5 history database, for example one made by running DNF 5 once.
- It does not copy the `console_output` and `trans_with` tables, because the DNF 5 schema has no such tables.

## Library use

```python
import sqlite3
import sys

from dnfmigrate.check import check_config4, check_config5, check_sqlite_sequence
from dnfmigrate.pipeline import migrate

db4 = sqlite3.connect("history4.sqlite")
db5 = sqlite3.connect("history5.sqlite")
check_config4(db4)               # returns "1.2"
check_config5(db5)               # returns "1.1"
migrate(db4, db5, sys.stdout)    # out defaults to sys.stdout
counters = check_sqlite_sequence(db4, db5)  # {table name: counter}
```

- `dnfmigrate.check`:
  - `read_version` returns the stored version.
  - `read_sqlite_sequence` returns one table's counter.
  - `check_config4`, `check_config5` and `check_sqlite_sequence` raise `CheckError` with a readable message when a check fails.
- `dnfmigrate.pipeline`:
  - `STEPS` is the ordered tuple of `Step(name, run)` entries that `migrate` runs.
- The single-table functions live in two modules:
  - `dnfmigrate.history`: `migrate_trans`, `migrate_repo`, `migrate_item`, `migrate_trans_item` and `migrate_item_replaced_by`.
  - `dnfmigrate.packages`: `migrate_rpm`, `migrate_comps_group`, `migrate_comps_group_package`, `migrate_comps_environment` and `migrate_comps_environment_group`, together with the lookup helpers `insert_pkg_name` and `insert_arch`.
- `dnfmigrate.states`:
  - It has the enumerations of both schemas.
  - Its `cast_trans_state`, `cast_trans_item_action`, `cast_trans_item_reason` and `cast_trans_item_state` functions raise `EnumError` for a value with no DNF 5 counterpart.
- `dnfmigrate.errors`:
  - A failing migration step raises `FuncError`. It names the operation that failed and keeps the underlying error, which may be an `EnumError`, as its cause.
  - `transaction(conn)` is the context manager that commits on success and rolls back on error.