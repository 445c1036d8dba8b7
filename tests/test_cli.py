import sqlite3

import pytest

from dnfmigrate.cli import main

DNF4_SCHEMA = """
CREATE TABLE config (key TEXT PRIMARY KEY NOT NULL, value TEXT NOT NULL);
CREATE TABLE trans (
    id INTEGER PRIMARY KEY AUTOINCREMENT, dt_begin INTEGER NOT NULL, dt_end INTEGER,
    rpmdb_version_begin TEXT, rpmdb_version_end TEXT, releasever TEXT NOT NULL,
    user_id INTEGER NOT NULL, cmdline TEXT, state INTEGER NOT NULL, comment TEXT DEFAULT '');
CREATE TABLE repo (id INTEGER PRIMARY KEY, repoid TEXT NOT NULL);
CREATE TABLE item (id INTEGER PRIMARY KEY, item_type INTEGER NOT NULL);
CREATE TABLE trans_item (
    id INTEGER PRIMARY KEY AUTOINCREMENT, trans_id INTEGER, item_id INTEGER,
    repo_id INTEGER, action INTEGER NOT NULL, reason INTEGER NOT NULL,
    state INTEGER NOT NULL);
CREATE TABLE item_replaced_by (
    trans_item_id INTEGER, by_trans_item_id INTEGER,
    PRIMARY KEY (trans_item_id, by_trans_item_id));
CREATE TABLE rpm (
    item_id INTEGER UNIQUE NOT NULL, name TEXT NOT NULL, epoch INTEGER NOT NULL,
    version TEXT NOT NULL, release TEXT NOT NULL, arch TEXT NOT NULL);
CREATE TABLE comps_group (
    item_id INTEGER UNIQUE NOT NULL, groupid TEXT NOT NULL, name TEXT NOT NULL,
    translated_name TEXT NOT NULL, pkg_types INTEGER NOT NULL);
CREATE TABLE comps_group_package (
    id INTEGER PRIMARY KEY AUTOINCREMENT, group_id INTEGER NOT NULL,
    name TEXT NOT NULL, installed INTEGER NOT NULL, pkg_type INTEGER NOT NULL);
CREATE TABLE comps_environment (
    item_id INTEGER UNIQUE NOT NULL, environmentid TEXT NOT NULL, name TEXT NOT NULL,
    translated_name TEXT NOT NULL, pkg_types INTEGER NOT NULL);
CREATE TABLE comps_environment_group (
    id INTEGER PRIMARY KEY AUTOINCREMENT, environment_id INTEGER NOT NULL,
    groupid TEXT NOT NULL, installed INTEGER NOT NULL, group_type INTEGER NOT NULL);
INSERT INTO config VALUES ('version', '1.2');
INSERT INTO trans VALUES (1, 1000, 1010, 'a', 'b', '40', 0, 'install vim', 1, '');
INSERT INTO trans VALUES (2, 2000, NULL, NULL, NULL, '40', 1000, NULL, 0, NULL);
INSERT INTO repo VALUES (1, 'fedora');
INSERT INTO item VALUES (1, 1), (2, 1), (3, 2), (4, 3);
INSERT INTO trans_item VALUES (1, 1, 1, 1, 1, 2, 1), (2, 2, 2, 1, 6, 1, 1), (3, 2, 1, 1, 7, 0, 1);
INSERT INTO item_replaced_by VALUES (3, 2);
INSERT INTO rpm VALUES (1, 'vim', 0, '9.0', '1.fc40', 'x86_64'), (2, 'vim', 2, '9.1', '1.fc40', 'x86_64');
INSERT INTO comps_group VALUES (3, 'editors', 'Editors', 'Editors', 1);
INSERT INTO comps_group_package VALUES (1, 3, 'vim', 1, 1), (2, 3, 'emacs', 0, 1);
INSERT INTO comps_environment VALUES (4, 'workstation', 'Workstation', 'Workstation', 1);
INSERT INTO comps_environment_group VALUES (1, 4, 'editors', 1, 1);
"""

DNF5_SCHEMA = """
CREATE TABLE config (key TEXT PRIMARY KEY NOT NULL, value TEXT NOT NULL);
CREATE TABLE trans (
    id INTEGER PRIMARY KEY AUTOINCREMENT, dt_begin INTEGER NOT NULL, dt_end INTEGER,
    rpmdb_version_begin TEXT, rpmdb_version_end TEXT, releasever TEXT NOT NULL,
    user_id INTEGER NOT NULL, description TEXT, comment TEXT, state_id INTEGER);
CREATE TABLE repo (id INTEGER PRIMARY KEY, repoid TEXT NOT NULL);
CREATE TABLE item (id INTEGER PRIMARY KEY);
CREATE TABLE trans_item (
    id INTEGER PRIMARY KEY AUTOINCREMENT, trans_id INTEGER, item_id INTEGER,
    repo_id INTEGER, action_id INTEGER NOT NULL, reason_id INTEGER NOT NULL,
    state_id INTEGER NOT NULL);
CREATE TABLE item_replaced_by (
    trans_item_id INTEGER, by_trans_item_id INTEGER,
    PRIMARY KEY (trans_item_id, by_trans_item_id));
CREATE TABLE pkg_name (id INTEGER PRIMARY KEY, name TEXT NOT NULL UNIQUE);
CREATE TABLE arch (id INTEGER PRIMARY KEY, name TEXT NOT NULL UNIQUE);
CREATE TABLE rpm (
    item_id INTEGER NOT NULL UNIQUE, name_id INTEGER NOT NULL, epoch INTEGER NOT NULL,
    version TEXT NOT NULL, release TEXT NOT NULL, arch_id INTEGER NOT NULL);
CREATE TABLE comps_group (
    item_id INTEGER NOT NULL UNIQUE, groupid TEXT NOT NULL, name TEXT NOT NULL,
    translated_name TEXT NOT NULL, pkg_types INTEGER NOT NULL);
CREATE TABLE comps_group_package (
    id INTEGER PRIMARY KEY AUTOINCREMENT, group_id INTEGER NOT NULL,
    name_id INTEGER NOT NULL, installed INTEGER NOT NULL, pkg_type INTEGER NOT NULL);
CREATE TABLE comps_environment (
    item_id INTEGER NOT NULL UNIQUE, environmentid TEXT NOT NULL, name TEXT NOT NULL,
    translated_name TEXT NOT NULL, pkg_types INTEGER NOT NULL);
CREATE TABLE comps_environment_group (
    id INTEGER PRIMARY KEY AUTOINCREMENT, environment_id INTEGER NOT NULL,
    groupid TEXT NOT NULL, installed INTEGER NOT NULL, group_type INTEGER NOT NULL);
INSERT INTO config VALUES ('version', '1.1');
"""


def _make(path, script, extra=""):
    with sqlite3.connect(path) as db:
        db.executescript(script + extra)
    db.close()
    return str(path)


@pytest.fixture
def paths(tmp_path):
    p4 = _make(tmp_path / "history4.sqlite", DNF4_SCHEMA)
    p5 = _make(tmp_path / "history5.sqlite", DNF5_SCHEMA)
    return p4, p5


def test_successful_migration(paths, capsys):
    p4, p5 = paths
    assert main([p4, p5]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == f"Source DNF 4 database: {p4}"
    assert out[1] == f"Target DNF 5 database: {p5}"
    assert out[2] == "Run migrate_trans"
    with sqlite3.connect(p5) as db5:
        rows = db5.execute("SELECT id, description FROM trans ORDER BY id").fetchall()
    db5.close()
    assert rows == [(1, "install vim"), (2, None)]


def test_bad_source_version(tmp_path, capsys):
    p4 = _make(tmp_path / "h4.sqlite", DNF4_SCHEMA,
               "UPDATE config SET value = '1.1' WHERE key = 'version';")
    p5 = _make(tmp_path / "h5.sqlite", DNF5_SCHEMA)
    assert main([p4, p5]) == 2
    assert "Bad DNF 4 database version 1.1 (should be 1.2)" in capsys.readouterr().err


def test_bad_target_version(tmp_path, capsys):
    p4 = _make(tmp_path / "h4.sqlite", DNF4_SCHEMA)
    p5 = _make(tmp_path / "h5.sqlite", DNF5_SCHEMA,
               "UPDATE config SET value = '1.2' WHERE key = 'version';")
    assert main([p4, p5]) == 2
    assert "Bad DNF 5 database version 1.2 (should be 1.1)" in capsys.readouterr().err


def test_migration_error(tmp_path, capsys):
    p4 = _make(tmp_path / "h4.sqlite", DNF4_SCHEMA, "UPDATE trans SET state = 9;")
    p5 = _make(tmp_path / "h5.sqlite", DNF5_SCHEMA)
    assert main([p4, p5]) == 3
    err = capsys.readouterr().err
    assert err.startswith("Error: call cast_trans_state error: ")


def test_sequence_mismatch(tmp_path, capsys):
    extra = (
        "INSERT INTO trans VALUES (5, 1, NULL, NULL, NULL, '40', 0, NULL, 1, NULL);"
        "DELETE FROM trans WHERE id = 5;"
    )
    p4 = _make(tmp_path / "h4.sqlite", DNF4_SCHEMA, extra)
    p5 = _make(tmp_path / "h5.sqlite", DNF5_SCHEMA)
    assert main([p4, p5]) == 4
    assert "sqlite_sequence trans error: 5 (DNF 4) \u2260 2 (DNF 5)" in capsys.readouterr().err


def test_unopenable_source(tmp_path, capsys):
    p5 = _make(tmp_path / "h5.sqlite", DNF5_SCHEMA)
    missing = str(tmp_path / "no-such-dir" / "h4.sqlite")
    assert main([missing, p5]) == 1
    assert capsys.readouterr().err.startswith("Open DNF 4 database error: ")