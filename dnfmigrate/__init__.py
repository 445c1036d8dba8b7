"""Migrate DNF 4 history databases to the DNF 5 schema: checks, table copies and a command."""

__version__ = "0.1.0"