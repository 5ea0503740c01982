##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
Tests for the `escaping.py` module.
"""

import pytest

from seeddb.db.escaping import escape_column_name, escape_table_name, quote_identifier


@pytest.mark.parametrize(
    "table, expected",
    [
        ("users", "`users`"),
        ("Orders", "`orders`"),
        ("  users  ", "`users`"),
        ("users u", "`users` AS `u`"),
        ("users AS u", "`users` AS `u`"),
        ("Users as U", "`users` AS `u`"),
    ],
)
def test_escape_table_name(table: str, expected: str):
    """
    Test that table names are lowercased, trimmed and quoted, with aliases quoted separately.

    Args:
        table: The table name to escape.
        expected: The escaped table expression.
    """
    assert escape_table_name(table) == expected


@pytest.mark.parametrize(
    "column, expected",
    [
        ("*", "*"),
        ("name", "`name`"),
        ("Name", "`name`"),
        ("u.name", "`u`.`name`"),
        ("u.*", "`u`.*"),
        ("name as n", "`name` AS `n`"),
        ("u.name AS n", "`u`.`name` AS `n`"),
        ("COUNT(id) AS total", "COUNT(id) AS total"),
        ("MAX(u.age)", "MAX(u.age)"),
    ],
)
def test_escape_column_name(column: str, expected: str):
    """
    Test the column escaping rules, including table prefixes, aliases and function calls.

    Args:
        column: The column expression to escape.
        expected: The escaped column expression.
    """
    assert escape_column_name(column) == expected


def test_quote_identifier_doubles_backticks():
    """
    Test that a backtick inside an identifier can't close the quoting.
    """
    assert quote_identifier("we`ird") == "`we``ird`"
