##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
Fixtures for files in this `cli/` test directory.
"""

import os
from argparse import ArgumentParser, Namespace

import pytest

from seeddb import Database
from seeddb.cli.commands.command_entry_point import CommandEntryPoint
from seeddb.cli.utils import CONNECTION_OPTIONS
from tests.fixture_types import FixtureCallable, FixtureStr


@pytest.fixture
def create_parser() -> FixtureCallable:
    """
    A fixture to help create a parser for any command.

    Returns:
        A function that creates a parser.
    """

    def _create_parser(cmd: CommandEntryPoint) -> ArgumentParser:
        """
        Returns an `ArgumentParser` configured with the `cmd` command.

        Returns:
            Parser with the `cmd` command registered.
        """
        parser = ArgumentParser()
        subparsers = parser.add_subparsers(dest="main_command")
        cmd.add_parser(subparsers)
        return parser

    return _create_parser


@pytest.fixture
def cli_sqlite_file(tmp_path) -> FixtureStr:
    """
    A SQLite database file holding a `users` table with two rows.

    Args:
        tmp_path: PyTest tmp_path fixture.

    Returns:
        The path to the database file.
    """
    db_file = os.path.join(tmp_path, "cli.db")
    with Database({"driver": "sqlite", "base": db_file}) as database:
        database.exec("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT, age INTEGER)")
        database.insert("users", {"name": "alice", "age": 34})
        database.insert("users", {"name": "bob", "age": 17})
    return db_file


@pytest.fixture
def cli_namespace(cli_sqlite_file: FixtureStr) -> FixtureCallable:
    """
    Provide a function building CLI arguments pointing at `cli_sqlite_file`.

    Args:
        cli_sqlite_file: The path to the test database file.

    Returns:
        A function taking command-specific keyword arguments and returning a `Namespace`.
    """

    def _cli_namespace(**kwargs) -> Namespace:
        options = {dest: None for dest in CONNECTION_OPTIONS}
        options.update(driver="sqlite", base=cli_sqlite_file)
        options.update(kwargs)
        return Namespace(**options)

    return _cli_namespace
