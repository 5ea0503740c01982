##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
CLI module for reading rows from a table.

This module defines the `FetchCommand` class, which implements the `fetch`
subcommand on top of `Database.fetch`, and prints the rows with `tabulate`.
"""

import logging
from argparse import ArgumentParser, Namespace

from tabulate import tabulate

from seeddb.cli.commands.command_entry_point import CommandEntryPoint
from seeddb.cli.utils import add_connection_arguments, get_database, parse_key_value_pairs
from seeddb.db.query_builder import DEFAULT_LIMIT


LOG = logging.getLogger("seeddb")


class FetchCommand(CommandEntryPoint):
    """
    Handles the `fetch` CLI command for reading rows from a table.

    Methods:
        add_parser: Adds the `fetch` command to the CLI parser.
        process_command: Processes the CLI input and prints the rows.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `fetch` command parser to the CLI argument parser.

        Parameters:
            subparsers (ArgumentParser): The subparsers object to which the `fetch` command parser will be added.
        """
        fetch: ArgumentParser = subparsers.add_parser(
            "fetch",
            help="Read rows from a table.",
        )
        fetch.set_defaults(func=self.process_command)
        fetch.add_argument("table", type=str, help="The table to read, optionally with an alias ('users u')")
        fetch.add_argument("--cols", nargs="+", type=str, default=None, help="Columns to read [Default: all]")
        fetch.add_argument(
            "--where",
            nargs=2,
            action="append",
            metavar=("KEY", "VALUE"),
            default=None,
            help="A bound condition, e.g. --where 'age >=' 18. A key without operator means '='. Repeatable.",
        )
        fetch.add_argument(
            "--raw-where",
            action="append",
            metavar="EXPR",
            default=None,
            help="A condition inserted verbatim, e.g. --raw-where 'deleted_at IS NULL'. Repeatable.",
        )
        fetch.add_argument(
            "--limit",
            type=int,
            default=DEFAULT_LIMIT,
            help="Maximum number of rows, 0 for no limit [Default: %(default)s]",
        )
        fetch.add_argument("--offset", type=int, default=0, help="Number of rows to skip [Default: %(default)s]")
        fetch.add_argument(
            "--order",
            nargs="+",
            type=str,
            default=None,
            metavar="COLUMN=DIRECTION",
            help="Sort order, e.g. --order name=ASC id=DESC [Default: id=ASC]",
        )
        add_connection_arguments(fetch)

    def process_command(self, args: Namespace):
        """
        CLI command to fetch and print rows from a table.

        Parameters:
            args (Namespace): Parsed CLI arguments.
        """
        where = {key: value for key, value in args.where or []}
        for expression in args.raw_where or []:
            where[expression] = None

        order = parse_key_value_pairs(args.order, "--order") if args.order else None
        LOG.debug(f"Fetching from '{args.table}' with {len(where)} condition(s).")

        with get_database(args) as database:
            rows = database.fetch(
                args.table,
                cols=args.cols,
                where=where,
                limit=args.limit,
                offset=args.offset,
                order=order,
            )

        if rows:
            print(tabulate(rows, headers="keys"))
        print(f"{len(rows)} row(s) returned.")
