##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
CLI module for running a raw statement against the configured database.

This module defines the `ExecCommand` class, which implements the `exec`
subcommand. Read statements print their rows as a table; other statements
print a confirmation along with the last insert id reported by the driver.
"""

import logging
from argparse import ArgumentParser, Namespace

from tabulate import tabulate

from seeddb.cli.commands.command_entry_point import CommandEntryPoint
from seeddb.cli.utils import add_connection_arguments, get_database


LOG = logging.getLogger("seeddb")


class ExecCommand(CommandEntryPoint):
    """
    Handles the `exec` CLI command for running a single SQL statement.

    Methods:
        add_parser: Adds the `exec` command to the CLI parser.
        process_command: Processes the CLI input and runs the statement.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `exec` command parser to the CLI argument parser.

        Parameters:
            subparsers (ArgumentParser): The subparsers object to which the `exec` command parser will be added.
        """
        exec_cmd: ArgumentParser = subparsers.add_parser(
            "exec",
            help="Run one SQL statement. Use '?' placeholders together with --values.",
        )
        exec_cmd.set_defaults(func=self.process_command)
        exec_cmd.add_argument("sql", type=str, help="The statement to run")
        exec_cmd.add_argument(
            "--values",
            nargs="+",
            type=str,
            default=None,
            help="Values bound to the '?' placeholders, in order",
        )
        exec_cmd.add_argument(
            "--transaction",
            action="store_true",
            default=False,
            help="Run the statement inside a transaction that is rolled back if it fails",
        )
        add_connection_arguments(exec_cmd)

    def process_command(self, args: Namespace):
        """
        CLI command to run a statement and print its outcome.

        Parameters:
            args (Namespace): Parsed CLI arguments.
        """
        LOG.debug(f"Running statement with {len(args.values or [])} bound value(s).")
        with get_database(args) as database:
            if args.transaction:
                with database.atomic():
                    result = database.exec(args.sql, args.values)
            else:
                result = database.exec(args.sql, args.values)

            if isinstance(result, list):
                if result:
                    print(tabulate(result, headers="keys"))
                print(f"{database.result_count()} row(s) returned.")
            else:
                inserted_id = database.inserted_id()
                message = "Statement executed successfully."
                if inserted_id:
                    message += f" Last insert id: {inserted_id}"
                print(message)
