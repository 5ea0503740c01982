##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
CLI module for displaying the effective connection settings.

This module defines the `InfoCommand` class, which implements the `info`
subcommand. It shows the resolved configuration (password masked), the
connection string it derives to, the available drivers, and optionally
checks that a connection can be opened.
"""

import logging
from argparse import ArgumentParser, Namespace

from tabulate import tabulate

from seeddb import VERSION
from seeddb.cli.commands.command_entry_point import CommandEntryPoint
from seeddb.cli.utils import add_connection_arguments, get_database
from seeddb.drivers.driver_factory import driver_factory


LOG = logging.getLogger("seeddb")


class InfoCommand(CommandEntryPoint):
    """
    Handles the `info` CLI command for displaying configuration and driver info.

    Methods:
        add_parser: Adds the `info` command to the CLI parser.
        process_command: Processes the CLI input and prints the information.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `info` command parser to the CLI argument parser.

        Parameters:
            subparsers (ArgumentParser): The subparsers object to which the `info` command parser will be added.
        """
        info: ArgumentParser = subparsers.add_parser(
            "info",
            help="Display the connection settings, the connection string and the available drivers.",
        )
        info.set_defaults(func=self.process_command)
        info.add_argument(
            "--check",
            action="store_true",
            default=False,
            help="Also try to open (and close) a connection",
        )
        add_connection_arguments(info)

    def process_command(self, args: Namespace):
        """
        CLI command to print the connection information.

        Parameters:
            args (Namespace): Parsed CLI arguments.
        """
        database = get_database(args)

        print(f"SeedDB {VERSION}\n")
        print(tabulate(database.config.to_dict().items(), headers=["Setting", "Value"]))
        print(f"\nConnection string: {database.get_connection_string()}")

        drivers = [driver_factory.get_component_info(name) for name in driver_factory.list_available()]
        print()
        rows = [(driver["name"], driver["class"], driver["module"]) for driver in drivers]
        print(tabulate(rows, headers=["Driver", "Class", "Module"]))

        if args.check:
            with database:
                LOG.info("Connection check succeeded.")
