##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
Defines the abstract base class for SeedDB CLI commands.

Every command implementation inherits from `CommandEntryPoint`, which standardizes
how a command adds its argument parser and processes its arguments.
"""

from abc import ABC, abstractmethod
from argparse import ArgumentParser, Namespace


class CommandEntryPoint(ABC):
    """
    Abstract base class for a SeedDB CLI command entry point.

    Methods:
        add_parser: Adds the parser for a specific command to the main `ArgumentParser`.
        process_command: Executes the logic for this CLI command.
    """

    @abstractmethod
    def add_parser(self, subparsers: ArgumentParser):
        """Add the parser for this command to the main `ArgumentParser`."""
        raise NotImplementedError("Subclasses of `CommandEntryPoint` must implement an `add_parser` method.")

    @abstractmethod
    def process_command(self, args: Namespace):
        """Execute the logic for this CLI command."""
        raise NotImplementedError("Subclasses of `CommandEntryPoint` must implement a `process_command` method.")
