##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
SeedDB CLI Commands Package.

Each module encapsulates the logic and argument parsing for one `seeddb` command,
built around the `CommandEntryPoint` interface.

Modules:
    command_entry_point: Defines the abstract base class `CommandEntryPoint` for all CLI commands.
    execute: Implements the `exec` command for running a raw statement.
    fetch: Implements the `fetch` command for reading rows from a table.
    info: Implements the `info` command for displaying the connection settings and drivers.
"""

from seeddb.cli.commands.execute import ExecCommand
from seeddb.cli.commands.fetch import FetchCommand
from seeddb.cli.commands.info import InfoCommand


# Keep these in alphabetical order
ALL_COMMANDS = [
    ExecCommand(),
    FetchCommand(),
    InfoCommand(),
]
