##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
The `cli` package contains the `seeddb` command-line interface.

Modules:
    argparse_main: Builds the main argument parser.
    utils: Shared helpers for connection options and `KEY=VALUE` parsing.
    commands: One module per CLI command.
"""
