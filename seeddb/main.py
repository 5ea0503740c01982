##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
Main entry point into SeedDB's command-line interface.
"""

import logging
import sys
import traceback

from seeddb.cli.argparse_main import build_main_parser
from seeddb.log_formatter import setup_logging


LOG = logging.getLogger("seeddb")


def main():
    """
    Entry point for the SeedDB command-line interface (CLI).

    This function sets up the argument parser, initializes logging and runs the
    selected command. Any error raised by the command is logged and turned into
    a non-zero exit code.
    """
    parser = build_main_parser()
    if len(sys.argv) == 1:
        parser.print_help(sys.stdout)
        return 1
    args = parser.parse_args()

    setup_logging(logger=LOG, log_level=args.level.upper(), colors=True)

    try:
        args.func(args)
    # Top of the program stack, every failure becomes an exit code
    except Exception as excpt:  # pylint: disable=broad-except
        LOG.debug(traceback.format_exc())
        LOG.error(str(excpt))
        sys.exit(1)

    sys.exit()


if __name__ == "__main__":
    main()
