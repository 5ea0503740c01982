##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
The `abstracts` package provides ABC classes that can be used throughout
SeedDB's codebase.

Modules:
    factory: Contains `SeedDBBaseFactory`, used to manage pluggable components in SeedDB.
"""

from seeddb.abstracts.factory import SeedDBBaseFactory


__all__ = ["SeedDBBaseFactory"]
