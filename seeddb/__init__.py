##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
SeedDB: a small data-access helper for DB-API 2.0 drivers.

This module exposes the package version and the `Database` helper, which bundles
connection management, statement execution, emulated nested transactions and a
minimal SQL query builder behind one fluent object.
"""

__version__ = "1.0.0"
VERSION = __version__


from seeddb.db.database import Database  # noqa: E402  pylint: disable=wrong-import-position


__all__ = ["Database", "VERSION", "__version__"]
