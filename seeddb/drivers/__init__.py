##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
Database drivers for SeedDB.

Modules:
    driver_base: Defines the abstract `DatabaseDriver` class and placeholder translation.
    driver_factory: Contains `DriverFactory`, used to select a driver by name.
    mysql_driver: MySQL/MariaDB support through PyMySQL (the default driver).
    sqlite_driver: SQLite support through the standard library `sqlite3` module.
"""
