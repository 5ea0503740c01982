##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
Core of the SeedDB data-access helper.

Modules:
    escaping: Quotes and normalizes table and column names.
    where: Turns a condition mapping into a parameterized WHERE fragment.
    connection: Owns the connection handle and the reference-counted connect/disconnect.
    executor: Runs raw statements and dispatches read vs. write results.
    transaction: Emulates nested transactions, with savepoints where the driver has them.
    query_builder: Builds INSERT/UPDATE/DELETE/SELECT statements.
    database: The `Database` class tying all of the above together.
"""
