##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
SQLite driver for SeedDB.

This module defines the `SQLiteDriver` class, which opens SQLite connections through the
standard library `sqlite3` module. SQLite is treated as a file-based driver without
nested transaction support: only the outermost `begin`/`commit`/`rollback` pair reaches
the database and deeper levels are counted by the transaction controller.
"""

import logging
import sqlite3
import sys
from pathlib import Path
from typing import Any, Optional

from seeddb.config.connection_string import parse_file_connection_string
from seeddb.drivers.driver_base import DatabaseDriver


LOG = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"


class SQLiteDriver(DatabaseDriver):
    """
    Driver for SQLite databases, addressed as "sqlite://<path>".

    Connections are opened in autocommit mode so that transactions are controlled
    explicitly with BEGIN/COMMIT/ROLLBACK statements, foreign keys are enforced,
    and rows are fetched as `sqlite3.Row` objects.
    """

    name = "sqlite"
    file_based = True
    supports_savepoints = False
    toggles_autocommit = False
    paramstyle = "qmark"
    error_types = (sqlite3.Error,)

    def connect(self, dsn: str, user: str = "", password: str = "") -> sqlite3.Connection:
        """
        Open a SQLite connection to the path addressed by `dsn`.

        The parent directory of a file database is created if needed. SQLite has
        no credentials, so `user` and `password` are ignored.

        Args:
            dsn: A connection string such as "sqlite://data/app.db" or "sqlite://:memory:".
            user: Ignored.
            password: Ignored.

        Returns:
            A configured `sqlite3.Connection`.
        """
        db_path = parse_file_connection_string(dsn)
        if db_path != MEMORY_DATABASE and not db_path.startswith("file:"):
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        connection_kwargs = {"check_same_thread": False}
        if sys.version_info < (3, 12):  # Autocommit wasn't added until python 3.12
            connection_kwargs["isolation_level"] = None
        else:
            connection_kwargs["autocommit"] = True

        if db_path.startswith("file:"):
            connection_kwargs["uri"] = True

        LOG.debug(f"Opening SQLite database at '{db_path}'.")
        conn = sqlite3.connect(db_path, **connection_kwargs)
        conn.execute("PRAGMA foreign_keys=ON")
        conn.row_factory = sqlite3.Row

        return conn

    def commit(self, conn: Any):
        """Commit with an explicit statement since the connection runs in autocommit mode."""
        self.run(conn, "COMMIT")

    def rollback(self, conn: Any):
        """Roll back with an explicit statement since the connection runs in autocommit mode."""
        self.run(conn, "ROLLBACK")

    def error_code(self, exc: Exception) -> Optional[Any]:
        """
        Return the SQLite result code of `exc` (e.g. 1 for SQLITE_ERROR), if known.

        Args:
            exc: An exception raised by `sqlite3`.

        Returns:
            The numeric result code, or None.
        """
        return getattr(exc, "sqlite_errorcode", None)
