##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
Driver base interface for SeedDB.

A `DatabaseDriver` adapts one DB-API 2.0 module to the few primitives the
`Database` helper needs, and declares the capabilities that change how the
helper behaves:

- `file_based`: the database is addressed by a path instead of host/port, and no
  session charset directive is sent.
- `supports_savepoints`: nested transactions map onto real savepoints. Drivers
  without it get emulated nesting where only the outermost level reaches the server.
- `toggles_autocommit`: autocommit is switched off for the outermost transaction
  and switched back on when it ends.
- `paramstyle`: the DB-API placeholder style. Statements are always written with
  `?` placeholders and translated for "format" drivers.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple, Type

from seeddb.config import ConnectionConfig
from seeddb.config.connection_string import build_connection_string


LOG = logging.getLogger(__name__)

QUOTES = ("'", '"', "`")


def qmark_to_format(query: str) -> str:
    """
    Translate `?` placeholders into `%s` placeholders.

    Every literal percent sign is doubled, inside quotes too, since "format" drivers
    interpolate the whole statement. A `?` inside a quoted literal or a quoted identifier
    is left alone.

    Args:
        query: A statement using `?` placeholders.

    Returns:
        The same statement using `%s` placeholders.
    """
    translated = []
    quote = None
    escaped = False

    for char in query:
        if quote is not None:
            translated.append("%%" if char == "%" else char)
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
            continue

        if char in QUOTES:
            quote = char
            translated.append(char)
        elif char == "?":
            translated.append("%s")
        elif char == "%":
            translated.append("%%")
        else:
            translated.append(char)

    return "".join(translated)


class DatabaseDriver(ABC):
    """
    Abstract base class for a SeedDB driver.

    Attributes:
        name (str): Canonical driver name, also used as the connection string prefix.
        file_based (bool): True when the database is addressed by a file path.
        supports_savepoints (bool): True when nested transactions can use savepoints.
        toggles_autocommit (bool): True when autocommit must be disabled around transactions.
        paramstyle (str): DB-API placeholder style, "qmark" or "format".
        error_types (Tuple[Type[Exception], ...]): Exceptions raised by the driver module.

    Methods:
        build_connection_string: Return the connection string for a config.
        connect: Open a new raw connection.
        close: Close a raw connection.
        apply_charset: Send the session charset directive.
        begin: Start a transaction.
        commit: Commit the current transaction.
        rollback: Roll back the current transaction.
        set_autocommit: Toggle autocommit on drivers that need it.
        savepoint: Create a named savepoint.
        release_savepoint: Release a named savepoint.
        rollback_to_savepoint: Roll back to a named savepoint.
        prepare_query: Translate `?` placeholders to this driver's paramstyle.
        row_to_dict: Normalize a fetched row to a plain dictionary.
        error_code: Extract the driver's error code from an exception.
    """

    name: str = ""
    file_based: bool = False
    supports_savepoints: bool = False
    toggles_autocommit: bool = False
    paramstyle: str = "qmark"
    error_types: Tuple[Type[Exception], ...] = ()

    def build_connection_string(self, config: ConnectionConfig) -> str:
        """
        Return the connection string for `config`.

        Args:
            config: The connection settings.

        Returns:
            The raw connection string set on `config`, or one derived from its fields.
        """
        return build_connection_string(config, self.file_based)

    @abstractmethod
    def connect(self, dsn: str, user: str = "", password: str = "") -> Any:
        """
        Open a new raw DB-API connection. Errors must propagate as driver exceptions.

        Args:
            dsn: The connection string.
            user: The user name.
            password: The password.

        Returns:
            The raw connection.
        """
        raise NotImplementedError("Subclasses of `DatabaseDriver` must implement a `connect` method.")

    def close(self, conn: Any):
        """Close a raw connection."""
        conn.close()

    def apply_charset(self, conn: Any, charset: str):  # pylint: disable=unused-argument
        """Send the session charset directive. File-based drivers have none."""
        return None

    def run(self, conn: Any, statement: str):
        """
        Execute a statement that returns no rows, e.g. a transaction control statement.

        Args:
            conn: The raw connection.
            statement: The statement to execute.
        """
        LOG.debug(f"{self.name}: {statement}")
        cursor = conn.cursor()
        try:
            cursor.execute(statement)
        finally:
            cursor.close()

    def begin(self, conn: Any):
        """Start a transaction."""
        self.run(conn, "BEGIN")

    def commit(self, conn: Any):
        """Commit the current transaction."""
        conn.commit()

    def rollback(self, conn: Any):
        """Roll back the current transaction."""
        conn.rollback()

    def set_autocommit(self, conn: Any, enabled: bool):  # pylint: disable=unused-argument
        """Toggle autocommit. Only drivers with `toggles_autocommit` override this."""
        return None

    def savepoint(self, conn: Any, name: str):
        """Create the savepoint `name`."""
        self.run(conn, f"SAVEPOINT {name}")

    def release_savepoint(self, conn: Any, name: str):
        """Release the savepoint `name`."""
        self.run(conn, f"RELEASE SAVEPOINT {name}")

    def rollback_to_savepoint(self, conn: Any, name: str):
        """Roll back to the savepoint `name`."""
        self.run(conn, f"ROLLBACK TO SAVEPOINT {name}")

    def prepare_query(self, query: str) -> str:
        """
        Translate the `?` placeholders of `query` to this driver's paramstyle.

        Args:
            query: A statement using `?` placeholders.

        Returns:
            The statement to hand to the driver.
        """
        if self.paramstyle == "format":
            return qmark_to_format(query)
        return query

    def row_to_dict(self, row: Any) -> Dict[str, Any]:
        """
        Convert a fetched row to a plain dictionary keyed by column name.

        Args:
            row: A row as returned by the driver's cursor.

        Returns:
            A plain dictionary.
        """
        if isinstance(row, dict):
            return dict(row)
        if hasattr(row, "keys"):
            return {key: row[key] for key in row.keys()}
        return dict(enumerate(row))

    def error_code(self, exc: Exception) -> Optional[Any]:
        """
        Return the error code carried by a driver exception, if any.

        Args:
            exc: An exception raised by the driver.

        Returns:
            The raw code (not necessarily numeric), or None.
        """
        errno = getattr(exc, "errno", None)
        if errno is not None:
            return errno
        if exc.args and isinstance(exc.args[0], int):
            return exc.args[0]
        return None
