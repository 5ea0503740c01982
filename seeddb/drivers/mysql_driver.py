##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
MySQL driver for SeedDB.

This module defines the `MySQLDriver` class, which opens MySQL/MariaDB connections with
PyMySQL. It is the default driver. Connections are addressed with a
"mysql:host=...;port=...;dbname=...;charset=..." string, rows are fetched as dictionaries,
the session charset is switched through PyMySQL so client and server encodings agree,
and nested transactions use savepoints.
"""

import logging
import re
from typing import Any, Optional

import pymysql
import pymysql.cursors

from seeddb.config.connection_string import parse_network_connection_string
from seeddb.drivers.driver_base import DatabaseDriver
from seeddb.exceptions import UsageError


LOG = logging.getLogger(__name__)

CHARSET_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")

DEFAULT_PORT = 3306


class MySQLDriver(DatabaseDriver):
    """
    Driver for MySQL and MariaDB servers, backed by PyMySQL.

    Autocommit is on by default; the transaction controller switches it off for the
    outermost transaction and back on when that transaction ends.
    """

    name = "mysql"
    file_based = False
    supports_savepoints = True
    toggles_autocommit = True
    paramstyle = "format"
    error_types = (pymysql.MySQLError,)

    def connect(self, dsn: str, user: str = "", password: str = "") -> Any:
        """
        Open a PyMySQL connection described by `dsn`.

        Recognized connection string keys are `host`, `port`, `dbname`, `charset`,
        `unix_socket`, `user` and `password`. Explicit credentials win over the string.

        Args:
            dsn: The connection string.
            user: The user name.
            password: The password.

        Returns:
            A `pymysql.connections.Connection`.

        Raises:
            UsageError: If the port in `dsn` isn't a number.
        """
        params = parse_network_connection_string(dsn)

        try:
            port = int(params.get("port") or DEFAULT_PORT)
        except ValueError as exc:
            raise UsageError(f"Invalid port '{params.get('port')}' in connection string") from exc

        connection_kwargs = {
            "host": params.get("host") or "localhost",
            "port": port,
            "user": user or params.get("user") or None,
            "password": password or params.get("password") or "",
            "database": params.get("dbname") or None,
            "charset": params.get("charset") or "utf8mb4",
            "cursorclass": pymysql.cursors.DictCursor,
            "autocommit": True,
        }
        if params.get("unix_socket"):
            connection_kwargs["unix_socket"] = params["unix_socket"]

        LOG.debug(f"Opening MySQL connection to {connection_kwargs['host']}:{port}.")
        return pymysql.connect(**connection_kwargs)

    def apply_charset(self, conn: Any, charset: str):
        """
        Switch the session charset with PyMySQL's `set_character_set`.

        PyMySQL sends `SET NAMES` itself and re-encodes later statements with the new
        charset.

        Args:
            conn: The raw connection.
            charset: The charset name, e.g. "utf8mb4".

        Raises:
            UsageError: If `charset` isn't a plain charset name.
        """
        if not CHARSET_PATTERN.match(charset or ""):
            raise UsageError(f"Invalid charset '{charset}'")
        LOG.debug(f"Switching session charset to {charset}.")
        conn.set_character_set(charset)

    def begin(self, conn: Any):
        """Start a transaction."""
        conn.begin()

    def set_autocommit(self, conn: Any, enabled: bool):
        """Switch autocommit on or off for the session."""
        conn.autocommit(enabled)

    def error_code(self, exc: Exception) -> Optional[Any]:
        """
        Return the MySQL error number of `exc` (e.g. 1064 for a syntax error), if known.

        Args:
            exc: An exception raised by PyMySQL.

        Returns:
            The error number, or None.
        """
        if exc.args and isinstance(exc.args[0], int):
            return exc.args[0]
        return None
