##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
Statement execution for SeedDB.

This module defines `StatementExecutor`, which runs a raw SQL statement, with optional
positional values, against the connection held by a `ConnectionManager`.

Read statements (those starting with SELECT) return every row as a dictionary and
record the row count. Any other statement returns the constant `WRITE_SUCCESS` (1):
affected-row counts are deliberately not reported, and `result_count()` only ever
reflects the last read.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from seeddb.db.connection import ConnectionManager, translate_driver_errors
from seeddb.exceptions import UsageError


LOG = logging.getLogger(__name__)

READ_KEYWORD = "SELECT"

WRITE_SUCCESS = 1

QueryResult = Union[List[Dict[str, Any]], int]


def normalize_query(query: str) -> str:
    """
    Trim a statement and replace its line breaks with spaces.

    Args:
        query: The raw statement.

    Returns:
        The statement on a single line.
    """
    return query.strip().replace("\r\n", " ").replace("\r", " ").replace("\n", " ")


def is_read_statement(query: str) -> bool:
    """
    Check whether a statement is a read, i.e. it starts with SELECT (any case).

    Args:
        query: The statement.

    Returns:
        True for read statements.
    """
    return query.lstrip().upper().startswith(READ_KEYWORD)


class StatementExecutor:
    """
    Runs statements on the connection of a `ConnectionManager`.

    Attributes:
        manager (ConnectionManager): Owner of the connection and its handle.

    Methods:
        exec: Execute a statement and return its rows or `WRITE_SUCCESS`.
        result_count: Row count of the last read statement.
        inserted_id: Last insert id reported by the driver.
    """

    def __init__(self, manager: ConnectionManager):
        self.manager: ConnectionManager = manager

    def exec(self, query: str, values: Optional[Sequence[Any]] = None) -> QueryResult:
        """
        Execute an SQL statement, binding `values` to its `?` placeholders in order.

        Args:
            query: The statement.
            values: Positional values to bind. When empty the statement is run as-is.

        Returns:
            A list of row dictionaries for read statements (empty if there are no rows),
            `WRITE_SUCCESS` for anything else.

        Raises:
            UsageError: If there's no live connection or the statement is empty.
            DriverError: If the driver rejects the statement.
        """
        if not self.manager.is_connected:
            raise UsageError("Cannot run this query: missing connection")

        if not isinstance(query, str) or not query.strip():
            raise UsageError("Query cannot be empty and must be a string: empty query")

        query = normalize_query(query)
        handle = self.manager.handle
        driver = self.manager.driver
        read = is_read_statement(query)
        rows = []

        LOG.debug(f"SQL query: {query}")
        if values:
            LOG.debug(f"SQL params: {list(values)}")

        with translate_driver_errors(driver, "exec"):
            cursor = handle.raw.cursor()
            try:
                if values:
                    cursor.execute(driver.prepare_query(query), tuple(values))
                else:
                    cursor.execute(query)

                if read:
                    rows = [driver.row_to_dict(row) for row in cursor.fetchall() or []]
                elif cursor.lastrowid:
                    handle.last_insert_id = cursor.lastrowid
            finally:
                cursor.close()

        if read:
            handle.last_result_count = len(rows)
            return rows

        handle.last_result_count = 0
        return WRITE_SUCCESS

    def result_count(self) -> int:
        """
        Return the row count of the last read statement.

        Returns:
            The number of rows fetched by the last SELECT, or 0 if the last statement was a write.
        """
        return self.manager.handle.last_result_count

    def inserted_id(self) -> Optional[int]:
        """
        Return the last insert id reported by the driver.

        Returns:
            The id of the last inserted row, or None if nothing was inserted yet.
        """
        return self.manager.handle.last_insert_id
