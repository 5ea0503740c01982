##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
Minimal SQL query builder for SeedDB.

This module defines `QueryBuilder`, which composes INSERT, UPDATE, DELETE and SELECT
statements from plain Python values, escapes every table and column name, binds every
value through a `?` placeholder, and hands the result to a `StatementExecutor`.

Only structured input is turned into SQL. Raw condition keys (see `seeddb.db.where`)
and function-call columns are passed through as written and are not validated.
"""

from numbers import Integral
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from seeddb.db.escaping import escape_column_name, escape_table_name
from seeddb.db.executor import QueryResult, StatementExecutor
from seeddb.db.where import PLACEHOLDER, build_where_clause
from seeddb.exceptions import UsageError


DEFAULT_LIMIT = 1000

DEFAULT_ORDER: Dict[str, str] = {"id": "ASC"}

ORDER_DIRECTIONS = ("ASC", "DESC")


def _validate_table(table: Any, action: str) -> str:
    if not isinstance(table, str) or not table.strip():
        raise UsageError(f"{action}: Invalid table name")
    return table


def _validate_data(data: Any, action: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping) or not data:
        raise UsageError(f"{action}: Data cannot be empty")
    return data


def _validate_bound(value: Any, name: str) -> int:
    """
    Validate a LIMIT or OFFSET value.

    Args:
        value: An integer or a string of digits.
        name: "limit" or "offset", used in the error message.

    Returns:
        The value as an integer.

    Raises:
        UsageError: If the value isn't numeric or is negative.
    """
    if isinstance(value, bool):
        raise UsageError(f"fetch: Invalid {name}")

    if isinstance(value, Integral):
        number = int(value)
    elif isinstance(value, str) and value.strip().lstrip("-").isdigit():
        number = int(value.strip())
    else:
        raise UsageError(f"fetch: Invalid {name}")

    if number < 0:
        raise UsageError(f"fetch: Invalid {name}")
    return number


def _order_clause(order: Mapping[str, str]) -> str:
    terms = []
    for column, direction in order.items():
        direction = f"{direction}".strip().upper()
        if direction not in ORDER_DIRECTIONS:
            raise UsageError(f"fetch: Invalid order direction for '{column}'")
        terms.append(f"{escape_column_name(column)} {direction}")
    return ", ".join(terms)


class QueryBuilder:
    """
    Builds and executes INSERT, UPDATE, DELETE and SELECT statements.

    Attributes:
        executor (StatementExecutor): Runs the generated statements.

    Methods:
        insert: Insert one row.
        update: Update the rows matching a condition mapping.
        delete: Delete the rows matching a condition mapping.
        fetch: Select rows with optional joins, conditions, ordering and paging.
    """

    def __init__(self, executor: StatementExecutor):
        self.executor: StatementExecutor = executor

    def insert(self, table: str, data: Mapping[str, Any]) -> QueryResult:
        """
        Insert a new record into `table`.

        Args:
            table: The table name.
            data: Ordered mapping of column name to value.

        Returns:
            `WRITE_SUCCESS` (1).

        Raises:
            UsageError: If the table name or the data is empty.
        """
        _validate_table(table, "insert")
        _validate_data(data, "insert")

        columns = [escape_column_name(column) for column in data]
        values = list(data.values())
        placeholders = [PLACEHOLDER] * len(values)

        if not len(columns) == len(values) == len(placeholders):
            raise UsageError("insert: Data with wrong number of given arguments.")

        query = (
            f"INSERT INTO {escape_table_name(table)} ({', '.join(columns)}) "
            f"VALUES ({', '.join(placeholders)})"
        )
        return self.executor.exec(query, values)

    def update(self, table: str, data: Mapping[str, Any], where: Optional[Mapping[str, Any]] = None) -> QueryResult:
        """
        Update records of `table`.

        The data values are bound first, followed by the non-null condition values.

        Args:
            table: The table name.
            data: Ordered mapping of column name to new value.
            where: Optional condition mapping. See `seeddb.db.where`.

        Returns:
            `WRITE_SUCCESS` (1).

        Raises:
            UsageError: If the table name or the data is empty.
        """
        _validate_table(table, "update")
        _validate_data(data, "update")

        assignments = [f"{escape_column_name(column)} = {PLACEHOLDER}" for column in data]
        values = list(data.values())

        if len(assignments) != len(values):
            raise UsageError("update: Data argument with wrong number of keys and values.")

        query = f"UPDATE {escape_table_name(table)} SET {', '.join(assignments)}"

        clause, where_values = build_where_clause(where)
        if clause:
            query = f"{query} {clause}"
            values.extend(where_values)

        return self.executor.exec(query, values)

    def delete(self, table: str, where: Optional[Mapping[str, Any]] = None) -> QueryResult:
        """
        Delete records from `table`.

        Args:
            table: The table name.
            where: Optional condition mapping. Without it every row is deleted.

        Returns:
            `WRITE_SUCCESS` (1).

        Raises:
            UsageError: If the table name is empty.
        """
        _validate_table(table, "delete")

        query = f"DELETE FROM {escape_table_name(table)}"

        clause, where_values = build_where_clause(where)
        if clause:
            query = f"{query} {clause}"

        return self.executor.exec(query, where_values or None)

    def fetch(  # pylint: disable=too-many-arguments
        self,
        table: str,
        cols: Union[Sequence[str], str, None] = None,
        where: Optional[Mapping[str, Any]] = None,
        limit: Union[int, str] = DEFAULT_LIMIT,
        offset: Union[int, str] = 0,
        order: Optional[Mapping[str, str]] = None,
        joins: Optional[Sequence[str]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Fetch a recordset from `table`.

        Args:
            table: The table name, optionally with an alias ("users u").
            cols: Columns to select. Defaults to "*".
            where: Optional condition mapping. See `seeddb.db.where`.
            limit: Maximum number of rows; 0 means no LIMIT clause. Defaults to 1000.
            offset: Number of rows to skip. Defaults to 0.
            order: Ordered mapping of column to "ASC"/"DESC". Defaults to `{"id": "ASC"}`;
                pass an empty mapping for no ORDER BY.
            joins: Extra tables listed after the main one, e.g. ["orders o", "items i"].

        Returns:
            The fetched rows as dictionaries.

        Raises:
            UsageError: If the table name, limit, offset or an order direction is invalid.
        """
        _validate_table(table, "fetch")
        limit = _validate_bound(limit, "limit")
        offset = _validate_bound(offset, "offset")

        if isinstance(cols, str):
            cols = [cols]
        columns = ", ".join(escape_column_name(column) for column in cols) if cols else "*"

        query = f"SELECT {columns} FROM {escape_table_name(table)}"

        if joins:
            query = f"{query}, {', '.join(escape_table_name(join) for join in joins)}"

        clause, where_values = build_where_clause(where)
        if clause:
            query = f"{query} {clause}"

        order = DEFAULT_ORDER if order is None else order
        if order:
            query = f"{query} ORDER BY {_order_clause(order)}"

        if limit:
            query = f"{query} LIMIT {f'{offset}, ' if offset else ''}{limit}"

        return self.executor.exec(query, where_values or None)
