##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
The `Database` helper.

This module defines `Database`, the object applications work with. It is a
`ConnectionManager` (configuration setters, `connect`/`disconnect`, context manager)
that also exposes statement execution, transactions and the query builder, all sharing
the single connection it owns.

Example:
    ```python
    db = Database({"driver": "sqlite", "base": "app.db"}).connect()
    with db.atomic():
        db.insert("users", {"name": "Bob", "age": 30})
    adults = db.fetch("users", where={"age >=": 18})
    db.disconnect()
    ```
"""

from contextlib import contextmanager
from typing import Any, Dict, Generator, List, Mapping, Optional, Sequence, Union

from seeddb.config import ConnectionConfig
from seeddb.db.connection import ConnectionManager
from seeddb.db.executor import QueryResult, StatementExecutor
from seeddb.db.query_builder import DEFAULT_LIMIT, QueryBuilder
from seeddb.db.transaction import BEGIN, TransactionController


class Database(ConnectionManager):
    """
    Data-access helper wrapping one database connection.

    Attributes:
        config (ConnectionConfig): The connection settings.
        handle (ConnectionHandle): The live connection state.
        executor (StatementExecutor): Runs raw statements.
        transactions (TransactionController): Emulates nested transactions.
        builder (QueryBuilder): Builds INSERT/UPDATE/DELETE/SELECT statements.
    """

    def __init__(self, config: Union[ConnectionConfig, Mapping[str, Any], None] = None):
        """
        Initialize the helper. No connection is opened until `connect()` is called.

        Args:
            config: A `ConnectionConfig` or a mapping with any of the keys `driver`,
                `host`, `port`, `base`, `charset`, `user`, `pass` and `dsn`.
        """
        super().__init__(config)
        self.executor: StatementExecutor = StatementExecutor(self)
        self.transactions: TransactionController = TransactionController(self)
        self.builder: QueryBuilder = QueryBuilder(self.executor)

    def exec(self, query: str, values: Optional[Sequence[Any]] = None) -> QueryResult:
        """Execute a raw statement. See `StatementExecutor.exec`."""
        return self.executor.exec(query, values)

    def result_count(self) -> int:
        """Return the row count of the last read statement."""
        return self.executor.result_count()

    def inserted_id(self) -> Optional[int]:
        """Return the last insert id reported by the driver."""
        return self.executor.inserted_id()

    @property
    def transaction_depth(self) -> int:
        """The current transaction depth."""
        return self.transactions.depth

    def transaction(self, status: str = BEGIN) -> "Database":
        """Begin, commit or roll back a transaction level. See `TransactionController.transaction`."""
        self.transactions.transaction(status)
        return self

    def begin(self) -> "Database":
        """Open a transaction level."""
        self.transactions.begin()
        return self

    def commit(self) -> "Database":
        """Commit the current transaction level."""
        self.transactions.commit()
        return self

    def rollback(self) -> "Database":
        """Roll back the current transaction level."""
        self.transactions.rollback()
        return self

    @contextmanager
    def atomic(self) -> Generator["Database", None, None]:
        """Run a block inside a transaction level, rolling back if it raises."""
        with self.transactions.atomic():
            yield self

    def insert(self, table: str, data: Mapping[str, Any]) -> QueryResult:
        """Insert one record. See `QueryBuilder.insert`."""
        return self.builder.insert(table, data)

    def update(self, table: str, data: Mapping[str, Any], where: Optional[Mapping[str, Any]] = None) -> QueryResult:
        """Update records. See `QueryBuilder.update`."""
        return self.builder.update(table, data, where)

    def delete(self, table: str, where: Optional[Mapping[str, Any]] = None) -> QueryResult:
        """Delete records. See `QueryBuilder.delete`."""
        return self.builder.delete(table, where)

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
        """Fetch a recordset. See `QueryBuilder.fetch`."""
        return self.builder.fetch(table, cols, where, limit, offset, order, joins)
