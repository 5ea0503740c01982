##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
Transaction control for SeedDB.

This module defines `TransactionController`, which keeps a transaction depth on the
connection handle and maps `begin`/`commit`/`rollback` calls onto the driver:

- The outermost level (depth 0 -> 1 and back) issues a real BEGIN and COMMIT/ROLLBACK.
  Drivers that need it get autocommit switched off before BEGIN and back on afterwards.
- Deeper levels use savepoints named `trans<depth>` on drivers that support them.
  On other drivers they are only counted: an inner rollback doesn't undo anything until
  the outermost level rolls back.
- `commit`/`rollback` at depth 0 are silently ignored.
"""

import logging
from contextlib import contextmanager
from typing import Generator

from seeddb.db.connection import ConnectionManager, translate_driver_errors


LOG = logging.getLogger(__name__)

SAVEPOINT_PREFIX = "trans"

BEGIN = "begin"
COMMIT = "commit"
ROLLBACK = "rollback"


def savepoint_name(depth: int) -> str:
    """
    Return the name of the savepoint addressing a transaction depth.

    Args:
        depth: The transaction depth (2 for the first nested level).

    Returns:
        The savepoint name, e.g. "trans2".
    """
    return f"{SAVEPOINT_PREFIX}{depth}"


class TransactionController:
    """
    Emulates nested transactions on the connection of a `ConnectionManager`.

    Attributes:
        manager (ConnectionManager): Owner of the connection and its handle.

    Methods:
        begin: Open a transaction level.
        commit: Close the current level, committing it.
        rollback: Close the current level, rolling it back.
        transaction: Dispatch "begin", "commit" or "rollback" by name.
        atomic: Context manager wrapping a block in a transaction level.
    """

    def __init__(self, manager: ConnectionManager):
        self.manager: ConnectionManager = manager

    @property
    def depth(self) -> int:
        """The current transaction depth (0 when idle)."""
        return self.manager.handle.transactions

    def begin(self) -> "TransactionController":
        """
        Open a transaction level.

        Returns:
            This controller, for chaining.

        Raises:
            UsageError: If there's no live connection.
            DriverError: If the driver fails to start the transaction or savepoint.
        """
        conn = self.manager.get_link()
        driver = self.manager.driver
        depth = self.depth + 1

        with translate_driver_errors(driver, BEGIN):
            if depth == 1:
                if driver.toggles_autocommit:
                    driver.set_autocommit(conn, False)
                    try:
                        driver.begin(conn)
                    except Exception:
                        driver.set_autocommit(conn, True)
                        raise
                else:
                    driver.begin(conn)
            elif driver.supports_savepoints:
                driver.savepoint(conn, savepoint_name(depth))
            else:
                LOG.debug(f"{driver.name}: nested transaction level {depth} is emulated.")

        self.manager.handle.transactions = depth
        return self

    def commit(self) -> "TransactionController":
        """
        Close the current transaction level, committing it.

        Only the outermost level reaches the database as a real COMMIT; a nested level
        releases its savepoint, or is just counted on drivers without savepoints.

        Returns:
            This controller, for chaining.
        """
        depth = self.depth
        if depth < 1:
            LOG.debug("Commit ignored: no open transaction.")
            return self

        conn = self.manager.get_link()
        driver = self.manager.driver

        with translate_driver_errors(driver, COMMIT):
            if depth > 1:
                if driver.supports_savepoints:
                    driver.release_savepoint(conn, savepoint_name(depth))
            else:
                driver.commit(conn)
                if driver.toggles_autocommit:
                    driver.set_autocommit(conn, True)

        self.manager.handle.transactions = depth - 1
        return self

    def rollback(self) -> "TransactionController":
        """
        Close the current transaction level, rolling it back.

        At depth 1 the whole transaction is rolled back. A nested level rolls back to its
        savepoint, or is just counted on drivers without savepoints. The level is closed
        even if the driver reports an error.

        Returns:
            This controller, for chaining.
        """
        depth = self.depth
        if depth < 1:
            LOG.debug("Rollback ignored: no open transaction.")
            return self

        conn = self.manager.get_link()
        driver = self.manager.driver

        try:
            with translate_driver_errors(driver, ROLLBACK):
                if depth > 1:
                    if driver.supports_savepoints:
                        driver.rollback_to_savepoint(conn, savepoint_name(depth))
                        driver.release_savepoint(conn, savepoint_name(depth))
                else:
                    driver.rollback(conn)
                    if driver.toggles_autocommit:
                        driver.set_autocommit(conn, True)
        finally:
            self.manager.handle.transactions = depth - 1

        return self

    def transaction(self, status: str = BEGIN) -> "TransactionController":
        """
        Manage transactions by name.

        Args:
            status: "commit" or "rollback"; any other value is understood as "begin".

        Returns:
            This controller, for chaining.
        """
        if status == COMMIT:
            return self.commit()
        if status == ROLLBACK:
            return self.rollback()
        return self.begin()

    @contextmanager
    def atomic(self) -> Generator["TransactionController", None, None]:
        """
        Run a block inside a transaction level.

        The level is committed when the block finishes and rolled back if it raises;
        the exception is propagated.

        Yields:
            This controller.
        """
        self.begin()
        try:
            yield self
        except BaseException:
            self.rollback()
            raise
        self.commit()
