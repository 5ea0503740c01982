##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
Connection management for SeedDB.

This module defines `ConnectionHandle`, the mutable state shared by every part of a
`Database` (live connection, attempt counter, transaction depth, last result count),
and `ConnectionManager`, which owns that handle and implements the fluent configuration
setters and the reference-counted `connect`/`disconnect` pair.

Chained callers may call `connect()` while a connection is already open; each extra call
only increments the attempt counter, and each `disconnect()` decrements it. The
underlying connection is closed and released exactly when the counter drops to zero.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from types import TracebackType
from typing import Any, Generator, Mapping, Optional, Type, Union

from seeddb.config import ConnectionConfig
from seeddb.config.connection_string import mask_connection_string, split_connection_string
from seeddb.drivers.driver_base import DatabaseDriver
from seeddb.drivers.driver_factory import driver_factory
from seeddb.exceptions import DriverError, UsageError


LOG = logging.getLogger(__name__)


@dataclass
class ConnectionHandle:
    """
    State of the single connection owned by a `ConnectionManager`.

    Attributes:
        raw: The live DB-API connection, or None when disconnected.
        attempts: Number of `connect()` calls not yet balanced by `disconnect()`.
        transactions: Current transaction depth.
        last_result_count: Row count of the last read statement (0 after a write).
        last_insert_id: Last insert id reported by the driver, if any.
        dsn: The connection string used to open `raw`.
    """

    raw: Any = None
    attempts: int = 0
    transactions: int = 0
    last_result_count: int = 0
    last_insert_id: Optional[int] = None
    dsn: str = ""


@contextmanager
def translate_driver_errors(driver: DatabaseDriver, action: str) -> Generator[None, None, None]:
    """
    Re-raise any exception of the driver module as a `DriverError`.

    The original message is kept, along with the driver's error code when it is numeric.

    Args:
        driver: The driver whose exceptions should be translated.
        action: Short description of the operation, used for logging.

    Raises:
        DriverError: If the wrapped block raises one of `driver.error_types`.
    """
    try:
        yield
    except driver.error_types as exc:
        LOG.debug(f"{driver.name}: {action} failed: {exc}")
        raise DriverError.from_exception(exc, driver.error_code(exc)) from exc


class ConnectionManager:
    """
    Owns the connection configuration and the connection handle.

    Every setter ignores empty arguments and returns the manager itself so calls can be
    chained, e.g. `Database().set_driver("sqlite").set_database(":memory:").connect()`.

    Attributes:
        config (ConnectionConfig): The connection settings.
        handle (ConnectionHandle): The live connection state.
    """

    def __init__(self, config: Union[ConnectionConfig, Mapping[str, Any], None] = None):
        """
        Initialize the manager from a `ConnectionConfig` or a configuration mapping.

        Args:
            config: The connection settings. See `ConnectionConfig` for the recognized keys.
        """
        self.config: ConnectionConfig = config if isinstance(config, ConnectionConfig) else ConnectionConfig(config)
        self.handle: ConnectionHandle = ConnectionHandle()
        self._driver: Optional[DatabaseDriver] = None

    @property
    def driver(self) -> DatabaseDriver:
        """The driver of the live connection, or the configured driver when disconnected."""
        if self._driver is not None and self.is_connected:
            return self._driver
        return driver_factory.create(self.driver_name)

    @property
    def driver_name(self) -> str:
        """
        The name of the driver to connect with.

        A raw connection string names its own driver in its prefix, which is used unless
        a driver was set explicitly.
        """
        if self.config.dsn and not self.config.driver_is_explicit:
            return split_connection_string(self.config.dsn)[0]
        return self.config.driver

    @property
    def is_connected(self) -> bool:
        """True while a live connection is held."""
        return self.handle.raw is not None

    @property
    def attempts(self) -> int:
        """Number of `connect()` calls not yet balanced by `disconnect()`."""
        return self.handle.attempts

    def set_dsn(self, dsn: Optional[str] = None) -> "ConnectionManager":
        """Set a raw connection string, overriding the derived one."""
        self.config.set_dsn(dsn)
        return self

    def set_driver(self, driver: Optional[str] = None) -> "ConnectionManager":
        """Set the driver name."""
        self.config.set_driver(driver)
        return self

    def set_host(
        self, host: Optional[str] = None, port: Any = None, charset: Optional[str] = None
    ) -> "ConnectionManager":
        """Set the host address, port and charset."""
        self.config.set_host(host, port)
        return self.set_charset(charset)

    def set_port(self, port: Any = None) -> "ConnectionManager":
        """Set the port."""
        self.config.set_port(port)
        return self

    def set_credential(self, user: Optional[str] = None, password: Optional[str] = None) -> "ConnectionManager":
        """Set the user name and password."""
        self.config.set_credential(user, password)
        return self

    def set_database(self, name: Optional[str] = None) -> "ConnectionManager":
        """Set the database name (or the database file for file-based drivers)."""
        self.config.set_database(name)
        return self

    def set_charset(self, charset: Optional[str] = None) -> "ConnectionManager":
        """
        Set the connection charset.

        When connected through a network driver the session charset directive is
        re-applied immediately.

        Args:
            charset: The charset name.

        Returns:
            This manager, for chaining.
        """
        self.config.set_charset(charset)

        if self.is_connected and not self.driver.file_based:
            with translate_driver_errors(self.driver, "set charset"):
                self.driver.apply_charset(self.handle.raw, self.config.charset)

        return self

    def get_connection_string(self, include_password: bool = False) -> str:
        """
        Return the connection string used (or that would be used) to connect.

        Args:
            include_password: If False any password segment of a raw connection
                string is masked.

        Returns:
            The connection string.
        """
        dsn = self.handle.dsn if self.is_connected else self.driver.build_connection_string(self.config)
        return dsn if include_password else mask_connection_string(dsn)

    def get_link(self) -> Any:
        """
        Return the live DB-API connection.

        Raises:
            UsageError: If there is no live connection.
        """
        if not self.is_connected:
            raise UsageError("Cannot access the connection: missing connection")
        return self.handle.raw

    def connect(self) -> "ConnectionManager":
        """
        Attempt to connect to the configured database.

        If a connection is already open this only increments the attempt counter.

        Returns:
            This manager, for chaining.

        Raises:
            DriverNotSupportedError: If the configured driver isn't registered.
            DriverError: If the driver fails to open the connection.
        """
        if self.is_connected:
            self.handle.attempts += 1
            LOG.debug(f"Reusing open connection (attempts: {self.handle.attempts}).")
            return self

        driver = driver_factory.create(self.driver_name)
        dsn = driver.build_connection_string(self.config)

        with translate_driver_errors(driver, "connect"):
            try:
                raw = driver.connect(dsn, self.config.user, self.config.password)
            except OSError as exc:
                raise DriverError.from_exception(exc, exc.errno) from exc

            try:
                if not driver.file_based:
                    driver.apply_charset(raw, self.config.charset)
            except Exception:
                driver.close(raw)
                raise

        self._driver = driver
        self.handle.raw = raw
        self.handle.dsn = dsn
        self.handle.attempts += 1
        LOG.debug(f"Connected to '{mask_connection_string(dsn)}'.")

        return self

    def disconnect(self) -> "ConnectionManager":
        """
        Attempt to disconnect from the database.

        The attempt counter is decremented; the connection is closed and released when
        the counter reaches zero. Calling this while disconnected does nothing.

        Returns:
            This manager, for chaining.
        """
        if self.handle.attempts >= 1:
            self.handle.attempts -= 1
            if self.handle.attempts > 0:
                LOG.debug(f"Keeping connection open (attempts: {self.handle.attempts}).")
                return self

        if not self.is_connected:
            return self

        if self.handle.transactions:
            LOG.warning(
                f"Closing the connection with {self.handle.transactions} open transaction level(s); "
                "uncommitted changes are discarded."
            )

        driver, raw = self._driver, self.handle.raw
        self.handle.raw = None
        self.handle.transactions = 0
        self._driver = None

        with translate_driver_errors(driver, "disconnect"):
            driver.close(raw)
        LOG.debug(f"Disconnected from '{mask_connection_string(self.handle.dsn)}'.")

        return self

    def __enter__(self) -> "ConnectionManager":
        return self.connect()

    def __exit__(self, exc_type: Type[Exception], exc_value: Exception, traceback: TracebackType):
        self.disconnect()
