##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
Driver factory for selecting and instantiating database drivers in SeedDB.

This module defines the `DriverFactory` class, which maps driver names (and aliases
such as "sqlite3" or "mariadb") to `DatabaseDriver` implementations. Third-party
drivers can be published under the "seeddb.drivers" entry point group.
"""

from typing import Any

from seeddb.abstracts import SeedDBBaseFactory
from seeddb.drivers.driver_base import DatabaseDriver
from seeddb.drivers.mysql_driver import MySQLDriver
from seeddb.drivers.sqlite_driver import SQLiteDriver
from seeddb.exceptions import DriverNotSupportedError


class DriverFactory(SeedDBBaseFactory):
    """
    Factory class for managing and instantiating supported database drivers.

    Attributes:
        _registry (Dict[str, DatabaseDriver]): Maps canonical driver names to driver classes.
        _aliases (Dict[str, str]): Maps alternate names to canonical driver names.

    Methods:
        register: Register a new driver class and optional aliases.
        list_available: Return a list of supported driver names.
        create: Instantiate a driver class by name or alias.
        get_component_info: Return metadata about a registered driver.
    """

    def _register_builtins(self):
        """
        Register built-in driver implementations.
        """
        self.register("mysql", MySQLDriver, aliases=["mariadb"])
        self.register("sqlite", SQLiteDriver, aliases=["sqlite3"])

    def _validate_component(self, component_class: Any):
        """
        Ensure registered component is a subclass of DatabaseDriver.

        Args:
            component_class: The class to validate.

        Raises:
            TypeError: If the component does not subclass DatabaseDriver.
        """
        if not isinstance(component_class, type) or not issubclass(component_class, DatabaseDriver):
            raise TypeError(f"{component_class} must inherit from DatabaseDriver")

    def _entry_point_group(self) -> str:
        """
        Entry point group used for discovering driver plugins.

        Returns:
            The entry point namespace for SeedDB driver plugins.
        """
        return "seeddb.drivers"

    def _raise_component_error_class(self, msg: str):
        """
        Raise a `DriverNotSupportedError` for unknown drivers.

        Args:
            msg: The message to add to the error being raised.
        """
        raise DriverNotSupportedError(msg)


driver_factory = DriverFactory()
