##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
Used to store the connection configuration.

The `config` package holds the settings a `Database` needs to reach its server:
driver name, host, port, database name, charset, credentials and an optional raw
connection string. An enclosing application hands these over as a plain mapping
(or through `SEEDDB_*` environment variables for the CLI).

Modules:
    connection_string.py: Builds, parses and masks driver-specific connection strings.
"""

import logging
import os
from typing import Any, Dict, Mapping, Optional


LOG = logging.getLogger(__name__)

DEFAULTS: Dict[str, str] = {
    "driver": "mysql",
    "host": "localhost",
    "port": "3306",
    "base": "test",
    "charset": "utf8mb4",
    "user": "",
    "pass": "",
    "dsn": "",
}

ENV_PREFIX = "SEEDDB_"


def _is_set(value: Any) -> bool:
    """Mirror of the "non-empty" check applied by every setter."""
    return value is not None and f"{value}" != ""


class ConnectionConfig:  # pylint: disable=too-many-instance-attributes
    """
    The settings used to open a database connection.

    Values only change through the explicit setters, and every setter ignores
    empty or `None` arguments so a previously configured value is never erased.

    Attributes:
        driver (str): Name of the driver, e.g. "mysql" or "sqlite".
        host (str): Server address for network drivers.
        port (str): Server port for network drivers, kept as a string.
        base (str): Database name, or the database file path for file-based drivers.
        charset (str): Connection charset.
        user (str): User name.
        password (str): Password.
        dsn (str): Raw connection string overriding the one derived from the fields above.
        driver_is_explicit (bool): Whether a driver name was set rather than left at its default.
    """

    def __init__(self, options: Optional[Mapping[str, Any]] = None):
        """
        Initialize the config with defaults, then apply `options`.

        Args:
            options: Optional mapping with any of the keys `driver`, `host`, `port`,
                `base`, `charset`, `user`, `pass` and `dsn`. Credentials are only
                applied when both `user` and `pass` are present.
        """
        self.driver: str = DEFAULTS["driver"]
        self.host: str = DEFAULTS["host"]
        self.port: str = DEFAULTS["port"]
        self.base: str = DEFAULTS["base"]
        self.charset: str = DEFAULTS["charset"]
        self.user: str = DEFAULTS["user"]
        self.password: str = DEFAULTS["pass"]
        self.dsn: str = DEFAULTS["dsn"]
        self.driver_is_explicit: bool = False

        if options:
            self.update(options)

    def update(self, options: Mapping[str, Any]) -> "ConnectionConfig":
        """
        Apply the recognized keys of `options` to this config.

        Args:
            options: A configuration mapping.

        Returns:
            This config, for chaining.
        """
        unknown = set(options) - set(DEFAULTS)
        if unknown:
            LOG.debug(f"Ignoring unrecognized connection options: {sorted(unknown)}")

        self.set_driver(options.get("driver"))
        self.set_host(options.get("host"), options.get("port"), options.get("charset"))
        self.set_database(options.get("base"))
        self.set_dsn(options.get("dsn"))

        if "user" in options and "pass" in options:
            self.set_credential(options["user"], options["pass"])

        return self

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX, environ: Optional[Mapping[str, str]] = None) -> "ConnectionConfig":
        """
        Build a config from environment variables such as `SEEDDB_DRIVER` or `SEEDDB_PASS`.

        Args:
            prefix: The prefix of the variables to read.
            environ: The environment to read from. Defaults to `os.environ`.

        Returns:
            A new `ConnectionConfig`.
        """
        environ = os.environ if environ is None else environ
        options = {key: environ.get(f"{prefix}{key.upper()}") for key in DEFAULTS}
        # Unlike a mapping, the environment may provide the user and password separately
        user, password = options.pop("user"), options.pop("pass")
        return cls(options).set_credential(user, password)

    def set_dsn(self, dsn: Optional[str]) -> "ConnectionConfig":
        """Set a raw connection string."""
        if _is_set(dsn):
            self.dsn = f"{dsn}"
        return self

    def set_driver(self, driver: Optional[str]) -> "ConnectionConfig":
        """Set the driver name."""
        if _is_set(driver):
            self.driver = f"{driver}"
            self.driver_is_explicit = True
        return self

    def set_host(self, host: Optional[str], port: Any = None, charset: Optional[str] = None) -> "ConnectionConfig":
        """Set the host address and, optionally, the port and charset."""
        if _is_set(host):
            self.host = f"{host}"
        self.set_port(port)
        self.set_charset(charset)
        return self

    def set_port(self, port: Any) -> "ConnectionConfig":
        """Set the port. Integers are stored as strings."""
        if _is_set(port):
            self.port = f"{port}"
        return self

    def set_credential(self, user: Optional[str], password: Optional[str] = None) -> "ConnectionConfig":
        """Set the user name and password. Each one is applied independently."""
        if _is_set(user):
            self.user = f"{user}"
        if _is_set(password):
            self.password = f"{password}"
        return self

    def set_database(self, name: Optional[str]) -> "ConnectionConfig":
        """Set the database name (or file path for file-based drivers)."""
        if _is_set(name):
            self.base = f"{name}"
        return self

    def set_charset(self, charset: Optional[str]) -> "ConnectionConfig":
        """Set the connection charset."""
        if _is_set(charset):
            self.charset = f"{charset}"
        return self

    def to_dict(self, include_password: bool = False) -> Dict[str, str]:
        """
        Return the config as a mapping using the same keys the constructor accepts.

        Args:
            include_password: If False the password is masked.

        Returns:
            A dictionary representation of this config.
        """
        return {
            "driver": self.driver,
            "host": self.host,
            "port": self.port,
            "base": self.base,
            "charset": self.charset,
            "user": self.user,
            "pass": self.password if include_password or not self.password else "******",
            "dsn": self.dsn,
        }

    def __repr__(self) -> str:
        items = ", ".join(f"{key}={value!r}" for key, value in self.to_dict().items())
        return f"{self.__class__.__name__}({items})"

    __str__ = __repr__
