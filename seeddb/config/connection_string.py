##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
This module builds and parses the connection strings (DSNs) used to open
database connections.

Two templates are used when no raw connection string was configured:

- file-based drivers (SQLite): `"{driver}://{base}"`, where `base` is the file path.
- network drivers (MySQL): `"{driver}:host={host};port={port};dbname={base};charset={charset}"`.

Drivers receive the string back and parse it with the `parse_*` helpers, so a
raw string set by the caller goes through exactly the same path as a derived one.

Raw connection strings may carry a `password=` segment; `mask_connection_string`
hides it before the string is logged or displayed.
"""

import logging
from typing import Dict, Tuple

from seeddb.config import ConnectionConfig
from seeddb.exceptions import UsageError


LOG = logging.getLogger(__name__)

FILE_CONNECTION_STRING = "{driver}://{base}"

NETWORK_CONNECTION_STRING = "{driver}:host={host};port={port};dbname={base};charset={charset}"


def build_connection_string(config: ConnectionConfig, file_based: bool) -> str:
    """
    Return the connection string for `config`.

    A raw connection string stored on the config always wins over the templates.

    Args:
        config: The connection settings.
        file_based: Whether the driver addresses a file rather than a server.

    Returns:
        The connection string.
    """
    if config.dsn:
        LOG.debug("Connection string: using the configured raw connection string.")
        return config.dsn

    template = FILE_CONNECTION_STRING if file_based else NETWORK_CONNECTION_STRING
    return template.format(
        driver=config.driver,
        host=config.host,
        port=config.port,
        base=config.base,
        charset=config.charset,
    )


def split_connection_string(dsn: str) -> Tuple[str, str]:
    """
    Split a connection string into its driver prefix and the remainder.

    Args:
        dsn: A connection string such as "mysql:host=db;port=3306".

    Returns:
        A tuple of (driver prefix, remainder).

    Raises:
        UsageError: If the string has no "driver:" prefix.
    """
    prefix, sep, rest = dsn.partition(":")
    if not sep or not prefix:
        raise UsageError(f"Invalid connection string '{dsn}': expected '<driver>:...'")
    return prefix, rest


def parse_file_connection_string(dsn: str) -> str:
    """
    Return the database path addressed by a file-based connection string.

    Both "sqlite://path/to.db" and "sqlite:path/to.db" are accepted.

    Args:
        dsn: The connection string.

    Returns:
        The database path (e.g. ":memory:" or "/tmp/app.db").
    """
    _, rest = split_connection_string(dsn)
    if rest.startswith("//"):
        rest = rest[2:]
    if not rest:
        raise UsageError(f"Invalid connection string '{dsn}': missing database path")
    return rest


def parse_network_connection_string(dsn: str) -> Dict[str, str]:
    """
    Return the `key=value` pairs of a network connection string.

    Args:
        dsn: A string such as "mysql:host=localhost;port=3306;dbname=test;charset=utf8mb4".

    Returns:
        A dictionary of the parameters, e.g. {"host": "localhost", "port": "3306", ...}.

    Raises:
        UsageError: If a segment isn't a `key=value` pair.
    """
    _, rest = split_connection_string(dsn)
    params = {}
    for segment in rest.split(";"):
        segment = segment.strip()
        if not segment:
            continue
        key, sep, value = segment.partition("=")
        if not sep or not key.strip():
            raise UsageError(f"Invalid connection string '{dsn}': malformed segment '{segment}'")
        params[key.strip().lower()] = value.strip()
    return params


SECRET_KEYS = ("password", "pass", "pwd")

MASK = "******"


def mask_connection_string(dsn: str) -> str:
    """
    Hide the value of any password segment in a connection string.

    Args:
        dsn: A connection string, possibly carrying a `password=...` segment.

    Returns:
        The same string with secret values replaced by a mask.
    """
    segments = []
    for segment in dsn.split(";"):
        key, sep, value = segment.partition("=")
        # The first segment still carries the "driver:" prefix
        bare_key = key.rpartition(":")[2].strip().lower()
        if sep and value and bare_key in SECRET_KEYS:
            segment = f"{key}={MASK}"
        segments.append(segment)
    return ";".join(segments)
