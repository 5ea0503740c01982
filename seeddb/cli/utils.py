##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
Utility functions to support SeedDB CLI command handlers.

Every command that talks to a database accepts the same connection options. Values not
given on the command line fall back to `SEEDDB_*` environment variables and then to the
`ConnectionConfig` defaults.
"""

import logging
from argparse import ArgumentParser, Namespace
from typing import Dict, List, Optional

from seeddb.config import ConnectionConfig
from seeddb.db.database import Database


LOG = logging.getLogger("seeddb")

# Maps CLI destinations to `ConnectionConfig` option keys
CONNECTION_OPTIONS = {
    "driver": "driver",
    "host": "host",
    "port": "port",
    "base": "base",
    "charset": "charset",
    "user": "user",
    "password": "pass",
    "dsn": "dsn",
}


def add_connection_arguments(parser: ArgumentParser):
    """
    Add the connection options shared by every database command.

    Args:
        parser: The command parser to extend.
    """
    group = parser.add_argument_group("connection options")
    group.add_argument("--driver", type=str, default=None, help="Driver name, e.g. mysql, sqlite [env: SEEDDB_DRIVER]")
    group.add_argument("--host", type=str, default=None, help="Server address [env: SEEDDB_HOST]")
    group.add_argument("--port", type=str, default=None, help="Server port [env: SEEDDB_PORT]")
    group.add_argument(
        "--base", type=str, default=None, help="Database name, or file path for sqlite [env: SEEDDB_BASE]"
    )
    group.add_argument("--charset", type=str, default=None, help="Connection charset [env: SEEDDB_CHARSET]")
    group.add_argument("--user", type=str, default=None, help="User name [env: SEEDDB_USER]")
    group.add_argument("--password", type=str, default=None, help="Password [env: SEEDDB_PASS]")
    group.add_argument("--dsn", type=str, default=None, help="Raw connection string [env: SEEDDB_DSN]")


def get_connection_config(args: Namespace) -> ConnectionConfig:
    """
    Build the connection settings from the environment and the parsed CLI arguments.

    Args:
        args: Parsed CLI arguments.

    Returns:
        The resulting `ConnectionConfig`.
    """
    config = ConnectionConfig.from_env()
    overrides = {
        key: getattr(args, dest) for dest, key in CONNECTION_OPTIONS.items() if getattr(args, dest, None) is not None
    }
    # Credentials given on the command line override each other independently
    user, password = overrides.pop("user", None), overrides.pop("pass", None)
    config.update(overrides)
    config.set_credential(user, password)
    LOG.debug(f"Connection config: {config}")
    return config


def get_database(args: Namespace) -> Database:
    """
    Return a `Database` configured from the parsed CLI arguments.

    Args:
        args: Parsed CLI arguments.

    Returns:
        A disconnected `Database`.
    """
    return Database(get_connection_config(args))


def parse_key_value_pairs(pairs: Optional[List[str]], option: str) -> Dict[str, str]:
    """
    Parse a list of "KEY=VALUE" strings into an ordered dictionary.

    Only the first '=' separates the key from the value, so values may contain '='.

    Args:
        pairs: The strings given on the command line.
        option: The option name, used in error messages.

    Returns:
        A dictionary preserving the order of `pairs`.

    Raises:
        ValueError: If an entry has no '=' or an empty key.
    """
    result: Dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"{option} requires entries of the form KEY=VALUE, got '{pair}'.")
        result[key.strip()] = value
    return result
