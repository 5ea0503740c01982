##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
Tests for the `utils.py` file of the `cli/` folder.
"""

from argparse import ArgumentParser, Namespace

import pytest

from seeddb.cli.utils import (
    CONNECTION_OPTIONS,
    add_connection_arguments,
    get_connection_config,
    get_database,
    parse_key_value_pairs,
)


def make_args(**kwargs) -> Namespace:
    """
    Build a `Namespace` with every connection option unset except `kwargs`.

    Returns:
        The CLI arguments.
    """
    options = {dest: None for dest in CONNECTION_OPTIONS}
    options.update(kwargs)
    return Namespace(**options)


def test_add_connection_arguments():
    """
    Test that the connection options are parsed and default to None.
    """
    parser = ArgumentParser()
    add_connection_arguments(parser)

    args = parser.parse_args(["--driver", "sqlite", "--base", ":memory:", "--password", "pw"])
    assert args.driver == "sqlite"
    assert args.base == ":memory:"
    assert args.password == "pw"
    assert args.host is None
    assert args.dsn is None


def test_flags_override_environment(monkeypatch: pytest.MonkeyPatch):
    """
    Test that flags win over `SEEDDB_*` variables, which win over the defaults.

    Args:
        monkeypatch: PyTest monkeypatch fixture.
    """
    monkeypatch.setenv("SEEDDB_HOST", "env-host")
    monkeypatch.setenv("SEEDDB_BASE", "env-base")

    config = get_connection_config(make_args(base="flag-base"))

    assert config.host == "env-host"
    assert config.base == "flag-base"
    assert config.port == "3306"


def test_credentials_apply_independently(monkeypatch: pytest.MonkeyPatch):
    """
    Test that a password flag works together with a user taken from the environment.

    Args:
        monkeypatch: PyTest monkeypatch fixture.
    """
    monkeypatch.setenv("SEEDDB_USER", "app")
    config = get_connection_config(make_args(password="secret"))
    assert (config.user, config.password) == ("app", "secret")


def test_get_database():
    """
    Test that `get_database` returns a disconnected `Database` with the resolved settings.
    """
    database = get_database(make_args(driver="sqlite", base=":memory:"))
    assert not database.is_connected
    assert database.get_connection_string() == "sqlite://:memory:"


def test_parse_key_value_pairs():
    """
    Test that pairs keep their order and only the first '=' splits.
    """
    assert parse_key_value_pairs(["b=2", " a = x=y"], "--order") == {"b": "2", "a": " x=y"}
    assert parse_key_value_pairs(None, "--order") == {}


@pytest.mark.parametrize("pairs", [["novalue"], ["=x"]])
def test_parse_key_value_pairs_invalid(pairs: list):
    """
    Test that entries without a key or '=' are rejected.

    Args:
        pairs: Malformed entries.
    """
    with pytest.raises(ValueError, match="KEY=VALUE"):
        parse_key_value_pairs(pairs, "--order")
