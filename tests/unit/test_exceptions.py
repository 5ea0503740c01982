##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
Tests for the `exceptions` package.
"""

import pytest

from seeddb.exceptions import DriverError, DriverNotSupportedError, SeedDBError, UsageError, numeric_code


@pytest.mark.parametrize(
    "code, expected",
    [(1064, 1064), ("23000", 23000), (" 42 ", 42), ("HY000", 500), (None, 500), (True, 500), (1.5, 500)],
)
def test_numeric_code(code, expected: int):
    """
    Test the normalization of driver error codes.

    Args:
        code: The code reported by a driver.
        expected: The normalized code.
    """
    assert numeric_code(code, 500) == expected


def test_default_codes():
    """
    Test the default code of each error class.
    """
    assert UsageError("bad").code == 400
    assert DriverError("broken").code == 500
    assert DriverNotSupportedError("nope").code == 400
    assert SeedDBError("base").code == 500


def test_hierarchy():
    """
    Test that every error can be caught as a `SeedDBError` and unknown drivers as usage errors.
    """
    assert issubclass(UsageError, SeedDBError)
    assert issubclass(DriverError, SeedDBError)
    assert issubclass(DriverNotSupportedError, UsageError)


def test_message_and_explicit_code():
    """
    Test that the message and an explicit code are kept.
    """
    error = UsageError("insert: Data cannot be empty", code=422)
    assert error.message == "insert: Data cannot be empty"
    assert str(error) == "insert: Data cannot be empty"
    assert error.code == 422


def test_driver_error_from_exception():
    """
    Test that a driver exception keeps its message and, when numeric, its code.
    """
    assert DriverError.from_exception(RuntimeError("Duplicate entry"), "1062").code == 1062
    error = DriverError.from_exception(RuntimeError("disk I/O error"), "HY000")
    assert error.code == 500
    assert error.message == "disk I/O error"
