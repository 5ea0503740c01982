##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
Module of all SeedDB-specific exception types.

Every error carries a numeric `code` that mirrors HTTP status semantics so an
enclosing framework can turn it straight into a response:

- `UsageError` is the "bad request" class: the caller broke the helper's contract.
- `DriverError` is the "internal" class: the underlying database reported a failure.
  The driver's own error code is kept when it is numeric.
"""

from http import HTTPStatus
from typing import Any


__all__ = (
    "SeedDBError",
    "UsageError",
    "DriverError",
    "DriverNotSupportedError",
    "numeric_code",
)


def numeric_code(code: Any, default: int) -> int:
    """
    Normalize an error code reported by a driver.

    Integers are kept as-is and strings made only of digits (e.g. the
    SQLSTATE class "23000") are converted. Anything else falls back to `default`.

    Args:
        code: The code reported by the driver, if any.
        default: The code to use when `code` isn't numeric.

    Returns:
        An integer error code.
    """
    if isinstance(code, bool):
        return default
    if isinstance(code, int):
        return code
    if isinstance(code, str) and code.strip().isdigit():
        return int(code.strip())
    return default


class SeedDBError(Exception):
    """
    Base class for every error raised by SeedDB.

    Attributes:
        message: The human readable error message.
        code: Numeric classification of the error.
    """

    default_code: int = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str, code: int = None):
        super().__init__(message)
        self.message = message
        self.code = int(self.default_code if code is None else code)


class UsageError(SeedDBError):
    """
    Exception for caller-side contract violations such as an empty table
    name, empty data, invalid limits, a missing connection or an empty query.
    Never retried.
    """

    default_code = HTTPStatus.BAD_REQUEST


class DriverError(SeedDBError):
    """
    Exception wrapping a failure reported by the underlying database driver
    (connection refused, malformed SQL, constraint violation, ...).
    """

    default_code = HTTPStatus.INTERNAL_SERVER_ERROR

    @classmethod
    def from_exception(cls, exc: Exception, code: Any = None) -> "DriverError":
        """
        Build a `DriverError` from a driver exception.

        Args:
            exc: The exception raised by the driver.
            code: The code reported by the driver for `exc`, if any.

        Returns:
            A `DriverError` carrying the original message and a numeric code.
        """
        return cls(str(exc), numeric_code(code, HTTPStatus.INTERNAL_SERVER_ERROR))


class DriverNotSupportedError(UsageError):
    """
    Exception to signal that the configured driver name isn't registered.
    """
