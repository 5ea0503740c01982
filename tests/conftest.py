##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
This module contains pytest fixtures to be used throughout the entire test suite.
"""

import logging
import os
from glob import glob

import pytest

from tests.fixture_types import FixtureModification


#######################################
# Loading in Module Specific Fixtures #
#######################################

fixture_glob = os.path.join("tests", "fixtures", "**", "*.py")
pytest_plugins = [
    fixture_file.replace(os.sep, ".").replace(".py", "")
    for fixture_file in glob(fixture_glob, recursive=True)
    if not fixture_file.endswith("__init__.py")
]


#######################################
######### Global Test Fixtures ########
#######################################


@pytest.fixture(autouse=True)
def clear_seeddb_env(monkeypatch: pytest.MonkeyPatch) -> FixtureModification:
    """
    Remove any `SEEDDB_*` environment variables so the developer's shell can't
    leak connection settings into the tests.

    Args:
        monkeypatch: PyTest monkeypatch fixture.
    """
    for name in list(os.environ):
        if name.startswith("SEEDDB_"):
            monkeypatch.delenv(name)


@pytest.fixture
def seeddb_caplog(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """
    The `caplog` fixture with the `seeddb` logger propagating to it.

    `setup_logging` turns propagation off, so tests that check log output re-enable it here.

    Args:
        caplog: PyTest caplog fixture.

    Returns:
        The `caplog` fixture, capturing DEBUG and above.
    """
    logger = logging.getLogger("seeddb")
    propagate = logger.propagate
    logger.propagate = True
    caplog.set_level(logging.DEBUG, logger="seeddb")
    yield caplog
    logger.propagate = propagate
