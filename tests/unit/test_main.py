##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
Tests for the `main.py` module.
"""

import logging
import sys

import pytest
from _pytest.capture import CaptureFixture
from pytest_mock import MockerFixture

from seeddb import main


def test_main_without_arguments_prints_help(mocker: MockerFixture, capsys: CaptureFixture):
    """
    Test that running `seeddb` alone prints the help and returns 1.

    Args:
        mocker: PyTest mocker fixture.
        capsys: PyTest capsys fixture.
    """
    mocker.patch.object(sys, "argv", ["seeddb"])
    assert main.main() == 1
    assert "usage: seeddb" in capsys.readouterr().out


def test_main_runs_command(mocker: MockerFixture, capsys: CaptureFixture):
    """
    Test that a successful command exits with status 0 after logging is set up.

    Args:
        mocker: PyTest mocker fixture.
        capsys: PyTest capsys fixture.
    """
    setup_mock = mocker.patch("seeddb.main.setup_logging")
    mocker.patch.object(sys, "argv", ["seeddb", "-lvl", "debug", "exec", "SELECT 1 AS one", "--driver", "sqlite"])
    mocker.patch.dict("os.environ", {"SEEDDB_BASE": ":memory:"})

    with pytest.raises(SystemExit) as excinfo:
        main.main()

    assert excinfo.value.code is None
    setup_mock.assert_called_once_with(logger=logging.getLogger("seeddb"), log_level="DEBUG", colors=True)
    assert "1 row(s) returned." in capsys.readouterr().out


def test_main_reports_errors(mocker: MockerFixture):
    """
    Test that a failing command is logged and exits with status 1.

    Args:
        mocker: PyTest mocker fixture.
    """
    mocker.patch("seeddb.main.setup_logging")
    error_log = mocker.patch.object(main.LOG, "error")
    mocker.patch.object(
        sys, "argv", ["seeddb", "exec", "SELECT * FROM missing", "--driver", "sqlite", "--base", ":memory:"]
    )

    with pytest.raises(SystemExit) as excinfo:
        main.main()

    assert excinfo.value.code == 1
    assert "no such table: missing" in error_log.call_args.args[0]
