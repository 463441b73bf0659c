"""Unit tests for structured console logging."""

import pytest

from core import logger


@pytest.fixture
def quiet():
    previous = logger.is_verbose()
    logger.set_verbose(False)
    yield
    logger.set_verbose(previous)


def test_ok_line_has_prefix_and_data(capsys, quiet):
    logger.log_ok("Target accepted", {"az": 10})
    out = capsys.readouterr().out
    assert "OK" in out
    assert "Target accepted | {'az': 10}" in out


def test_serial_hidden_unless_verbose(capsys, quiet):
    logger.log_serial(">>>", "getpos;")
    assert capsys.readouterr().out == ""

    logger.set_verbose(True)
    logger.log_serial(">>>", "getpos;")
    assert "'getpos;'" in capsys.readouterr().out


def test_retry_hidden_unless_verbose(capsys, quiet):
    logger.log_retry("Read timeout, attempt 1/5")
    assert capsys.readouterr().out == ""
