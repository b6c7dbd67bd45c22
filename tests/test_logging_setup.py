import logging

import pytest

from salarylens import logging_setup
from salarylens.logging_setup import _parse_level, get_logger


@pytest.mark.parametrize(
    ("level", "expected"),
    [
        (logging.DEBUG, logging.DEBUG),
        ("warning", logging.WARNING),
        (" 15 ", 15),
        ("nonsense", logging.INFO),
    ],
)
def test_parse_level(level, expected):
    assert _parse_level(level) == expected


def test_parse_level_reads_environment_when_unset(monkeypatch):
    monkeypatch.setenv("SALARYLENS_LOG_LEVEL", "ERROR")
    assert _parse_level(None) == logging.ERROR
    monkeypatch.delenv("SALARYLENS_LOG_LEVEL")
    assert _parse_level(None) == logging.INFO


def test_get_logger_is_silent_until_configured(monkeypatch):
    monkeypatch.setattr(logging_setup, "_CONFIGURED", False)
    pkg = logging.getLogger("salarylens")
    monkeypatch.setattr(pkg, "handlers", [])

    logger = get_logger("salarylens.validation")
    assert logger.name == "salarylens.validation"
    assert any(isinstance(h, logging.NullHandler) for h in pkg.handlers)
