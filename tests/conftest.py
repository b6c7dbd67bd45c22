"""Pytest configuration for test isolation.

The CLI and :class:`salarylens.config.Settings` read ``SALARYLENS_*``
environment variables (and a ``.env`` in the working directory). A developer
shell or ``.env`` with those set would leak default payload locations or a
preferred source into tests, so every test starts from a clean environment
and runs inside its own temporary working directory.
"""

from __future__ import annotations

import os

import pytest

_ENV_VARS = (
    "SALARYLENS_INFLATION_DATA",
    "SALARYLENS_USDTRY_DATA",
    "SALARYLENS_SOURCE",
    "SALARYLENS_HTTP_TIMEOUT",
    "SALARYLENS_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(os.fspath(workdir))
