"""Runtime settings resolved from environment variables.

The CLI loads a ``.env`` file from the working directory (``python-dotenv``,
never overriding variables that are already set) before calling
:meth:`Settings.from_env`.

Environment variables
---------------------
``SALARYLENS_INFLATION_DATA``
    Default inflation payload location (file path or ``http(s)://`` URL).
``SALARYLENS_USDTRY_DATA``
    Default USD/TRY payload location.
``SALARYLENS_SOURCE``
    Preferred inflation source (``tuik``, ``enag`` or ``avg``).
``SALARYLENS_HTTP_TIMEOUT``
    Timeout in seconds for URL reads (default 30).
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, field_validator

from .models import InflationSource
from .sources import parse_source_name

INFLATION_DATA_ENV = "SALARYLENS_INFLATION_DATA"
USDTRY_DATA_ENV = "SALARYLENS_USDTRY_DATA"
SOURCE_ENV = "SALARYLENS_SOURCE"
HTTP_TIMEOUT_ENV = "SALARYLENS_HTTP_TIMEOUT"

DEFAULT_HTTP_TIMEOUT: float = 30.0


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    inflation_data: str | None = None
    usdtry_data: str | None = None
    source: InflationSource | None = None
    http_timeout: float = DEFAULT_HTTP_TIMEOUT

    @field_validator("inflation_data", "usdtry_data")
    @classmethod
    def _blank_to_none(cls, v: str | None) -> str | None:
        return v or None

    @field_validator("source", mode="before")
    @classmethod
    def _parse_source(cls, v: object) -> InflationSource | None:
        if v is None or isinstance(v, InflationSource):
            return v
        if isinstance(v, str):
            if not v.strip():
                return None
            parsed = parse_source_name(v)
            if parsed is None:
                raise ValueError(f"unknown inflation source: {v!r}")
            return parsed
        raise ValueError("source must be a string")

    @field_validator("http_timeout")
    @classmethod
    def _timeout_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout must be > 0")
        return v

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        timeout_raw = (env.get(HTTP_TIMEOUT_ENV) or "").strip()
        return cls(
            inflation_data=env.get(INFLATION_DATA_ENV),
            usdtry_data=env.get(USDTRY_DATA_ENV),
            source=env.get(SOURCE_ENV),
            http_timeout=timeout_raw or DEFAULT_HTTP_TIMEOUT,
        )


__all__ = ["Settings"]
