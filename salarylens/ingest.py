"""Reading raw payload text from files or URLs.

This is the only I/O boundary in front of the pipeline. ``read_payloads`` is
the single suspension point: both payloads are fetched concurrently in worker
threads, after which everything downstream runs synchronously.
"""

from __future__ import annotations

import asyncio
import urllib.error
import urllib.request
from os import PathLike
from pathlib import Path

from .config import DEFAULT_HTTP_TIMEOUT
from .logging_setup import get_logger

_logger = get_logger("salarylens.ingest")


def _is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def read_payload_text(
    location: str | PathLike[str], *, timeout: float = DEFAULT_HTTP_TIMEOUT
) -> str:
    """Return the text at ``location`` (a filesystem path or ``http(s)://`` URL).

    File errors (``FileNotFoundError``, ``PermissionError``) propagate as-is;
    HTTP failures are raised as ``RuntimeError`` with the status and reason.
    """

    loc = str(location)
    if not _is_url(loc):
        _logger.debug("reading payload file %s", loc)
        return Path(loc).read_text(encoding="utf-8")

    _logger.debug("fetching payload %s", loc)
    req = urllib.request.Request(loc, headers={"Accept": "application/json"})
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            body = resp.read()
    except urllib.error.HTTPError as e:
        raise RuntimeError(f"HTTP error fetching {loc}: {e.code} {e.reason}") from e
    except urllib.error.URLError as e:
        raise RuntimeError(f"Failed to fetch {loc}: {e.reason}") from e
    return body.decode("utf-8")


async def read_payloads(
    inflation_location: str | PathLike[str],
    usdtry_location: str | PathLike[str],
    *,
    timeout: float = DEFAULT_HTTP_TIMEOUT,
) -> tuple[str, str]:
    """Read the inflation and USD/TRY payloads concurrently."""

    inflation_text, usdtry_text = await asyncio.gather(
        asyncio.to_thread(read_payload_text, inflation_location, timeout=timeout),
        asyncio.to_thread(read_payload_text, usdtry_location, timeout=timeout),
    )
    return inflation_text, usdtry_text


__all__ = ["read_payload_text", "read_payloads"]
