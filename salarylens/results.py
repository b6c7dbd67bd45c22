"""Tagged results for callers that prefer values over exceptions.

``attempt(fn, ...)`` runs a pipeline step and converts an expected
:class:`~salarylens.errors.SeriesError` into :class:`Err`; any other exception
propagates unchanged.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .errors import ErrorKind, SeriesError


@dataclass(frozen=True)
class Ok[T]:
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Err:
    kind: ErrorKind
    message: str
    error: SeriesError

    @property
    def ok(self) -> bool:
        return False


type Result[T] = Ok[T] | Err


def attempt[T](fn: Callable[..., T], *args: Any, **kwargs: Any) -> Result[T]:
    try:
        return Ok(fn(*args, **kwargs))
    except SeriesError as e:
        return Err(kind=e.kind, message=e.message, error=e)


__all__ = ["Err", "Ok", "Result", "attempt"]
