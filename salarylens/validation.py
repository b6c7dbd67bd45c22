"""Parsing and validation of raw monthly time series.

One validator serves both payload kinds; a :class:`SeriesKind` supplies the
value field name and the constraint. Validation is fail-fast: the first
offending element raises a :class:`~salarylens.errors.SeriesError` subclass
and no partial result is returned.
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from .errors import (
    DuplicateMonthError,
    InvalidMonthError,
    InvalidValueError,
    MalformedElementError,
    MalformedJsonError,
    MonthGapError,
    UnrecognizedSchemaError,
)
from .logging_setup import get_logger
from .models import SeriesPoint, ValidatedSeries
from .months import is_valid_month, next_month

_logger = get_logger("salarylens.validation")

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

MAX_ABS_INFLATION_PCT: float = 50.0


@dataclass(frozen=True, slots=True)
class SeriesKind:
    """Value field and constraint for one payload kind."""

    label: str
    value_field: str
    constraint: Callable[[float], bool]
    constraint_text: str


INFLATION = SeriesKind(
    label="inflation",
    value_field="inflationPct",
    constraint=lambda v: abs(v) <= MAX_ABS_INFLATION_PCT,
    constraint_text=f"must be within ±{MAX_ABS_INFLATION_PCT:g}%",
)

USDTRY = SeriesKind(
    label="USD/TRY",
    value_field="usdtry",
    constraint=lambda v: v > 0,
    constraint_text="must be > 0",
)


def _coerce_number(raw: Any) -> float | None:
    """Return ``raw`` as a finite float, or ``None`` when it is not numeric.

    Ints, floats and plain decimal strings (``"12.5"``, ``"-3"``, ``"1e3"``)
    are accepted. Booleans, ``None``, blank strings and Python-only literals
    such as ``"1_000"`` or ``"inf"`` are rejected.
    """

    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, (int, float)):
        try:
            v = float(raw)
        except OverflowError:
            return None
    elif isinstance(raw, str):
        s = raw.strip()
        if not _DECIMAL_RE.fullmatch(s):
            return None
        v = float(s)
    else:
        return None
    return v if math.isfinite(v) else None


def validate_series(items: Any, kind: SeriesKind, *, label: str | None = None) -> ValidatedSeries:
    """Validate a raw ``[{month, <value_field>}, ...]`` array.

    Steps
    -----
    1. Each element must be a JSON object (``MalformedElement``, 1-based index).
    2. ``month`` must be ``YYYY-MM`` (``InvalidMonth``).
    3. The value must coerce to a finite number satisfying ``kind.constraint``
       (``InvalidValue``, reported with its month).
    4. Elements are sorted by month; adjacent equal months are duplicates
       (``DuplicateMonth``) and any skipped month is a gap (``MonthGap``,
       reporting the missing month).
    """

    name = label or kind.label
    if not isinstance(items, list):
        raise UnrecognizedSchemaError(f"{name} series must be an array")

    points: list[SeriesPoint] = []
    for pos, item in enumerate(items, start=1):
        if not isinstance(item, Mapping):
            raise MalformedElementError(f"{name} series item #{pos} must be an object", index=pos)
        month = item.get("month")
        if not is_valid_month(month):
            raise InvalidMonthError(
                f"Invalid month in {name} at item #{pos}: {month!r}",
                index=pos,
                month=month if isinstance(month, str) else None,
            )
        value = _coerce_number(item.get(kind.value_field))
        if value is None:
            raise InvalidValueError(
                f"{name} {kind.value_field} must be a number at {month}", index=pos, month=month
            )
        if not kind.constraint(value):
            raise InvalidValueError(
                f"{name} {kind.value_field} {kind.constraint_text} at {month} (got {value:g})",
                index=pos,
                month=month,
            )
        points.append(SeriesPoint(month=month, value=value))

    points.sort(key=lambda p: p.month)

    # Duplicates are reported before gaps, whichever comes first by month.
    pairs = list(zip(points, points[1:]))
    for prev, cur in pairs:
        if cur.month == prev.month:
            raise DuplicateMonthError(
                f"{name} months contain duplicates: {cur.month}", month=cur.month
            )
    for prev, cur in pairs:
        expected = next_month(prev.month)
        if cur.month != expected:
            raise MonthGapError(
                f"{name} months have gaps: expected {expected} after {prev.month}",
                month=expected,
            )

    series = ValidatedSeries(label=name, points=tuple(points))
    _logger.debug(
        "validated %s series: %d months (%s … %s)",
        name,
        len(series),
        series.first_month,
        series.last_month,
    )
    return series


def parse_json(text: str, *, label: str) -> Any:
    try:
        return json.loads(text)
    except ValueError as e:
        raise MalformedJsonError(f"{label} JSON is malformed: {e}") from e


def parse_usdtry(text: str) -> ValidatedSeries:
    """Parse and validate a ``{"series": [{month, usdtry}]}`` payload."""

    data = parse_json(text, label=USDTRY.label)
    if not isinstance(data, Mapping) or not isinstance(data.get("series"), list):
        raise UnrecognizedSchemaError(f"{USDTRY.label} JSON must have a series array")
    return validate_series(data["series"], USDTRY)


__all__ = [
    "INFLATION",
    "MAX_ABS_INFLATION_PCT",
    "USDTRY",
    "SeriesKind",
    "parse_json",
    "parse_usdtry",
    "validate_series",
]
