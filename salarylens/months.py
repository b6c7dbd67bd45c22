"""Calendar-month helpers for ``YYYY-MM`` strings.

Months are plain ``str`` values. Because both fields are fixed-width and
zero-padded, lexicographic comparison is a valid total order, so no parsing is
needed to sort or compare them.
"""

from __future__ import annotations

import re

from .errors import InvalidMonthError, RangeTooLargeError

type Month = str
"""A calendar month formatted as ``YYYY-MM`` (``01 <= MM <= 12``)."""

# Upper bound on materialized month ranges (~83 years).
MAX_RANGE_MONTHS: int = 1000

_MONTH_RE = re.compile(r"^\d{4}-\d{2}$")


def is_valid_month(value: object) -> bool:
    if not isinstance(value, str) or not _MONTH_RE.fullmatch(value):
        return False
    return 1 <= int(value[5:7]) <= 12


def compare_months(a: Month, b: Month) -> int:
    """Return ``-1``, ``0`` or ``1`` as ``a`` sorts before, equal to, or after ``b``."""

    return (a > b) - (a < b)


def next_month(month: Month) -> Month:
    """Return the calendar successor of ``month`` (December wraps to January)."""

    if not is_valid_month(month):
        raise InvalidMonthError(f"Invalid month: {month!r}", month=str(month))
    year, mon = int(month[:4]), int(month[5:7])
    if mon == 12:
        year, mon = year + 1, 1
    else:
        mon += 1
    return f"{year:04d}-{mon:02d}"


def month_range(start: Month, end: Month) -> list[Month]:
    """Materialize the inclusive ascending range ``start..end``.

    Returns an empty list when ``start`` sorts after ``end``. Raises
    :class:`~salarylens.errors.RangeTooLargeError` when the range would hold
    more than :data:`MAX_RANGE_MONTHS` entries.
    """

    for m in (start, end):
        if not is_valid_month(m):
            raise InvalidMonthError(f"Invalid month: {m!r}", month=str(m))
    if start > end:
        return []

    out = [start]
    while out[-1] != end:
        if len(out) >= MAX_RANGE_MONTHS:
            raise RangeTooLargeError(
                f"Month range {start} … {end} exceeds {MAX_RANGE_MONTHS} months",
                month=end,
            )
        out.append(next_month(out[-1]))
    return out


__all__ = [
    "MAX_RANGE_MONTHS",
    "Month",
    "compare_months",
    "is_valid_month",
    "month_range",
    "next_month",
]
