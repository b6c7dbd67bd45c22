"""Data models for ``salarylens``.

Pipeline snapshots (validated series, aligned datasets, computed series) are
frozen ``dataclass`` instances holding tuples: every re-validation, source
switch or parameter change builds new snapshots instead of patching old ones.

User-supplied scenario parameters are a Pydantic model so that coercion and
range checks happen in one place at the edge.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from .errors import ErrorKind
from .months import Month, is_valid_month

# ---------------------------------------------------------------------------
# Validated series
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SeriesPoint:
    month: Month
    value: float


@dataclass(frozen=True, slots=True)
class ValidatedSeries:
    """An ascending, gap-free, duplicate-free sequence of :class:`SeriesPoint`.

    Instances are only produced by
    :func:`salarylens.validation.validate_series` (or derived from validated
    instances), which enforces the ordering invariant.
    """

    label: str
    points: tuple[SeriesPoint, ...]

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[SeriesPoint]:
        return iter(self.points)

    @property
    def months(self) -> tuple[Month, ...]:
        return tuple(p.month for p in self.points)

    @property
    def values(self) -> tuple[float, ...]:
        return tuple(p.value for p in self.points)

    @property
    def first_month(self) -> Month | None:
        return self.points[0].month if self.points else None

    @property
    def last_month(self) -> Month | None:
        return self.points[-1].month if self.points else None

    def value_at(self, month: Month) -> float | None:
        """Return the value recorded for ``month`` or ``None`` when absent."""

        if not self.points or not is_valid_month(month):
            return None
        # Contiguity lets the position be computed from the month distance.
        first = self.points[0].month
        pos = (int(month[:4]) - int(first[:4])) * 12 + int(month[5:7]) - int(first[5:7])
        if 0 <= pos < len(self.points) and self.points[pos].month == month:
            return self.points[pos].value
        return None

    def to_payload(self, value_field: str) -> dict[str, Any]:
        """Serialize back to the ``{"series": [...]}`` JSON shape."""

        return {"series": [{"month": p.month, value_field: p.value} for p in self.points]}


# ---------------------------------------------------------------------------
# Inflation collections
# ---------------------------------------------------------------------------


class InflationSource(StrEnum):
    """Keys of an :class:`InflationCollection`.

    ``TUIK`` is the primary (official) source, ``ENAG`` the secondary
    (independent) source and ``AVG`` their month-by-month mean. ``DEFAULT``
    is used when the payload carries a single unnamed series.
    """

    DEFAULT = "default"
    TUIK = "TUIK"
    ENAG = "ENAG"
    AVG = "AVG"


@dataclass(frozen=True, slots=True)
class InflationCollection:
    series: Mapping[InflationSource, ValidatedSeries]

    def __contains__(self, source: object) -> bool:
        return source in self.series

    def __getitem__(self, source: InflationSource) -> ValidatedSeries:
        return self.series[source]

    @property
    def is_default(self) -> bool:
        return InflationSource.DEFAULT in self.series

    def available(self) -> tuple[InflationSource, ...]:
        """Present sources in declaration order."""

        return tuple(s for s in InflationSource if s in self.series)


# ---------------------------------------------------------------------------
# Alignment
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AlignedDataset:
    """Parallel, equal-length sequences over a contiguous ascending month range."""

    months: tuple[Month, ...] = ()
    inflation_pct: tuple[float, ...] = ()
    usdtry: tuple[float, ...] = ()

    def __post_init__(self) -> None:
        if not (len(self.months) == len(self.inflation_pct) == len(self.usdtry)):
            raise ValueError(
                "AlignedDataset sequences must have equal length: "
                f"months={len(self.months)} inflation_pct={len(self.inflation_pct)} "
                f"usdtry={len(self.usdtry)}"
            )

    def __len__(self) -> int:
        return len(self.months)

    @property
    def is_empty(self) -> bool:
        return not self.months


@dataclass(frozen=True, slots=True)
class AlignmentWarning:
    """A non-fatal alignment condition (``NoOverlap`` or ``Truncated``)."""

    kind: ErrorKind
    message: str
    discarded: int = 0


@dataclass(frozen=True, slots=True)
class AlignmentResult:
    dataset: AlignedDataset
    warnings: tuple[AlignmentWarning, ...] = ()

    @property
    def warning(self) -> str | None:
        if not self.warnings:
            return None
        return " ".join(w.message for w in self.warnings)


# ---------------------------------------------------------------------------
# Computation results
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ComputedSeries:
    """Derived per-month series; all fractions are unscaled (0.1 == 10%)."""

    cpi: tuple[float, ...]
    cum_inflation: tuple[float, ...]
    required_salary: tuple[float, ...]
    actual_salary: tuple[float, ...]
    real_salary: tuple[float, ...]
    gap_pct: tuple[float, ...]
    usd_salary: tuple[float, ...]
    required_raise_today_pct: float


@dataclass(frozen=True, slots=True)
class ComputedRow:
    """One month of the table/CSV view.

    ``inflation_pct`` is capped to ±50 for display; ``inflation_pct_raw`` is
    the value the computation used.
    """

    month: Month
    inflation_pct_raw: float
    inflation_pct: float
    cpi: float
    cum_inflation: float
    nominal: float
    required: float
    gap_pct: float
    real: float
    usdtry: float
    usd: float

    @property
    def capped(self) -> bool:
        return self.inflation_pct != self.inflation_pct_raw


@dataclass(frozen=True, slots=True)
class SummaryMetrics:
    cum_inflation_latest: float
    required_raise_today_pct: float
    usd_salary_latest: float
    purchasing_power_gap_pct: float


# ---------------------------------------------------------------------------
# Scenario inputs
# ---------------------------------------------------------------------------

MAX_WHAT_IF_PCT: float = 200.0


def clamp_what_if_pct(value: float) -> float:
    """Clamp a what-if raise percentage into ``[0, 200]``."""

    if not math.isfinite(value):
        raise ValueError("what-if percentage must be a finite number")
    return max(0.0, min(MAX_WHAT_IF_PCT, value))


class Scenario(BaseModel):
    """User-supplied salary scenario.

    ``start_month`` defaults to the first aligned month and ``what_if_month``
    to the last one; both are resolved against the dataset at run time.
    ``what_if_pct`` is clamped into ``[0, 200]`` rather than rejected.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    salary: float
    start_month: str | None = None
    what_if_month: str | None = None
    what_if_pct: float = 0.0

    @field_validator("salary")
    @classmethod
    def _salary_positive(cls, v: float) -> float:
        if not math.isfinite(v) or v <= 0:
            raise ValueError("salary must be a positive number")
        return v

    @field_validator("start_month", "what_if_month")
    @classmethod
    def _month_format(cls, v: str | None) -> str | None:
        if v is None or v == "":
            return None
        if not is_valid_month(v):
            raise ValueError(f"month must be formatted YYYY-MM: {v!r}")
        return v

    @field_validator("what_if_pct")
    @classmethod
    def _clamp_pct(cls, v: float) -> float:
        return clamp_what_if_pct(v)


@dataclass(frozen=True, slots=True)
class ScenarioResult:
    """Everything the presentation/export layer needs for one scenario run."""

    dataset: AlignedDataset
    series: ComputedSeries
    rows: tuple[ComputedRow, ...]
    summary: SummaryMetrics
    what_if_month: Month
