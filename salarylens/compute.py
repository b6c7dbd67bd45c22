"""Salary-versus-inflation series computation.

Index convention
----------------
The compounding index starts from a 100-point baseline and month 0's own
inflation rate is already applied::

    CPI[0] = 100 * (1 + infl[0] / 100)
    CPI[i] = CPI[i - 1] * (1 + infl[i] / 100)

so ``CPI[0]`` equals 100 only when the first month's rate is zero. Each
labelled month is treated as still subject to its own price change.

No rounding is applied here. Formatting and display caps belong to
:func:`build_rows` and the CSV/CLI layers.
"""

from __future__ import annotations

import math

from .models import (
    AlignedDataset,
    ComputedRow,
    ComputedSeries,
    SummaryMetrics,
    clamp_what_if_pct,
)

CPI_BASELINE: float = 100.0

# Display-only cap for monthly inflation; computation uses raw values.
DISPLAY_INFLATION_CAP: float = 50.0


def compute_series(
    dataset: AlignedDataset,
    salary: float,
    what_if_pct: float,
    what_if_index: int,
) -> ComputedSeries:
    """Compute the derived series for ``dataset``.

    Parameters
    ----------
    dataset:
        Aligned inflation/FX data; index 0 is the baseline month.
    salary:
        Base monthly salary ``S0`` (must be > 0).
    what_if_pct:
        Hypothetical one-time raise in percent, applied from ``what_if_index``
        onward (a step, not interpolated), clamped to ``[0, 200]``.
    what_if_index:
        Zero-based month index where the raise takes effect. Negative values
        are treated as 0; values past the end leave the salary unraised.
    """

    n = len(dataset)
    if n == 0:
        raise ValueError("cannot compute over an empty dataset")
    if not math.isfinite(salary) or salary <= 0:
        raise ValueError("salary must be a positive number")
    what_if_pct = clamp_what_if_pct(what_if_pct)
    what_if_index = max(0, what_if_index)

    cpi: list[float] = []
    level = CPI_BASELINE
    for pct in dataset.inflation_pct:
        level *= 1 + pct / 100
        cpi.append(level)

    raised = salary * (1 + what_if_pct / 100)
    actual = [raised if i >= what_if_index else salary for i in range(n)]

    ratio = [v / CPI_BASELINE for v in cpi]
    cum_inflation = [r - 1 for r in ratio]
    required = [salary * r for r in ratio]
    real = [a / r for a, r in zip(actual, ratio)]
    gap = [a / req - 1 for a, req in zip(actual, required)]
    usd = [a / fx for a, fx in zip(actual, dataset.usdtry)]

    return ComputedSeries(
        cpi=tuple(cpi),
        cum_inflation=tuple(cum_inflation),
        required_salary=tuple(required),
        actual_salary=tuple(actual),
        real_salary=tuple(real),
        gap_pct=tuple(gap),
        usd_salary=tuple(usd),
        required_raise_today_pct=required[-1] / actual[-1] - 1,
    )


def build_rows(dataset: AlignedDataset, series: ComputedSeries) -> tuple[ComputedRow, ...]:
    """Zip ``dataset`` and ``series`` into per-month rows for table/CSV output."""

    cap = DISPLAY_INFLATION_CAP
    return tuple(
        ComputedRow(
            month=month,
            inflation_pct_raw=raw,
            inflation_pct=max(-cap, min(cap, raw)),
            cpi=series.cpi[i],
            cum_inflation=series.cum_inflation[i],
            nominal=series.actual_salary[i],
            required=series.required_salary[i],
            gap_pct=series.gap_pct[i],
            real=series.real_salary[i],
            usdtry=dataset.usdtry[i],
            usd=series.usd_salary[i],
        )
        for i, (month, raw) in enumerate(zip(dataset.months, dataset.inflation_pct))
    )


def summarize(series: ComputedSeries) -> SummaryMetrics:
    """Latest-month summary figures (the four headline cards)."""

    return SummaryMetrics(
        cum_inflation_latest=series.cum_inflation[-1],
        required_raise_today_pct=series.required_raise_today_pct,
        usd_salary_latest=series.usd_salary[-1],
        purchasing_power_gap_pct=series.actual_salary[-1] / series.required_salary[-1] - 1,
    )


__all__ = [
    "CPI_BASELINE",
    "DISPLAY_INFLATION_CAP",
    "build_rows",
    "clamp_what_if_pct",
    "compute_series",
    "summarize",
]
