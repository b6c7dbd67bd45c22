"""Alignment of the inflation and FX series on their common month range.

The computation window is the intersection of both series' coverage. Points
outside it are dropped and reported through a ``Truncated`` warning; disjoint
inputs produce an empty dataset plus a ``NoOverlap`` warning rather than an
exception, so callers can surface the message and skip computation.
"""

from __future__ import annotations

from .errors import AlignmentInconsistencyError, ErrorKind, MonthOutOfRangeError
from .logging_setup import get_logger
from .models import AlignedDataset, AlignmentResult, AlignmentWarning, ValidatedSeries
from .months import Month, month_range

_logger = get_logger("salarylens.alignment")

NO_OVERLAP_MESSAGE = "No overlapping months between series. Please provide matching ranges."


def align_by_common_months(inflation: ValidatedSeries, fx: ValidatedSeries) -> AlignmentResult:
    """Intersect ``inflation`` and ``fx`` by month.

    Returns an :class:`~salarylens.models.AlignmentResult` whose dataset spans
    ``max(first months) .. min(last months)``. The number of discarded points
    is ``len(inflation) + len(fx) - 2 * len(common)``.
    """

    if not len(inflation) or not len(fx):
        _logger.warning("alignment skipped: empty input series")
        return AlignmentResult(
            dataset=AlignedDataset(),
            warnings=(AlignmentWarning(ErrorKind.NO_OVERLAP, NO_OVERLAP_MESSAGE),),
        )

    start = max(inflation.points[0].month, fx.points[0].month)
    end = min(inflation.points[-1].month, fx.points[-1].month)
    if start > end:
        _logger.warning(
            "no overlapping months: %s ends %s, %s starts %s",
            inflation.label,
            inflation.last_month,
            fx.label,
            fx.first_month,
        )
        return AlignmentResult(
            dataset=AlignedDataset(),
            warnings=(AlignmentWarning(ErrorKind.NO_OVERLAP, NO_OVERLAP_MESSAGE),),
        )

    months = month_range(start, end)
    inflation_pct: list[float] = []
    usdtry: list[float] = []
    for m in months:
        infl_value = inflation.value_at(m)
        fx_value = fx.value_at(m)
        if infl_value is None or fx_value is None:
            raise AlignmentInconsistencyError(
                f"Month {m} missing after alignment; inputs must be continuous", month=m
            )
        inflation_pct.append(infl_value)
        usdtry.append(fx_value)

    dataset = AlignedDataset(
        months=tuple(months), inflation_pct=tuple(inflation_pct), usdtry=tuple(usdtry)
    )

    discarded = (len(inflation) + len(fx)) - 2 * len(months)
    warnings: tuple[AlignmentWarning, ...] = ()
    if discarded > 0:
        message = f"Using common range: {start} … {end} ({discarded} months truncated)."
        _logger.info(message)
        warnings = (AlignmentWarning(ErrorKind.TRUNCATED, message, discarded=discarded),)

    return AlignmentResult(dataset=dataset, warnings=warnings)


def trim_to_start(dataset: AlignedDataset, month: Month) -> AlignedDataset:
    """Return ``dataset`` re-based so that ``month`` becomes index 0."""

    try:
        idx = dataset.months.index(month)
    except ValueError:
        raise MonthOutOfRangeError(
            f"Start month {month} must be within the data range", month=month
        ) from None
    if idx == 0:
        return dataset
    return AlignedDataset(
        months=dataset.months[idx:],
        inflation_pct=dataset.inflation_pct[idx:],
        usdtry=dataset.usdtry[idx:],
    )


def clamp_month(dataset: AlignedDataset, month: Month) -> Month:
    """Clamp ``month`` into the dataset's month range (no-op on empty datasets)."""

    if dataset.is_empty:
        return month
    first, last = dataset.months[0], dataset.months[-1]
    if month < first:
        return first
    if month > last:
        return last
    return month


__all__ = ["align_by_common_months", "clamp_month", "trim_to_start"]
