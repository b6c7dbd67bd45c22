"""Pipeline orchestration for the ``salarylens`` package.

Each function is pure and returns a new immutable snapshot:

- :func:`load_dataset` parses both payloads, picks the active inflation source
  and aligns it with the FX series (a :class:`DatasetSnapshot`).
- :func:`switch_source` re-aligns an existing snapshot against a different
  inflation source without re-parsing.
- :func:`run_scenario` re-bases the aligned data to the scenario's start month
  and computes the derived series, table rows and summary.

The caller owns sequencing and keeps whichever snapshot is current.
"""

from __future__ import annotations

from dataclasses import dataclass

from .alignment import align_by_common_months, clamp_month, trim_to_start
from .compute import build_rows, compute_series, summarize
from .csv_export import to_csv
from .logging_setup import get_logger
from .models import (
    AlignedDataset,
    AlignmentResult,
    InflationCollection,
    InflationSource,
    Scenario,
    ScenarioResult,
    ValidatedSeries,
)
from .results import Result, attempt
from .sources import parse_inflation_collection, select_active_source
from .validation import parse_usdtry

_logger = get_logger("salarylens.api")


@dataclass(frozen=True, slots=True)
class DatasetSnapshot:
    collection: InflationCollection
    source: InflationSource
    fx: ValidatedSeries
    alignment: AlignmentResult

    @property
    def dataset(self) -> AlignedDataset:
        return self.alignment.dataset

    @property
    def warning(self) -> str | None:
        return self.alignment.warning


def load_dataset(
    inflation_text: str,
    usdtry_text: str,
    *,
    source: InflationSource | str | None = None,
) -> DatasetSnapshot:
    """Validate both payloads and align them on their common months.

    ``source`` is the preferred inflation source; see
    :func:`~salarylens.sources.select_active_source` for the fallback order.
    Validation failures raise :class:`~salarylens.errors.SeriesError`; a
    missing overlap is reported on the snapshot's ``alignment.warnings``.
    """

    collection = parse_inflation_collection(inflation_text)
    active = select_active_source(collection, source)
    fx = parse_usdtry(usdtry_text)
    alignment = align_by_common_months(collection[active], fx)
    _logger.info(
        "loaded dataset: source=%s aligned_months=%d", active.value, len(alignment.dataset)
    )
    return DatasetSnapshot(collection=collection, source=active, fx=fx, alignment=alignment)


def try_load_dataset(
    inflation_text: str,
    usdtry_text: str,
    *,
    source: InflationSource | str | None = None,
) -> Result[DatasetSnapshot]:
    """Tagged-result form of :func:`load_dataset`."""

    return attempt(load_dataset, inflation_text, usdtry_text, source=source)


def switch_source(snapshot: DatasetSnapshot, source: InflationSource | str) -> DatasetSnapshot:
    """Re-align ``snapshot`` against another inflation source of its collection."""

    active = select_active_source(snapshot.collection, source)
    if active == snapshot.source:
        return snapshot
    alignment = align_by_common_months(snapshot.collection[active], snapshot.fx)
    return DatasetSnapshot(
        collection=snapshot.collection, source=active, fx=snapshot.fx, alignment=alignment
    )


def run_scenario(dataset: AlignedDataset, scenario: Scenario) -> ScenarioResult:
    """Compute the salary scenario over ``dataset``.

    - The dataset is first re-based so ``scenario.start_month`` (default: the
      first aligned month) is index 0.
    - The what-if month defaults to the last month and is clamped into the
      re-based range.
    """

    if dataset.is_empty:
        raise ValueError("No overlapping months after alignment.")

    start = scenario.start_month or dataset.months[0]
    based = trim_to_start(dataset, start)

    what_if_month = clamp_month(based, scenario.what_if_month or based.months[-1])
    what_if_index = based.months.index(what_if_month)

    series = compute_series(based, scenario.salary, scenario.what_if_pct, what_if_index)
    return ScenarioResult(
        dataset=based,
        series=series,
        rows=build_rows(based, series),
        summary=summarize(series),
        what_if_month=what_if_month,
    )


def export_csv(dataset: AlignedDataset, scenario: Scenario) -> str:
    """Run ``scenario`` and render its rows as CSV text."""

    return to_csv(run_scenario(dataset, scenario).rows)


__all__ = [
    "DatasetSnapshot",
    "export_csv",
    "load_dataset",
    "run_scenario",
    "switch_source",
    "try_load_dataset",
]
