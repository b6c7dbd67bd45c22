"""Public interface for the ``salarylens`` package.

Re-exports the pipeline functions and snapshot models as the stable import
surface. There is no runtime logic here, only symbol re-exports.
"""

from .alignment import align_by_common_months, clamp_month, trim_to_start
from .api import (
    DatasetSnapshot,
    export_csv,
    load_dataset,
    run_scenario,
    switch_source,
    try_load_dataset,
)
from .compute import build_rows, compute_series, summarize
from .csv_export import to_csv
from .errors import ErrorKind, SeriesError
from .models import (
    AlignedDataset,
    AlignmentResult,
    AlignmentWarning,
    ComputedRow,
    ComputedSeries,
    InflationCollection,
    InflationSource,
    Scenario,
    ScenarioResult,
    SeriesPoint,
    SummaryMetrics,
    ValidatedSeries,
)
from .months import compare_months, is_valid_month, month_range, next_month
from .results import Err, Ok, Result
from .sources import parse_inflation_collection, resolve_collection, select_active_source
from .validation import INFLATION, USDTRY, parse_usdtry, validate_series

__all__ = [
    # Month utilities
    "compare_months",
    "is_valid_month",
    "month_range",
    "next_month",
    # Validation / sources
    "INFLATION",
    "USDTRY",
    "parse_inflation_collection",
    "parse_usdtry",
    "resolve_collection",
    "select_active_source",
    "validate_series",
    # Alignment / computation / export
    "align_by_common_months",
    "build_rows",
    "clamp_month",
    "compute_series",
    "summarize",
    "to_csv",
    "trim_to_start",
    # Orchestration
    "DatasetSnapshot",
    "export_csv",
    "load_dataset",
    "run_scenario",
    "switch_source",
    "try_load_dataset",
    # Models / types
    "AlignedDataset",
    "AlignmentResult",
    "AlignmentWarning",
    "ComputedRow",
    "ComputedSeries",
    "Err",
    "ErrorKind",
    "InflationCollection",
    "InflationSource",
    "Ok",
    "Result",
    "Scenario",
    "ScenarioResult",
    "SeriesError",
    "SeriesPoint",
    "SummaryMetrics",
    "ValidatedSeries",
]
