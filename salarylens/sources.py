"""Inflation collection resolution and active-source selection.

An inflation payload is either a single unnamed series::

    {"series": [{"month": "2024-01", "inflationPct": 2.5}, ...]}

or two independently sourced series keyed by source name::

    {"TUIK": {"series": [...]}, "ENAG": {"series": [...]}}

When both named sources validate and cover exactly the same months, an
``AVG`` series (their month-by-month mean) is added to the collection.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .errors import UnrecognizedSchemaError
from .logging_setup import get_logger
from .models import InflationCollection, InflationSource, SeriesPoint, ValidatedSeries
from .validation import INFLATION, parse_json, validate_series

_logger = get_logger("salarylens.sources")

PRIMARY_SOURCE = InflationSource.TUIK
SECONDARY_SOURCE = InflationSource.ENAG
DERIVED_SOURCE = InflationSource.AVG

# Used when the preferred source is missing or not given.
FALLBACK_ORDER: tuple[InflationSource, ...] = (DERIVED_SOURCE, PRIMARY_SOURCE, SECONDARY_SOURCE)


def _average(primary: ValidatedSeries, secondary: ValidatedSeries) -> ValidatedSeries | None:
    if primary.months != secondary.months:
        return None
    return ValidatedSeries(
        label=DERIVED_SOURCE.value,
        points=tuple(
            SeriesPoint(month=a.month, value=(a.value + b.value) / 2)
            for a, b in zip(primary.points, secondary.points)
        ),
    )


def resolve_collection(data: Any) -> InflationCollection:
    """Build an :class:`InflationCollection` from a parsed inflation payload.

    Raises :class:`~salarylens.errors.UnrecognizedSchemaError` when the payload
    matches neither shape, or when a named source is present without a
    ``series`` array. Series-level failures propagate from
    :func:`~salarylens.validation.validate_series`.
    """

    if isinstance(data, Mapping) and isinstance(data.get("series"), list):
        series = validate_series(data["series"], INFLATION)
        return InflationCollection(series={InflationSource.DEFAULT: series})

    named = (PRIMARY_SOURCE, SECONDARY_SOURCE)
    if not isinstance(data, Mapping) or not any(data.get(s.value) for s in named):
        raise UnrecognizedSchemaError(
            "Inflation JSON must have either a series array or "
            f"{PRIMARY_SOURCE}/{SECONDARY_SOURCE} objects"
        )

    validated: dict[InflationSource, ValidatedSeries] = {}
    for source in named:
        sub = data.get(source.value)
        if not sub:
            continue
        if not isinstance(sub, Mapping) or not isinstance(sub.get("series"), list):
            raise UnrecognizedSchemaError(f"{source} inflation object must have a series array")
        validated[source] = validate_series(sub["series"], INFLATION, label=source.value)

    if PRIMARY_SOURCE in validated and SECONDARY_SOURCE in validated:
        avg = _average(validated[PRIMARY_SOURCE], validated[SECONDARY_SOURCE])
        if avg is not None:
            validated[DERIVED_SOURCE] = avg
        else:
            _logger.info(
                "%s and %s cover different months; %s is unavailable",
                PRIMARY_SOURCE,
                SECONDARY_SOURCE,
                DERIVED_SOURCE,
            )

    return InflationCollection(series=validated)


def parse_inflation_collection(text: str) -> InflationCollection:
    return resolve_collection(parse_json(text, label="Inflation"))


def parse_source_name(value: str | None) -> InflationSource | None:
    """Map user text (``tuik``, ``ENAG``, ``avg`` ...) to an :class:`InflationSource`.

    Matching is ASCII case-insensitive so that locale-specific casing rules
    (e.g. Turkish dotted/dotless ``i``) cannot change the result.
    """

    if value is None:
        return None
    key = value.strip().encode("ascii", "ignore").decode("ascii").lower()
    for source in InflationSource:
        if source.value.lower() == key:
            return source
    return None


def select_active_source(
    collection: InflationCollection, preferred: InflationSource | str | None = None
) -> InflationSource:
    """Choose which series of ``collection`` drives the computation.

    - Single-series collections always use ``DEFAULT``.
    - Otherwise ``preferred`` wins when present in the collection.
    - Otherwise the first present of ``AVG``, ``TUIK``, ``ENAG``.
    """

    if collection.is_default:
        return InflationSource.DEFAULT

    if isinstance(preferred, str) and not isinstance(preferred, InflationSource):
        preferred = parse_source_name(preferred)
    if preferred is not None and preferred in collection:
        return preferred

    for source in FALLBACK_ORDER:
        if source in collection:
            return source
    raise UnrecognizedSchemaError("Inflation collection contains no series")


__all__ = [
    "FALLBACK_ORDER",
    "parse_inflation_collection",
    "parse_source_name",
    "resolve_collection",
    "select_active_source",
]
