"""Error taxonomy for the ``salarylens`` pipeline.

Every hard failure raised by the validation, alignment and month helpers is a
``SeriesError`` (a ``ValueError``) carrying an :class:`ErrorKind` plus the
context needed for an actionable message: the 1-based element index and/or
the offending month.

``NoOverlap`` and ``Truncated`` are listed in :class:`ErrorKind` for
completeness but are never raised; they travel as warnings on
:class:`~salarylens.models.AlignmentResult`.
"""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar


class ErrorKind(StrEnum):
    MALFORMED_JSON = "MalformedJson"
    UNRECOGNIZED_SCHEMA = "UnrecognizedSchema"
    MALFORMED_ELEMENT = "MalformedElement"
    INVALID_MONTH = "InvalidMonth"
    INVALID_VALUE = "InvalidValue"
    DUPLICATE_MONTH = "DuplicateMonth"
    MONTH_GAP = "MonthGap"
    RANGE_TOO_LARGE = "RangeTooLarge"
    ALIGNMENT_INCONSISTENCY = "AlignmentInconsistency"
    MONTH_OUT_OF_RANGE = "MonthOutOfRange"
    # Soft conditions (warnings only)
    NO_OVERLAP = "NoOverlap"
    TRUNCATED = "Truncated"


class SeriesError(ValueError):
    """Base class for pipeline failures.

    Attributes
    ----------
    kind:
        The :class:`ErrorKind` of the failure (fixed per subclass).
    index:
        1-based position of the offending element, when known.
    month:
        The offending (or expected) month string, when known.
    """

    kind: ClassVar[ErrorKind]

    def __init__(self, message: str, *, index: int | None = None, month: str | None = None):
        super().__init__(message)
        self.message = message
        self.index = index
        self.month = month


class MalformedJsonError(SeriesError):
    kind = ErrorKind.MALFORMED_JSON


class UnrecognizedSchemaError(SeriesError):
    kind = ErrorKind.UNRECOGNIZED_SCHEMA


class MalformedElementError(SeriesError):
    kind = ErrorKind.MALFORMED_ELEMENT


class InvalidMonthError(SeriesError):
    kind = ErrorKind.INVALID_MONTH


class InvalidValueError(SeriesError):
    kind = ErrorKind.INVALID_VALUE


class DuplicateMonthError(SeriesError):
    kind = ErrorKind.DUPLICATE_MONTH


class MonthGapError(SeriesError):
    """Raised when consecutive months skip one; ``month`` is the missing month."""

    kind = ErrorKind.MONTH_GAP


class RangeTooLargeError(SeriesError):
    kind = ErrorKind.RANGE_TOO_LARGE


class AlignmentInconsistencyError(SeriesError):
    """A month of the common range is missing from one of the inputs.

    Unreachable when both inputs come out of
    :func:`~salarylens.validation.validate_series`.
    """

    kind = ErrorKind.ALIGNMENT_INCONSISTENCY


class MonthOutOfRangeError(SeriesError):
    kind = ErrorKind.MONTH_OUT_OF_RANGE


__all__ = [
    "AlignmentInconsistencyError",
    "DuplicateMonthError",
    "ErrorKind",
    "InvalidMonthError",
    "InvalidValueError",
    "MalformedElementError",
    "MalformedJsonError",
    "MonthGapError",
    "MonthOutOfRangeError",
    "RangeTooLargeError",
    "SeriesError",
    "UnrecognizedSchemaError",
]
