"""CSV rendering of computed rows.

Every field is quoted (``csv.QUOTE_ALL``) with embedded quotes doubled.
Currency and percentage columns use two decimals, the exchange rate four.
Fractions (cumulative inflation, gap) are written as percentages.
"""

from __future__ import annotations

import csv
from collections.abc import Iterable
from io import StringIO

from .models import ComputedRow

CSV_HEADER: tuple[str, ...] = (
    "Month",
    "MoM Inflation %",
    "CPI Index",
    "Cumulative Inflation %",
    "Nominal Salary (TRY)",
    "Required Salary (TRY)",
    "Gap vs Required %",
    "Real Salary (TRY)",
    "USD/TRY",
    "Salary (USD)",
)


def _row_fields(r: ComputedRow) -> list[str]:
    return [
        r.month,
        f"{r.inflation_pct:.2f}",
        f"{r.cpi:.2f}",
        f"{r.cum_inflation * 100:.2f}",
        f"{r.nominal:.2f}",
        f"{r.required:.2f}",
        f"{r.gap_pct * 100:.2f}",
        f"{r.real:.2f}",
        f"{r.usdtry:.4f}",
        f"{r.usd:.2f}",
    ]


def to_csv(rows: Iterable[ComputedRow]) -> str:
    """Render ``rows`` as CSV text (header first, ``\\n`` line endings)."""

    buf = StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for r in rows:
        writer.writerow(_row_fields(r))
    return buf.getvalue()


__all__ = ["CSV_HEADER", "to_csv"]
