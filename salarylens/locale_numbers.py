"""Turkish-locale salary text parsing (``100.000,50`` → ``100000.5``)."""

from __future__ import annotations

import re

_NON_DIGIT = re.compile(r"[^0-9]")


def parse_salary(raw: str | None) -> float | None:
    """Parse a salary typed with ``.`` thousands and ``,`` decimal separators.

    - Whitespace is ignored; other non-digit characters (currency symbols,
      ``.`` group separators) are stripped from the integer part.
    - At most two fraction digits are kept.
    - Returns ``None`` for empty input, input without integer digits, or more
      than one comma (ambiguous).
    """

    if not raw:
        return None
    s = re.sub(r"\s+", "", raw)
    parts = s.split(",")
    if len(parts) > 2:
        return None
    int_part = _NON_DIGIT.sub("", parts[0])
    frac_part = _NON_DIGIT.sub("", parts[1])[:2] if len(parts) == 2 else ""
    if not int_part:
        return None
    return float(f"{int_part}.{frac_part}" if frac_part else int_part)


__all__ = ["parse_salary"]
