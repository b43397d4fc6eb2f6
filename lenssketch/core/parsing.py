"""Lenient numeric parsing for table and form input.

The editor never blocks on bad numeric text: anything that does not parse
to a finite number is replaced by a caller-supplied fallback.
"""

from __future__ import annotations

import math
from typing import Any


def parse_number(value: Any, fallback: float = 0.0) -> float:
    """Coerce free-form input to a float.

    Both comma and period are accepted as the decimal separator
    ("12,5" == "12.5"). Numbers pass through unchanged.

    Args:
        value: Text, number or None.
        fallback: Returned when the value cannot be parsed or is not finite.

    Returns:
        Parsed float or fallback.
    """
    if value is None or isinstance(value, bool):
        return fallback
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return fallback
    else:
        text = str(value).strip().replace(",", ".")
        if not text:
            return fallback
        try:
            number = float(text)
        except ValueError:
            return fallback
    if not math.isfinite(number):
        return fallback
    return number


def parse_int(value: Any, fallback: int = 0) -> int:
    """Like parse_number, rounded to the nearest integer."""
    number = parse_number(value, float("nan"))
    if math.isnan(number):
        return fallback
    return int(round(number))


def parse_bool(value: Any, fallback: bool = False) -> bool:
    """Coerce JSON-ish truth values ("true", 1, True) to bool."""
    if value is None:
        return fallback
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("true", "yes", "1", "on"):
            return True
        if text in ("false", "no", "0", "off", ""):
            return False
    return fallback
