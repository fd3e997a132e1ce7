"""Canonical storage values for guest form input.

Pure, total functions: none of them raise. Malformed numbers are zeroed
instead of rejected, and malformed dates are handed to the database as-is.
"""

import math
import re
from typing import Any

PHONE_DIGITS = 10

_NON_DIGITS = re.compile(r"\D")

# Leading numeric prefix, as front-desk forms send "1500.50 rub" or " 300"
_FLOAT_PREFIX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INT_PREFIX = re.compile(r"^\s*[+-]?\d+")


def normalize_phone(value: str | None) -> str:
    """Strip non-digits and keep the trailing 10 digits.

    Shorter inputs keep every digit they have.

    >>> normalize_phone("+7 (912) 345-67-89")
    '9123456789'
    """
    if value is None:
        return ""
    digits = _NON_DIGITS.sub("", str(value))
    return digits[-PHONE_DIGITS:]


def normalize_date(value: Any) -> Any:
    """Reparse ``DD.MM.YYYY`` into ``YYYY-MM-DD``.

    Only the three-part dotted shape is rewritten; month and day are
    zero-padded to two digits. Every other value (ISO dates, garbage, empty
    strings, None) is returned unchanged.

    >>> normalize_date("5.3.2024")
    '2024-03-05'
    """
    if not isinstance(value, str) or "." not in value:
        return value
    parts = value.split(".")
    if len(parts) != 3:
        return value
    day, month, year = parts
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"


def coerce_amount(value: Any) -> float:
    """Parse a money amount; 0 when nothing numeric can be read."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _FLOAT_PREFIX.match(str(value))
        if not match:
            return 0.0
        number = float(match.group(0))
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def coerce_bonus(value: Any) -> int:
    """Parse a bonus point count; 0 when nothing numeric can be read."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return 0
        return int(value)
    match = _INT_PREFIX.match(str(value))
    if not match:
        return 0
    return int(match.group(0))
