"""Keep guest identity out of log lines.

Check-ins carry a phone number and a full name. Logs may show the last two
phone digits (``phone_tail``) so the desk can match a complaint to a line,
and nothing more.
"""

import re
from typing import Any

# Guest fields that are masked whatever their value
GUEST_PII_FIELDS = frozenset({"guest_phone", "phone", "last_name", "first_name"})

# Ten or more digits, optionally written as +7 (912) 345-67-89
_PHONE_PATTERN = re.compile(r"\+?\d(?:[\s\-()]*\d){9,}")
_NON_DIGITS = re.compile(r"\D")

_REDACTED = "[REDACTED]"


def redact_string(value: str) -> str:
    """Mask anything that reads like a phone number."""
    return _PHONE_PATTERN.sub(_REDACTED, value)


def phone_tail(phone: Any) -> str:
    """Last two digits of a phone, enough to correlate log lines by hand."""
    digits = _NON_DIGITS.sub("", "" if phone is None else str(phone))
    if len(digits) < 2:
        return _REDACTED
    return f"***{digits[-2:]}"


def redact_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return redact_string(str(value))
    if isinstance(value, str):
        return redact_string(value)
    if isinstance(value, dict):
        masked = sorted(k for k in value if k in GUEST_PII_FIELDS)
        return f"dict(keys={sorted(value)}, masked={masked})"
    if isinstance(value, (list, tuple)):
        return f"list(len={len(value)})"
    return f"<{type(value).__name__}>"


def safe_log_context(**kwargs: Any) -> dict[str, str]:
    """Build ``extra_fields`` for a log call.

    Phone fields keep only their tail, names are masked outright, and every
    other value goes through ``redact_value``.

    >>> safe_log_context(guest_phone="+7 (912) 345-67-89", last_name="Ivanov", rows=3)
    {'guest_phone': '***89', 'last_name': '[REDACTED]', 'rows': '3'}
    """
    context = {}
    for key, value in kwargs.items():
        if key in ("guest_phone", "phone"):
            context[key] = phone_tail(value)
        elif key in GUEST_PII_FIELDS:
            context[key] = _REDACTED
        else:
            context[key] = redact_value(value)
    return context
