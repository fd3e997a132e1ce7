"""Clock helpers so every timestamp we emit is UTC and timezone-aware."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    return utc_now().isoformat(timespec="milliseconds").replace("+00:00", "Z")
