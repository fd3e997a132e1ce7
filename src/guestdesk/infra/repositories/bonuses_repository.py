"""Loyalty balances - read-only view of bonuses_balance.

The table is maintained by an external process; this service never writes
to it. A phone with no row is a first-time guest, not an error.
"""

from __future__ import annotations

from typing import Any

from psycopg2.extras import RealDictCursor

from guestdesk.domain.normalize import normalize_phone
from guestdesk.infra.db import fetchall, fetchone
from guestdesk.infra.repositories.guests_repository import MAX_LIST_ROWS, clamp_limit


def find_bonus_by_phone(cur: RealDictCursor, phone: str) -> dict[str, Any] | None:
    """Latest balance snapshot for ``phone`` by last visit, or None."""
    return fetchone(
        cur,
        """
        SELECT * FROM bonuses_balance
        WHERE phone = %s
        ORDER BY last_date_visit DESC
        LIMIT 1
        """,
        (normalize_phone(phone),),
    )


def list_bonuses(cur: RealDictCursor, limit: int = MAX_LIST_ROWS) -> list[dict[str, Any]]:
    return fetchall(
        cur,
        "SELECT * FROM bonuses_balance ORDER BY last_date_visit DESC LIMIT %s",
        (clamp_limit(limit),),
    )
