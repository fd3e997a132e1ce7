"""Guests repository - the append-only check-in journal.

Uses raw SQL with psycopg2 (no ORM). Every function runs exactly one
statement on the cursor it is given; the caller owns the transaction
(``with db.txn() as cur:``).

There is no update or delete path. Submitting the same guest twice appends
two rows, and "the guest for phone X" always means the newest row by
``created_at``.
"""

from __future__ import annotations

from typing import Any

from psycopg2.extras import RealDictCursor

from guestdesk.domain.guests import GUEST_COLUMNS, NewGuest
from guestdesk.domain.normalize import normalize_phone
from guestdesk.infra.db import fetchall, fetchone

MAX_LIST_ROWS = 100

_INSERT_SQL = f"""
    INSERT INTO guests ({', '.join(GUEST_COLUMNS)})
    VALUES ({', '.join(['%s'] * len(GUEST_COLUMNS))})
    RETURNING *
"""  # noqa: S608


def clamp_limit(limit: int) -> int:
    """Keep list sizes within 1..MAX_LIST_ROWS."""
    return max(1, min(int(limit), MAX_LIST_ROWS))


def insert_guest(cur: RealDictCursor, guest: NewGuest) -> dict[str, Any]:
    """Append one check-in row.

    The database assigns the identity and ``created_at``.

    Returns:
        The full stored row.
    """
    row = fetchone(cur, _INSERT_SQL, guest.as_params())
    if row is None:
        # RETURNING always yields the inserted row
        raise RuntimeError("INSERT INTO guests returned no row")
    return row


def find_latest_guest_by_phone(cur: RealDictCursor, phone: str) -> dict[str, Any] | None:
    """Newest check-in for ``phone`` (any format), or None."""
    return fetchone(
        cur,
        """
        SELECT * FROM guests
        WHERE guest_phone = %s
        ORDER BY created_at DESC
        LIMIT 1
        """,
        (normalize_phone(phone),),
    )


def list_guests(cur: RealDictCursor, limit: int = MAX_LIST_ROWS) -> list[dict[str, Any]]:
    """Most recent check-ins, newest first, at most 100."""
    return fetchall(
        cur,
        "SELECT * FROM guests ORDER BY created_at DESC LIMIT %s",
        (clamp_limit(limit),),
    )
