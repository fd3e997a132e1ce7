"""Shared test doubles for guestdesk tests.

These are regular classes, not fixtures. conftest.py wraps them.
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from guestdesk.domain.guests import GUEST_COLUMNS

BASE_TIME = datetime(2024, 12, 25, 9, 0, tzinfo=timezone.utc)


def _squash(query: str) -> str:
    return " ".join(query.split())


class JournalCursor:
    """Cursor double that understands the handful of statements we issue.

    Keeps guests and bonuses_balance rows in memory. Set ``error`` to make
    every execute() raise it.
    """

    def __init__(self) -> None:
        self.guests: list[dict] = []
        self.bonuses: list[dict] = []
        self.executed: list[tuple[str, tuple | None]] = []
        self.error: Exception | None = None
        self._result: list[dict] = []

    def add_guest(self, **fields) -> dict:
        row = {column: None for column in GUEST_COLUMNS}
        row.update(total_amount=Decimal("0"), bonus_spent=0)
        row.update(fields)
        row["id"] = len(self.guests) + 1
        row.setdefault("created_at", BASE_TIME + timedelta(minutes=len(self.guests)))
        self.guests.append(row)
        return row

    def add_bonus(self, **fields) -> dict:
        row = {
            "phone": None,
            "last_name": None,
            "first_name": None,
            "loyalty_level": None,
            "bonus_balances": 0,
            "visits_total": 0,
            "last_date_visit": date(2024, 1, 1),
        }
        row.update(fields)
        self.bonuses.append(row)
        return row

    def execute(self, query, params=None):
        self.executed.append((query, params))
        if self.error is not None:
            raise self.error

        sql = _squash(query)
        if sql.startswith("INSERT INTO guests"):
            row = self.add_guest(**dict(zip(GUEST_COLUMNS, params)))
            self._result = [row]
        elif sql.startswith("SELECT * FROM guests WHERE guest_phone = %s"):
            rows = [r for r in self.guests if r["guest_phone"] == params[0]]
            self._result = sorted(rows, key=lambda r: r["created_at"], reverse=True)[:1]
        elif sql.startswith("SELECT * FROM guests ORDER BY created_at DESC"):
            rows = sorted(self.guests, key=lambda r: r["created_at"], reverse=True)
            self._result = rows[: params[0]]
        elif sql.startswith("SELECT * FROM bonuses_balance WHERE phone = %s"):
            rows = [r for r in self.bonuses if r["phone"] == params[0]]
            self._result = sorted(rows, key=lambda r: r["last_date_visit"], reverse=True)[:1]
        elif sql.startswith("SELECT * FROM bonuses_balance ORDER BY last_date_visit DESC"):
            rows = sorted(self.bonuses, key=lambda r: r["last_date_visit"], reverse=True)
            self._result = rows[: params[0]]
        elif sql.startswith("SELECT 1"):
            self._result = [{"ok": 1}]
        else:
            raise AssertionError(f"unexpected SQL: {sql}")

    def fetchone(self):
        return self._result[0] if self._result else None

    def fetchall(self):
        return list(self._result)


class FakeDatabase:
    """Stands in for guestdesk.infra.db.Database."""

    def __init__(self, cursor: JournalCursor) -> None:
        self.cursor = cursor
        self.txn_count = 0
        self.closed = False

    @contextmanager
    def txn(self):
        self.txn_count += 1
        yield self.cursor

    def close(self) -> None:
        self.closed = True
