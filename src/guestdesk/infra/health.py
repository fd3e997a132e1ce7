"""Database liveness check."""

from __future__ import annotations

from dataclasses import dataclass

import psycopg2

from guestdesk.infra.db import Database, fetchone


@dataclass(frozen=True)
class DatabaseHealth:
    healthy: bool
    error: str | None = None


def check_database(db: Database) -> DatabaseHealth:
    """Run ``SELECT 1`` through the shared pool.

    A driver failure (including an exhausted or closed pool) is reported as
    unhealthy with the driver's message. No retries.
    """
    try:
        with db.txn() as cur:
            fetchone(cur, "SELECT 1 AS ok")
    except psycopg2.Error as e:
        return DatabaseHealth(healthy=False, error=str(e).strip() or type(e).__name__)
    return DatabaseHealth(healthy=True)
