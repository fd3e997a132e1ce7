"""Loyalty balance lookups (read-only).

GET    /api/bonuses/search?phone=   → latest balance for a phone
GET    /api/bonuses                 → 100 most recently visited balances
"""

from __future__ import annotations

import psycopg2
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from guestdesk.api.deps import get_database
from guestdesk.api.responses import failure, ok
from guestdesk.infra.db import Database
from guestdesk.infra.repositories.bonuses_repository import find_bonus_by_phone, list_bonuses
from guestdesk.observability.logging import get_logger

router = APIRouter(prefix="/api/bonuses", tags=["bonuses"])

logger = get_logger(__name__)


@router.get("/search")
def search_bonus(
    phone: str | None = None,
    db: Database = Depends(get_database),
) -> JSONResponse:
    """Balance for a phone.

    A phone with no balance row is a first-time guest: 200 with ``data``
    null, never 404.
    """
    if not phone:
        return failure(400, "Phone number is required for search")

    try:
        with db.txn() as cur:
            row = find_bonus_by_phone(cur, phone)
    except psycopg2.Error as e:
        logger.exception("bonus search failed")
        return failure(500, "Failed to search bonuses", error=str(e).strip())

    return ok(row)


@router.get("")
def recent_bonuses(db: Database = Depends(get_database)) -> JSONResponse:
    try:
        with db.txn() as cur:
            rows = list_bonuses(cur)
    except psycopg2.Error as e:
        logger.exception("bonus list failed")
        return failure(500, "Failed to list bonuses", error=str(e).strip())

    return ok(rows)
