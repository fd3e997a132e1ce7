"""Check-in endpoints for the front desk form and the admin list.

POST   /api/guests                 → append a check-in
GET    /api/guests/search?phone=   → newest check-in for a phone (auto-fill)
GET    /api/guests                 → 100 newest check-ins
"""

from __future__ import annotations

from typing import Any

import psycopg2
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict

from guestdesk.api.deps import get_database
from guestdesk.api.responses import failure, ok
from guestdesk.domain.guests import GuestValidationError, build_guest
from guestdesk.infra.db import Database
from guestdesk.infra.repositories.guests_repository import (
    find_latest_guest_by_phone,
    insert_guest,
    list_guests,
)
from guestdesk.observability.logging import get_logger
from guestdesk.observability.redaction import safe_log_context

router = APIRouter(prefix="/api/guests", tags=["guests"])

logger = get_logger(__name__)


# ── Schemas ───────────────────────────────────────────────────────────────────


class GuestSubmission(BaseModel):
    """Raw form payload. Values arrive untouched; build_guest normalizes them."""

    model_config = ConfigDict(extra="ignore")

    guest_phone: Any = None
    last_name: Any = None
    first_name: Any = None
    checkin_date: Any = None
    loyalty_level: Any = None
    shelter_booking_id: Any = None
    total_amount: Any = None
    bonus_spent: Any = None


# ── POST /api/guests ──────────────────────────────────────────────────────────


@router.post("")
def create_guest(
    body: GuestSubmission,
    db: Database = Depends(get_database),
) -> JSONResponse:
    """Register one check-in.

    400 when phone, last name or first name is missing (nothing is written).
    500 with the driver message when the insert fails.
    """
    try:
        guest = build_guest(body.model_dump())
    except GuestValidationError as e:
        logger.warning(
            "guest registration rejected",
            extra={"extra_fields": {"missing": list(e.missing)}},
        )
        return failure(400, e.message)

    try:
        with db.txn() as cur:
            row = insert_guest(cur, guest)
    except psycopg2.Error as e:
        logger.exception(
            "guest insert failed",
            extra={"extra_fields": safe_log_context(phone=guest.guest_phone)},
        )
        return failure(500, "Failed to add guest", error=str(e).strip())

    logger.info(
        "guest registered",
        extra={"extra_fields": safe_log_context(guest_id=row.get("id"), phone=guest.guest_phone)},
    )
    return ok(row, message="Guest data saved")


# ── GET /api/guests/search ────────────────────────────────────────────────────


@router.get("/search")
def search_guest(
    phone: str | None = None,
    db: Database = Depends(get_database),
) -> JSONResponse:
    """Newest check-in for a phone. ``data`` is null for an unknown phone."""
    if not phone:
        return failure(400, "Phone number is required for search")

    try:
        with db.txn() as cur:
            row = find_latest_guest_by_phone(cur, phone)
    except psycopg2.Error as e:
        logger.exception("guest search failed")
        return failure(500, "Failed to search guest", error=str(e).strip())

    return ok(row)


# ── GET /api/guests ───────────────────────────────────────────────────────────


@router.get("")
def recent_guests(db: Database = Depends(get_database)) -> JSONResponse:
    try:
        with db.txn() as cur:
            rows = list_guests(cur)
    except psycopg2.Error as e:
        logger.exception("guest list failed")
        return failure(500, "Failed to list guests", error=str(e).strip())

    return ok(rows)
