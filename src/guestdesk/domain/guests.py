"""Guest check-in registration: required-field checks and normalization."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from guestdesk.domain.normalize import (
    coerce_amount,
    coerce_bonus,
    normalize_date,
    normalize_phone,
)

REQUIRED_FIELDS = ("guest_phone", "last_name", "first_name")

# Column order used by the INSERT in guests_repository
GUEST_COLUMNS = (
    "guest_phone",
    "last_name",
    "first_name",
    "checkin_date",
    "loyalty_level",
    "shelter_booking_id",
    "total_amount",
    "bonus_spent",
)


class GuestValidationError(Exception):
    """Submission is missing a required field. Client error, not a fault."""

    def __init__(self, message: str, missing: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.missing = missing


@dataclass(frozen=True)
class NewGuest:
    """A normalized check-in, ready to be appended to the guests table."""

    guest_phone: str
    last_name: str
    first_name: str
    checkin_date: Any = None
    loyalty_level: Any = None
    shelter_booking_id: Any = None
    total_amount: float = 0.0
    bonus_spent: int = 0

    def as_params(self) -> tuple[Any, ...]:
        return tuple(getattr(self, column) for column in GUEST_COLUMNS)


def _as_text(value: Any) -> str:
    # JSON numbers in name fields are stored as their text
    return value if isinstance(value, str) else str(value)


def build_guest(payload: Mapping[str, Any]) -> NewGuest:
    """Validate a raw registration payload and normalize every field.

    Phone, last name and first name must be present and non-empty.
    Numeric fields fall back to 0 and dates pass through when unparseable.

    Raises:
        GuestValidationError: If a required field is missing or empty.
    """
    missing = tuple(name for name in REQUIRED_FIELDS if not payload.get(name))
    if missing:
        raise GuestValidationError(
            "Required fields: phone number, last name and first name",
            missing=missing,
        )

    return NewGuest(
        guest_phone=normalize_phone(payload["guest_phone"]),
        last_name=_as_text(payload["last_name"]),
        first_name=_as_text(payload["first_name"]),
        checkin_date=normalize_date(payload.get("checkin_date")),
        loyalty_level=payload.get("loyalty_level"),
        shelter_booking_id=payload.get("shelter_booking_id"),
        total_amount=coerce_amount(payload.get("total_amount")),
        bonus_spent=coerce_bonus(payload.get("bonus_spent")),
    )
