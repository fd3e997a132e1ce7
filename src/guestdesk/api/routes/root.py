"""Liveness banner and database health check."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from guestdesk.api.deps import get_database
from guestdesk.infra.db import Database
from guestdesk.infra.health import check_database
from guestdesk.infra.time import utc_now_iso
from guestdesk.observability.logging import get_logger
from guestdesk.observability.redaction import safe_log_context

router = APIRouter(tags=["health"])

logger = get_logger(__name__)


@router.get("/")
def banner() -> dict:
    """Process is up. Does not touch the database."""
    return {
        "message": "Hotel Guests API is running",
        "status": "OK",
        "database": "PostgreSQL",
    }


@router.get("/health")
def health(db: Database = Depends(get_database)) -> JSONResponse:
    """Database connectivity check.

    200 with database "Connected" when ``SELECT 1`` succeeds, otherwise 500
    with database "Disconnected" and the driver's error message.
    """
    result = check_database(db)
    if not result.healthy:
        logger.warning(
            "health check failed",
            extra={"extra_fields": safe_log_context(error=result.error)},
        )
        return JSONResponse(
            status_code=500,
            content={
                "status": "Error",
                "database": "Disconnected",
                "error": result.error,
            },
        )

    return JSONResponse(
        status_code=200,
        content={
            "status": "OK",
            "database": "Connected",
            "timestamp": utc_now_iso(),
        },
    )
