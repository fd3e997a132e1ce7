"""FastAPI dependencies."""

from fastapi import Request

from guestdesk.infra.db import Database


def get_database(request: Request) -> Database:
    """The Database handle opened by the application lifespan.

    Raises:
        RuntimeError: If the app is serving without an open database.
    """
    db: Database | None = getattr(request.app.state, "db", None)
    if db is None:
        raise RuntimeError("database handle not initialised")
    return db
