"""Shared pytest fixtures for guestdesk tests."""
import sys
sys.dont_write_bytecode = True

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from guestdesk.api.factory import create_app  # noqa: E402
from guestdesk.config import Settings  # noqa: E402
from helpers import FakeDatabase, JournalCursor  # noqa: E402


@pytest.fixture
def settings():
    return Settings(database_url="postgresql://u:p@localhost/guests")


@pytest.fixture
def journal():
    """In-memory guests/bonuses tables behind a cursor double."""
    return JournalCursor()


@pytest.fixture
def db(journal):
    return FakeDatabase(journal)


@pytest.fixture
def client(settings, db):
    """TestClient over an app wired to the in-memory database."""
    app = create_app(settings=settings, database=db)
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
