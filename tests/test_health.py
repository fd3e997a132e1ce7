"""Banner and database health endpoint tests."""

from datetime import datetime

import psycopg2
from psycopg2.pool import PoolError

from guestdesk.infra.health import DatabaseHealth, check_database
from helpers import FakeDatabase, JournalCursor


def test_banner(client):
    response = client.get("/")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "OK"
    assert set(body) == {"message", "status", "database"}


def test_banner_does_not_touch_database(client, db):
    client.get("/")
    assert db.txn_count == 0


def test_health_connected(client, journal):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["database"] == "Connected"
    assert body["timestamp"].endswith("Z")
    datetime.fromisoformat(body["timestamp"].replace("Z", "+00:00"))
    assert journal.executed[0][0].startswith("SELECT 1")


def test_health_disconnected(client, journal):
    journal.error = psycopg2.OperationalError("connection refused")

    response = client.get("/health")

    assert response.status_code == 500
    assert response.json() == {
        "status": "Error",
        "database": "Disconnected",
        "error": "connection refused",
    }


class TestCheckDatabase:
    """Tests for check_database()."""

    def test_healthy(self):
        assert check_database(FakeDatabase(JournalCursor())) == DatabaseHealth(healthy=True)

    def test_pool_exhausted_is_unhealthy(self):
        class ExhaustedDatabase:
            def txn(self):
                raise PoolError("connection pool exhausted")

        result = check_database(ExhaustedDatabase())

        assert result.healthy is False
        assert result.error == "connection pool exhausted"

    def test_no_retry(self):
        cur = JournalCursor()
        cur.error = psycopg2.OperationalError("down")

        check_database(FakeDatabase(cur))

        assert len(cur.executed) == 1
