"""Database access layer using psycopg2.

Provides:
- Database: explicitly constructed handle around a thread-safe pool
- Database.txn(): context manager for one short transaction
- execute(): parameterized statement execution
- fetchone/fetchall: query helpers returning column-name mappings

Each Database connection carries ``connect_timeout`` and a server-side
``statement_timeout``, so every request's single statement is bounded even
when the caller applies no deadline of its own.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Sequence

from psycopg2.extensions import parse_dsn
from psycopg2.extras import RealDictCursor
from psycopg2.pool import AbstractConnectionPool, ThreadedConnectionPool

from guestdesk.config import Settings
from guestdesk.observability.logging import get_logger

logger = get_logger(__name__)

APPLICATION_NAME = "guestdesk"


def resolve_dsn(dsn: str, password: str | None = None) -> dict[str, Any]:
    """Extra connect() keyword arguments needed for ``dsn``.

    ``password`` (DB_PASSWORD) is applied only when the DSN itself carries
    none, for both ``key=value`` DSNs and ``postgres://`` URLs.
    """
    extra: dict[str, Any] = {}
    if password and not parse_dsn(dsn).get("password"):
        extra["password"] = password
    return extra


def connect_kwargs(settings: Settings) -> dict[str, Any]:
    """Keyword arguments passed to psycopg2.connect() for every pooled connection.

    connect() keywords override DSN values, so settings only fill what
    DATABASE_URL leaves out: an ``sslmode=verify-full`` in the URL is never
    downgraded. The statement timeout is appended to existing ``options``
    unless they already set one.
    """
    dsn = settings.require_database_url()
    in_dsn = parse_dsn(dsn)

    defaults = {
        "application_name": APPLICATION_NAME,
        "connect_timeout": settings.db_connect_timeout,
        "sslmode": settings.db_sslmode,
    }
    kwargs: dict[str, Any] = {k: v for k, v in defaults.items() if not in_dsn.get(k)}

    options = in_dsn.get("options", "").strip()
    if "statement_timeout" not in options:
        timeout = f"-c statement_timeout={settings.db_statement_timeout_ms}"
        kwargs["options"] = f"{options} {timeout}".strip()

    kwargs.update(resolve_dsn(dsn, settings.db_password))
    return kwargs


class Database:
    """Handle shared by all requests. Open at startup, close at shutdown."""

    def __init__(self, pool: AbstractConnectionPool) -> None:
        self._pool = pool

    @classmethod
    def open(cls, settings: Settings) -> Database:
        """Create the connection pool described by ``settings``.

        Raises:
            RuntimeError: If DATABASE_URL is not set.
            psycopg2.Error: If DB_POOL_MIN > 0 and the eager connections fail.
        """
        dsn = settings.require_database_url()
        pool = ThreadedConnectionPool(
            settings.db_pool_min,
            settings.db_pool_max,
            dsn,
            **connect_kwargs(settings),
        )
        logger.info(
            "database pool opened",
            extra={
                "extra_fields": {
                    "pool_min": settings.db_pool_min,
                    "pool_max": settings.db_pool_max,
                    "statement_timeout_ms": settings.db_statement_timeout_ms,
                }
            },
        )
        return cls(pool)

    @property
    def closed(self) -> bool:
        return bool(self._pool.closed)

    def close(self) -> None:
        """Close every pooled connection. Safe to call twice."""
        if not self._pool.closed:
            self._pool.closeall()
            logger.info("database pool closed")

    @contextmanager
    def txn(self) -> Iterator[RealDictCursor]:
        """Borrow a connection for one short transaction.

        Commits on successful exit, rolls back on exception, and always
        returns the connection to the pool (discarding it if it broke).

        Raises:
            psycopg2.pool.PoolError: If the pool is exhausted or closed.

        Example:
            with db.txn() as cur:
                cur.execute("SELECT 1")
        """
        conn = self._pool.getconn()
        try:
            with conn.cursor(cursor_factory=RealDictCursor) as cur:
                yield cur
            conn.commit()
        except Exception:
            if not conn.closed:
                conn.rollback()
            raise
        finally:
            self._pool.putconn(conn, close=bool(conn.closed))


def execute(
    cur: RealDictCursor,
    query: str,
    params: Sequence[Any] | None = None,
) -> None:
    """Execute a parameterized statement.

    Args:
        cur: Database cursor.
        query: SQL with %s placeholders.
        params: Query parameters.
    """
    cur.execute(query, params)


def fetchone(
    cur: RealDictCursor,
    query: str,
    params: Sequence[Any] | None = None,
) -> dict[str, Any] | None:
    """Execute query and fetch one row.

    Returns:
        Row as a column-name mapping, or None if no results.
    """
    cur.execute(query, params)
    row = cur.fetchone()
    return dict(row) if row is not None else None


def fetchall(
    cur: RealDictCursor,
    query: str,
    params: Sequence[Any] | None = None,
) -> list[dict[str, Any]]:
    """Execute query and fetch all rows as column-name mappings."""
    cur.execute(query, params)
    return [dict(row) for row in cur.fetchall()]
