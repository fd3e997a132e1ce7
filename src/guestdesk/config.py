"""Runtime settings loaded from environment variables.

DATABASE_URL              libpq DSN or postgres:// URL (required to serve)
DB_PASSWORD               applied when the DSN carries no password
HOST / PORT               listen address (default 0.0.0.0:3000)
DB_POOL_MIN / DB_POOL_MAX connection pool bounds (default 0 / 10)
DB_STATEMENT_TIMEOUT_MS   server-side deadline for every statement (default 5000)
DB_CONNECT_TIMEOUT        seconds to wait for a new connection (default 10)
DB_SSLMODE                libpq sslmode (default "prefer")
CORS_ORIGINS              comma-separated origins, "*" for any (default "*")
DEBUG                     development mode: expose error detail in 500s
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    database_url: str | None = None
    db_password: str | None = None
    host: str = "0.0.0.0"
    port: int = 3000
    db_pool_min: int = 0
    db_pool_max: int = 10
    db_statement_timeout_ms: int = 5000
    db_connect_timeout: int = 10
    db_sslmode: str = "prefer"
    cors_origins: tuple[str, ...] = field(default=("*",))
    debug: bool = False

    def require_database_url(self) -> str:
        """Return DATABASE_URL or fail loudly at startup.

        Raises:
            RuntimeError: If DATABASE_URL is not set.
        """
        if not self.database_url:
            raise RuntimeError("DATABASE_URL environment variable not set")
        return self.database_url


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None


def _origins(raw: str | None) -> tuple[str, ...]:
    if not raw or not raw.strip():
        return ("*",)
    return tuple(o.strip() for o in raw.split(",") if o.strip())


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Read Settings from ``env`` (defaults to ``os.environ``).

    Raises:
        RuntimeError: If a numeric variable is not an integer or the pool
            bounds are inconsistent.
    """
    if env is None:
        env = os.environ

    settings = Settings(
        database_url=env.get("DATABASE_URL") or None,
        db_password=env.get("DB_PASSWORD") or None,
        host=env.get("HOST", "0.0.0.0"),
        port=_int(env, "PORT", 3000),
        db_pool_min=_int(env, "DB_POOL_MIN", 0),
        db_pool_max=_int(env, "DB_POOL_MAX", 10),
        db_statement_timeout_ms=_int(env, "DB_STATEMENT_TIMEOUT_MS", 5000),
        db_connect_timeout=_int(env, "DB_CONNECT_TIMEOUT", 10),
        db_sslmode=env.get("DB_SSLMODE", "prefer"),
        cors_origins=_origins(env.get("CORS_ORIGINS")),
        debug=env.get("DEBUG", "").strip().lower() in _TRUTHY,
    )

    if settings.db_pool_min < 0 or settings.db_pool_max < max(settings.db_pool_min, 1):
        raise RuntimeError("DB_POOL_MAX must be >= max(DB_POOL_MIN, 1)")

    return settings
