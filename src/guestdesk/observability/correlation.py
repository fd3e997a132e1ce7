"""Request correlation IDs shared between middleware and log records."""

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

# Visible to every log call made while serving the current request
correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

CORRELATION_ID_HEADER = "X-Correlation-ID"


def new_correlation_id() -> str:
    return str(uuid.uuid4())


def get_correlation_id() -> str:
    """Correlation ID of the request being served ("" outside a request)."""
    return correlation_id_var.get()


@contextmanager
def bound_correlation_id(cid: str | None) -> Iterator[str]:
    """Bind a correlation ID for the duration of the block.

    A missing or blank ``cid`` is replaced by a fresh UUID. The previous
    value is restored on exit.
    """
    value = (cid or "").strip() or new_correlation_id()
    token = correlation_id_var.set(value)
    try:
        yield value
    finally:
        correlation_id_var.reset(token)
