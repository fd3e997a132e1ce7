"""Structured JSON logging with correlation ID support."""

import json
import logging
import sys
from typing import Any

from guestdesk.infra.time import utc_now

from .correlation import get_correlation_id

_LEVEL = logging.INFO


class JsonFormatter(logging.Formatter):
    """One JSON object per line, tagged with the current correlation ID."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": utc_now().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        correlation_id = get_correlation_id()
        if correlation_id:
            log_obj["correlationId"] = correlation_id

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        # logger.info("...", extra={"extra_fields": {...}})
        extra_fields = getattr(record, "extra_fields", None)
        if isinstance(extra_fields, dict):
            log_obj.update(extra_fields)

        return json.dumps(log_obj, default=str, ensure_ascii=False)


def set_log_level(debug: bool) -> None:
    """Switch every guestdesk logger between INFO and DEBUG."""
    global _LEVEL
    _LEVEL = logging.DEBUG if debug else logging.INFO
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith("guestdesk") and isinstance(logger, logging.Logger):
            logger.setLevel(_LEVEL)


def get_logger(name: str) -> logging.Logger:
    """Get a logger configured for JSON output on stdout."""
    logger = logging.getLogger(name)

    # Only configure once per logger
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)
        logger.setLevel(_LEVEL)
        logger.propagate = False

    return logger
