"""JSON envelopes shared by every endpoint.

Success: {"success": true, ["message": ...,] "data": ...}
Failure: {"success": false, "message": ..., ["error": ...]}
"""

from __future__ import annotations

from typing import Any, Mapping

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def ok(data: Any, message: str | None = None) -> JSONResponse:
    content: dict[str, Any] = {"success": True}
    if message is not None:
        content["message"] = message
    content["data"] = data
    # Decimal, date and datetime columns come straight from the driver
    return JSONResponse(status_code=200, content=jsonable_encoder(content))


def failure(
    status_code: int,
    message: str,
    error: str | None = None,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    content: dict[str, Any] = {"success": False, "message": message}
    if error is not None:
        content["error"] = error
    return JSONResponse(status_code=status_code, content=content, headers=headers)
