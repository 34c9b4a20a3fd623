"""Response body helpers.

Successful payloads are returned as-is (the UI expects plain objects and
arrays). Failures share one shape:

    {"error": {"code": ..., "message": ..., "details": ...}}
"""

from __future__ import annotations

from typing import Any, Mapping

from fastapi.responses import JSONResponse

from .errors import ErrorCode


JsonObject = dict[str, Any]


def error_body(
    code: ErrorCode,
    *,
    message: str | None = None,
    details: Any | None = None,
) -> JsonObject:
    """Build an error body for the given code."""

    return {"error": code.as_error(message=message, details=details)}


def json_error(
    code: ErrorCode,
    status_code: int,
    *,
    message: str | None = None,
    details: Any | None = None,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        error_body(code, message=message, details=details),
        status_code=status_code,
        headers=dict(headers) if headers else None,
    )
