"""Artificial latency and simulated failures.

Implements:
- GET /slow: fixed delay (MOCK_SLOW_DELAY_MS), then a small OK payload
- any unmatched path: HTTP 500 with a SIMULATED_FAILURE error body
"""

from __future__ import annotations

import asyncio

from fastapi import Request
from fastapi.responses import JSONResponse

from ..errors import SIMULATED_FAILURE
from ..responses import json_error


async def get_slow(request: Request) -> JSONResponse:
    delay_ms: int = request.app.state.config.slow_delay_ms
    await asyncio.sleep(delay_ms / 1000)
    return JSONResponse({"status": "ok", "delayMs": delay_ms}, status_code=200)


async def simulated_failure(request: Request) -> JSONResponse:
    return json_error(
        SIMULATED_FAILURE,
        500,
        details={
            "method": request.method,
            "path": request.url.path,
            "query": dict(request.query_params),
        },
    )
