"""Stats handler.

Implements:
- GET /stats?requestId=<token>[&timeoutMs=<int>]

Each request submits its requestId to the batch dispatch coordinator and
is answered only after that id comes back out of the coordinator. Bursts of
stats requests therefore resolve together-ish, after a shared quiet period
plus an independent random delay each, which is what the UI's loading
states are meant to be exercised against.
"""

from __future__ import annotations

import hashlib
import logging
import random
from datetime import datetime, timezone
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from ..coordinator import BatchDispatchCoordinator
from ..errors import DISPATCH_TIMEOUT, DUPLICATE_REQUEST_ID, VALIDATION_FAILED, DispatchTimeoutError, DuplicateTokenError
from ..headers import REQUEST_ID, RequestContext, build_request_context
from ..responses import json_error


log = logging.getLogger("stats_mock.handlers.stats")

RECORD_COUNT = 5

# One day.
MAX_TIMEOUT_MS = 86_400_000

_LABELS = ("visits", "signups", "orders", "refunds", "sessions")


def _record_id(request_id: str, index: int) -> str:
    # Stable per (requestId, index).
    digest = hashlib.sha1(f"{request_id}|{index}".encode("utf-8")).hexdigest()
    return f"stat-{digest[:12]}"


def _stat_records(request_id: str, rng: random.Random) -> list[dict[str, Any]]:
    generated_at = datetime.now(timezone.utc).replace(microsecond=0).isoformat()
    return [
        {
            "id": _record_id(request_id, i),
            "requestId": request_id,
            "label": _LABELS[i % len(_LABELS)],
            "value": rng.randint(0, 1000),
            "generatedAt": generated_at,
        }
        for i in range(RECORD_COUNT)
    ]


def _parse_timeout(raw: str | None) -> float | None:
    """Parse timeoutMs into seconds. None means wait indefinitely."""

    if raw is None or not raw.strip():
        return None
    value = int(raw.strip())
    if value < 0:
        raise ValueError("timeoutMs must be >= 0")
    if value > MAX_TIMEOUT_MS:
        raise ValueError(f"timeoutMs must be <= {MAX_TIMEOUT_MS}")
    return value / 1000


async def get_stats(request: Request) -> JSONResponse:
    ctx: RequestContext = getattr(request.state, "ctx", None) or build_request_context(
        request.headers, request.query_params
    )
    coordinator: BatchDispatchCoordinator = request.app.state.coordinator
    rng: random.Random = request.app.state.rng
    token = ctx.request_id
    echo = {REQUEST_ID: token}

    for w in ctx.warnings:
        log.info("%s: %s", w["code"], w["message"])

    raw_timeout = request.query_params.get("timeoutMs")
    try:
        timeout = _parse_timeout(raw_timeout)
    except ValueError:
        return json_error(
            VALIDATION_FAILED,
            400,
            message=f"timeoutMs must be an integer between 0 and {MAX_TIMEOUT_MS}.",
            details={"timeoutMs": raw_timeout},
            headers=echo,
        )

    try:
        coordinator.submit(token)
        await coordinator.await_completion(token, timeout=timeout)
    except DuplicateTokenError as exc:
        return json_error(
            DUPLICATE_REQUEST_ID,
            409,
            details={**ctx.as_dict(), "reason": exc.reason},
            headers=echo,
        )
    except DispatchTimeoutError as exc:
        log.warning("stats request timed out requestId=%s timeout=%.3fs", token, exc.timeout)
        return json_error(
            DISPATCH_TIMEOUT,
            504,
            details={**ctx.as_dict(), "timeoutMs": round(exc.timeout * 1000)},
            headers=echo,
        )

    return JSONResponse(_stat_records(token, rng), status_code=200, headers=echo)
