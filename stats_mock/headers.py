"""Request context resolution.

The stats endpoint correlates each request with a caller-supplied token.
The mock stays lenient: when no token is given it generates one and
records a warning instead of failing the request.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping
from uuid import uuid4


REQUEST_ID = "X-Request-Id"
REQUEST_ID_PARAM = "requestId"


def _lower_map(headers: Mapping[str, str]) -> dict[str, str]:
    return {str(k).lower(): str(v) for k, v in headers.items()}


@dataclass(slots=True)
class RequestContext:
    """Normalized request context.

    - request_id: the correlation token (generated if missing)
    - warnings: always a list of dicts (stable JSON shape)
    """

    request_id: str
    generated: bool = False
    warnings: list[dict] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {"requestId": self.request_id, "generated": self.generated}


def build_request_context(
    headers: Mapping[str, str],
    query: Mapping[str, str] | None = None,
) -> RequestContext:
    """Build a RequestContext from query parameters and headers.

    Policy:
    - Always succeeds.
    - `requestId` query parameter wins over the X-Request-Id header.
    - A missing or blank token is replaced by a generated one, with a warning.
    """

    from_query = ((query or {}).get(REQUEST_ID_PARAM) or "").strip()
    if from_query:
        return RequestContext(request_id=from_query)

    from_header = _lower_map(headers).get(REQUEST_ID.lower(), "").strip()
    if from_header:
        return RequestContext(request_id=from_header)

    generated = f"req-{uuid4().hex}"
    return RequestContext(
        request_id=generated,
        generated=True,
        warnings=[
            {
                "code": "MISSING_REQUEST_ID",
                "message": f"Neither {REQUEST_ID_PARAM} nor {REQUEST_ID} was sent; mock generated a value.",
                "details": {"requestId": generated},
            }
        ],
    )
