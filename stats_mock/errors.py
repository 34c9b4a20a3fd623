"""Error catalog and coordinator exceptions for the mock server.

Error bodies always carry a stable code so UI code can branch on it
instead of on free-form messages.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class ErrorCode:
    """Represents a stable error code used in the `error.code` field."""

    code: str
    default_message: str

    def as_error(self, *, message: str | None = None, details: Any | None = None) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": message if message is not None else self.default_message,
            "details": details,
        }


VALIDATION_FAILED = ErrorCode(
    code="VALIDATION_FAILED",
    default_message="Request validation failed.",
)

PRODUCT_NOT_FOUND = ErrorCode(
    code="PRODUCT_NOT_FOUND",
    default_message="Product not found",
)

DUPLICATE_REQUEST_ID = ErrorCode(
    code="DUPLICATE_REQUEST_ID",
    default_message="A request with the same requestId is already in flight.",
)

DISPATCH_TIMEOUT = ErrorCode(
    code="DISPATCH_TIMEOUT",
    default_message="Request was not dispatched before the requested timeout.",
)

# Fallback for any path the mock does not know, mirroring a broken backend.
SIMULATED_FAILURE = ErrorCode(
    code="SIMULATED_FAILURE",
    default_message="Internal server error",
)

UNEXPECTED_ERROR = ErrorCode(
    code="UNEXPECTED_ERROR",
    default_message="Unexpected error in mock server.",
)


class CoordinatorError(Exception):
    """Base class for batch dispatch coordinator errors."""


class DuplicateTokenError(CoordinatorError, ValueError):
    """Raised when a token is already in flight or already awaited."""

    def __init__(self, token: str, reason: str) -> None:
        super().__init__(f"token {token!r} {reason}")
        self.token = token
        self.reason = reason


class DispatchTimeoutError(CoordinatorError, TimeoutError):
    """Raised by await_completion when its deadline elapses first."""

    def __init__(self, token: str, timeout: float) -> None:
        super().__init__(f"token {token!r} was not dispatched within {timeout:.3f}s")
        self.token = token
        self.timeout = timeout


def error_from_exception(exc: Exception) -> dict[str, Any]:
    """Best-effort conversion of unexpected exceptions into a stable error shape."""

    return UNEXPECTED_ERROR.as_error(details={"type": type(exc).__name__, "message": str(exc)})
