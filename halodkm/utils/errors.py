"""Error taxonomy and standardized error responses."""
from __future__ import annotations

from typing import Any


def error_response(
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
    *,
    kind: str | None = None,
) -> dict[str, Any]:
    """Return a standardized error payload."""

    payload: dict[str, Any] = {"error": {"code": code, "message": message}}
    if kind:
        payload["error"]["kind"] = kind
    if details:
        payload["error"]["details"] = details
    return payload


class LedgerError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 400
    kind = "error"
    default_code = "ERROR"

    def __init__(self, message: str, *, code: str | None = None, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details

    def to_response(self) -> dict[str, Any]:
        return error_response(self.code, self.message, self.details, kind=self.kind)


class InvalidInput(LedgerError):
    """Malformed or missing fields."""

    status_code = 400
    kind = "invalid_input"
    default_code = "INVALID_INPUT"


class Unauthorized(LedgerError):
    """No usable caller identity."""

    status_code = 401
    kind = "unauthorized"
    default_code = "UNAUTHORIZED"


class Forbidden(LedgerError):
    """Caller role is not allowed to perform the operation."""

    status_code = 403
    kind = "forbidden"
    default_code = "FORBIDDEN"


class NotFound(LedgerError):
    """Referenced entity does not exist."""

    status_code = 404
    kind = "not_found"
    default_code = "NOT_FOUND"


class Conflict(LedgerError):
    """Valid request that violates a current-state rule."""

    status_code = 409
    kind = "conflict"
    default_code = "CONFLICT"


class InvalidState(LedgerError):
    """Business rule of the completion protocol violated."""

    status_code = 400
    kind = "invalid_state"
    default_code = "INVALID_STATE"


__all__ = [
    "Conflict",
    "Forbidden",
    "InvalidInput",
    "InvalidState",
    "LedgerError",
    "NotFound",
    "Unauthorized",
    "error_response",
]
