"""Identity gate and role enforcement.

The caller arrives already authenticated upstream as a JSON blob in the
``X-User-Info`` header (``{"id": 1, "role": "admin"}``). This module only
parses it. Deployments that verify signed tokens replace ``require_caller``
(for instance through ``app.dependency_overrides``) and keep the role checks.
"""
from __future__ import annotations

import json
from typing import Callable, Set

from fastapi import Depends, Request
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from halodkm.config import ROLES, get_settings
from halodkm.utils.errors import Forbidden, Unauthorized

ADMIN = "admin"
JAMAAH = "jamaah"


class Caller(BaseModel):
    """Identity attached to every mutating operation."""

    id: int
    role: str

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("role")
    @classmethod
    def _known_role(cls, value: str) -> str:
        role = value.strip().lower()
        if role not in ROLES:
            raise ValueError(f"unknown role {value!r}")
        return role


def require_caller(request: Request) -> Caller:
    """Parse the identity header; anything unusable is a 401."""

    raw = request.headers.get(get_settings().IDENTITY_HEADER)
    if not raw:
        raise Unauthorized("Login required.", code="NO_IDENTITY")
    try:
        return Caller.model_validate(json.loads(raw))
    except (ValueError, TypeError, ValidationError) as exc:
        raise Unauthorized("Invalid identity header.", code="INVALID_IDENTITY") from exc


def require_role(allowed: Set[str]) -> Callable:
    """Enforce that the caller holds one of the ``allowed`` roles."""

    if not allowed:
        raise RuntimeError("require_role needs a non-empty set of roles")

    def _dep(caller: Caller = Depends(require_caller)) -> Caller:
        if caller.role in allowed:
            return caller
        raise Forbidden(
            f"Requires one of: {sorted(allowed)}",
            code="INSUFFICIENT_ROLE",
        )

    return _dep


require_admin = require_role({ADMIN})
require_reader = require_role({ADMIN, JAMAAH})


__all__ = ["ADMIN", "JAMAAH", "Caller", "require_admin", "require_caller", "require_reader", "require_role"]
