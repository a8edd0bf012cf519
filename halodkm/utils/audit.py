"""Audit logging helper utilities."""
from __future__ import annotations

import logging
from typing import Any, Mapping

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from halodkm.models.audit import AuditLog

logger = logging.getLogger(__name__)

SENSITIVE_KEYS = {"no_hp", "alamat"}


def _mask_value(key: str, value: Any) -> Any:
    if value is None:
        return None

    if key == "no_hp":
        digits = str(value).replace(" ", "")
        if len(digits) <= 4:
            return "***"
        return f"***{digits[-4:]}"

    if key == "alamat":
        return "***"

    return value


def sanitize_payload_for_audit(data: Any) -> Any:
    """Return a copy of ``data`` with personal contact fields masked."""

    if isinstance(data, Mapping):
        sanitized: dict[str, Any] = {}
        for key, value in data.items():
            masked_value = _mask_value(key, value) if key in SENSITIVE_KEYS else value
            sanitized[key] = sanitize_payload_for_audit(masked_value)
        return sanitized

    if isinstance(data, list):
        return [sanitize_payload_for_audit(item) for item in data]

    return data


def log_audit(
    db: Session,
    *,
    actor_id: int,
    action: str,
    entity: str | None = None,
    entity_id: int | None = None,
    data: dict | None = None,
) -> AuditLog | None:
    """Append an audit entry in its own unit of work.

    Called after the business change has been committed. A failing write is
    rolled back and logged; it never reaches the caller.
    """

    entry = AuditLog(
        user_id=actor_id,
        action=action,
        entity=entity,
        entity_id=entity_id,
        data_json=sanitize_payload_for_audit(data or {}),
    )
    try:
        db.add(entry)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.warning(
            "Audit log write failed",
            exc_info=True,
            extra={"actor_id": actor_id, "audit_action": action, "entity": entity, "entity_id": entity_id},
        )
        return None
    return entry


__all__ = ["SENSITIVE_KEYS", "log_audit", "sanitize_payload_for_audit"]
