"""Audit trail queries."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from halodkm.config import get_settings
from halodkm.models.audit import AuditLog


def list_audit_logs(db: Session, *, user_id: int | None = None, limit: int | None = None) -> list[AuditLog]:
    """Return the newest audit entries first, optionally for a single actor."""

    settings = get_settings()
    if limit is None:
        limit = settings.AUDIT_LOG_DEFAULT_LIMIT
    limit = max(1, min(limit, settings.AUDIT_LOG_MAX_LIMIT))

    stmt = select(AuditLog)
    if user_id is not None:
        stmt = stmt.where(AuditLog.user_id == user_id)
    stmt = stmt.order_by(AuditLog.created_at.desc(), AuditLog.id.desc()).limit(limit)
    return list(db.scalars(stmt).all())
