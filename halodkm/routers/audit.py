"""Audit log endpoints."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from halodkm.db import get_db
from halodkm.schemas.audit import AuditLogRead
from halodkm.security import require_admin
from halodkm.services import audit as audit_service

router = APIRouter(prefix="/audit", tags=["audit"], dependencies=[Depends(require_admin)])


@router.get("", response_model=list[AuditLogRead])
def list_audit_logs(
    user_id: int | None = Query(default=None),
    limit: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
):
    return audit_service.list_audit_logs(db, user_id=user_id, limit=limit)
