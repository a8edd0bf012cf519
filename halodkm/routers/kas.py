"""Mosque cash ledger endpoints."""
from datetime import date

from fastapi import APIRouter, Depends, Header, Query, status
from sqlalchemy.orm import Session

from halodkm.db import get_db
from halodkm.models.kas import Direction
from halodkm.schemas.event import LedgerSummaryRead
from halodkm.schemas.kas import KasCreate, KasListRead, KasRead, KasUpdate
from halodkm.security import Caller, require_admin, require_reader
from halodkm.services import kas as kas_service

router = APIRouter(prefix="/kas", tags=["kas"])


@router.get("", response_model=KasListRead)
def list_kas(
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    direction: Direction | None = Query(default=None, alias="type"),
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_reader),
) -> KasListRead:
    entries, summary = kas_service.list_entries(
        db, start_date=start_date, end_date=end_date, direction=direction
    )
    return KasListRead(
        data=[KasRead.model_validate(entry) for entry in entries],
        summary=LedgerSummaryRead.model_validate(summary),
    )


@router.post("", response_model=KasRead, status_code=status.HTTP_201_CREATED)
def create_kas(
    payload: KasCreate,
    db: Session = Depends(get_db),
    idempotency_key: str | None = Header(default=None, alias="Idempotency-Key", max_length=64),
    caller: Caller = Depends(require_admin),
):
    return kas_service.create_entry(db, payload, actor_id=caller.id, idempotency_key=idempotency_key)


@router.put("/{entry_id}", response_model=KasRead)
def update_kas(
    entry_id: int,
    payload: KasUpdate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_admin),
):
    return kas_service.update_entry(db, entry_id, payload, actor_id=caller.id)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_kas(
    entry_id: int,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_admin),
) -> None:
    kas_service.delete_entry(db, entry_id, actor_id=caller.id)
