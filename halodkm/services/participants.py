"""Recipients and committee members attached to an event.

Both are plain records scoped to one event. They are not part of the money
flow, so completing an event does not freeze them.
"""
from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.orm import Session

from halodkm.models.event import EventCommitteeMember, EventRecipient
from halodkm.services.events import get_event_or_404
from halodkm.utils.audit import log_audit
from halodkm.utils.errors import NotFound

logger = logging.getLogger(__name__)

_LABELS = {
    EventRecipient: ("recipient", "RECIPIENT_NOT_FOUND"),
    EventCommitteeMember: ("committee member", "COMMITTEE_MEMBER_NOT_FOUND"),
}


def _get_row_or_404(db: Session, model: Any, event_id: int, row_id: int) -> Any:
    row = db.execute(select(model).where(model.id == row_id, model.event_id == event_id)).scalar_one_or_none()
    if row is None:
        label, code = _LABELS[model]
        raise NotFound(f"The {label} was not found for this event.", code=code)
    return row


def list_rows(db: Session, model: Any, event_id: int) -> list[Any]:
    get_event_or_404(db, event_id)
    return list(db.scalars(select(model).where(model.event_id == event_id).order_by(model.nama.asc())).all())


def create_row(db: Session, model: Any, event_id: int, payload: BaseModel, *, actor_id: int) -> Any:
    event = get_event_or_404(db, event_id)
    row = model(event_id=event.id, **payload.model_dump())
    db.add(row)
    db.commit()
    db.refresh(row)

    label, _ = _LABELS[model]
    logger.info("Event %s added", label, extra={"event_id": event_id, "row_id": row.id})
    log_audit(
        db,
        actor_id=actor_id,
        action=f'Added {label} "{row.nama}" to event "{event.nama}"',
        entity=model.__name__,
        entity_id=row.id,
        data=payload.model_dump(mode="json"),
    )
    return row


def update_row(db: Session, model: Any, event_id: int, row_id: int, payload: BaseModel, *, actor_id: int) -> Any:
    row = _get_row_or_404(db, model, event_id, row_id)
    for field, value in payload.model_dump().items():
        setattr(row, field, value)
    db.commit()
    db.refresh(row)

    label, _ = _LABELS[model]
    logger.info("Event %s updated", label, extra={"event_id": event_id, "row_id": row.id})
    log_audit(
        db,
        actor_id=actor_id,
        action=f'Updated {label} "{row.nama}" of event ID {event_id}',
        entity=model.__name__,
        entity_id=row.id,
        data=payload.model_dump(mode="json"),
    )
    return row


def delete_row(db: Session, model: Any, event_id: int, row_id: int, *, actor_id: int) -> None:
    row = _get_row_or_404(db, model, event_id, row_id)
    name = row.nama
    db.delete(row)
    db.commit()

    label, _ = _LABELS[model]
    logger.info("Event %s deleted", label, extra={"event_id": event_id, "row_id": row_id})
    log_audit(
        db,
        actor_id=actor_id,
        action=f'Deleted {label} "{name}" from event ID {event_id}',
        entity=model.__name__,
        entity_id=row_id,
    )


__all__ = ["create_row", "delete_row", "list_rows", "update_row"]
