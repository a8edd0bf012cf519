"""Event endpoints."""
from fastapi import APIRouter, Depends, Header, Query, status
from sqlalchemy.orm import Session

from halodkm.db import get_db
from halodkm.models.event import EventCommitteeMember, EventRecipient, EventStatus
from halodkm.schemas.event import (
    EventCommitteeMemberCreate,
    EventCommitteeMemberRead,
    EventCommitteeMemberUpdate,
    EventCompletionRead,
    EventCreate,
    EventDetailRead,
    EventListItem,
    EventRead,
    EventRecipientCreate,
    EventRecipientRead,
    EventRecipientUpdate,
    EventTransactionCreate,
    EventTransactionRead,
    EventTransactionUpdate,
    EventUpdate,
    LedgerSummaryRead,
)
from halodkm.security import Caller, require_admin, require_reader
from halodkm.services import events as events_service
from halodkm.services import participants as participants_service

router = APIRouter(prefix="/events", tags=["events"])


@router.get("", response_model=list[EventListItem])
def list_events(
    event_status: EventStatus | None = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_reader),
) -> list[EventListItem]:
    overviews = events_service.list_events(db, status=event_status)
    return [
        EventListItem(
            **EventRead.model_validate(item.event).model_dump(),
            total_inflow=item.summary.total_inflow,
            total_outflow=item.summary.total_outflow,
            balance=item.summary.balance,
            total_recipients=item.total_recipients,
        )
        for item in overviews
    ]


@router.post("", response_model=EventRead, status_code=status.HTTP_201_CREATED)
def create_event(
    payload: EventCreate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_admin),
):
    return events_service.create_event(db, payload, actor_id=caller.id)


@router.get("/{event_id}", response_model=EventDetailRead)
def read_event(
    event_id: int,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_reader),
) -> EventDetailRead:
    detail = events_service.get_event_detail(db, event_id)
    return EventDetailRead(
        event=EventRead.model_validate(detail.event),
        transactions=[EventTransactionRead.model_validate(row) for row in detail.transactions],
        summary=LedgerSummaryRead.model_validate(detail.summary),
    )


@router.put("/{event_id}", response_model=EventRead)
def update_event(
    event_id: int,
    payload: EventUpdate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_admin),
):
    return events_service.update_event(db, event_id, payload, actor_id=caller.id)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(
    event_id: int,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_admin),
) -> None:
    events_service.delete_event(db, event_id, actor_id=caller.id)


@router.post("/{event_id}/complete", response_model=EventCompletionRead)
def complete_event(
    event_id: int,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_admin),
) -> EventCompletionRead:
    result = events_service.complete_event(db, event_id, actor_id=caller.id)
    if result.kas_entry is not None:
        message = f"Event completed. Remaining funds of {result.transferred_amount} moved to the mosque cash ledger."
    else:
        message = "Event completed."
    return EventCompletionRead(
        event=EventRead.model_validate(result.event),
        transferred_amount=result.transferred_amount,
        kas_entry_id=result.kas_entry.id if result.kas_entry is not None else None,
        message=message,
    )


@router.post(
    "/{event_id}/transactions",
    response_model=EventTransactionRead,
    status_code=status.HTTP_201_CREATED,
)
def add_transaction(
    event_id: int,
    payload: EventTransactionCreate,
    db: Session = Depends(get_db),
    idempotency_key: str | None = Header(default=None, alias="Idempotency-Key", max_length=64),
    caller: Caller = Depends(require_admin),
):
    return events_service.add_transaction(
        db, event_id, payload, actor_id=caller.id, idempotency_key=idempotency_key
    )


@router.put("/{event_id}/transactions/{transaction_id}", response_model=EventTransactionRead)
def update_transaction(
    event_id: int,
    transaction_id: int,
    payload: EventTransactionUpdate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_admin),
):
    return events_service.update_transaction(db, event_id, transaction_id, payload, actor_id=caller.id)


@router.delete("/{event_id}/transactions/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(
    event_id: int,
    transaction_id: int,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_admin),
) -> None:
    events_service.delete_transaction(db, event_id, transaction_id, actor_id=caller.id)


# --- Recipients ------------------------------------------------------------


@router.get("/{event_id}/recipients", response_model=list[EventRecipientRead])
def list_recipients(
    event_id: int,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_reader),
):
    return participants_service.list_rows(db, EventRecipient, event_id)


@router.post(
    "/{event_id}/recipients",
    response_model=EventRecipientRead,
    status_code=status.HTTP_201_CREATED,
)
def create_recipient(
    event_id: int,
    payload: EventRecipientCreate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_admin),
):
    return participants_service.create_row(db, EventRecipient, event_id, payload, actor_id=caller.id)


@router.put("/{event_id}/recipients/{recipient_id}", response_model=EventRecipientRead)
def update_recipient(
    event_id: int,
    recipient_id: int,
    payload: EventRecipientUpdate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_admin),
):
    return participants_service.update_row(db, EventRecipient, event_id, recipient_id, payload, actor_id=caller.id)


@router.delete("/{event_id}/recipients/{recipient_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recipient(
    event_id: int,
    recipient_id: int,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_admin),
) -> None:
    participants_service.delete_row(db, EventRecipient, event_id, recipient_id, actor_id=caller.id)


# --- Committee -------------------------------------------------------------


@router.get("/{event_id}/committee", response_model=list[EventCommitteeMemberRead])
def list_committee(
    event_id: int,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_reader),
):
    return participants_service.list_rows(db, EventCommitteeMember, event_id)


@router.post(
    "/{event_id}/committee",
    response_model=EventCommitteeMemberRead,
    status_code=status.HTTP_201_CREATED,
)
def create_committee_member(
    event_id: int,
    payload: EventCommitteeMemberCreate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_admin),
):
    return participants_service.create_row(db, EventCommitteeMember, event_id, payload, actor_id=caller.id)


@router.put("/{event_id}/committee/{member_id}", response_model=EventCommitteeMemberRead)
def update_committee_member(
    event_id: int,
    member_id: int,
    payload: EventCommitteeMemberUpdate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_admin),
):
    return participants_service.update_row(
        db, EventCommitteeMember, event_id, member_id, payload, actor_id=caller.id
    )


@router.delete("/{event_id}/committee/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_committee_member(
    event_id: int,
    member_id: int,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_admin),
) -> None:
    participants_service.delete_row(db, EventCommitteeMember, event_id, member_id, actor_id=caller.id)
