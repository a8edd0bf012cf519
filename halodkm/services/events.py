"""Event lifecycle services.

An event owns a private cash ledger (``event_kas``). While the event is
active its transactions may be added, edited and removed. Completing the
event is a one-way transition that also moves any positive remaining balance
into the mosque cash ledger (``kas_masjid``) in the same database
transaction.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from halodkm.config import get_settings
from halodkm.models.event import Event, EventKas, EventRecipient, EventStatus
from halodkm.models.kas import TRANSFER_CATEGORY, Direction, KasMasjid
from halodkm.schemas.event import (
    EventCreate,
    EventTransactionCreate,
    EventTransactionUpdate,
    EventUpdate,
)
from halodkm.services import balance
from halodkm.services.balance import ZERO, LedgerSummary
from halodkm.services.idempotency import find_by_key, insert_once, normalize_key
from halodkm.utils.audit import log_audit
from halodkm.utils.errors import Conflict, InvalidState, NotFound
from halodkm.utils.time import local_today, utcnow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventOverview:
    event: Event
    summary: LedgerSummary
    total_recipients: int


@dataclass(frozen=True)
class EventDetail:
    event: Event
    transactions: list[EventKas]
    summary: LedgerSummary


@dataclass(frozen=True)
class CompletionResult:
    event: Event
    transferred_amount: Decimal
    kas_entry: KasMasjid | None


def _get_event_or_404(db: Session, event_id: int, *, lock: bool = False) -> Event:
    stmt = select(Event).where(Event.id == event_id)
    if lock:
        stmt = stmt.with_for_update().execution_options(populate_existing=True)
    event = db.execute(stmt).scalar_one_or_none()
    if event is None:
        raise NotFound("Event not found.", code="EVENT_NOT_FOUND")
    return event


def get_event_or_404(db: Session, event_id: int) -> Event:
    return _get_event_or_404(db, event_id)


def _ensure_active(event: Event, message: str) -> None:
    if event.status == EventStatus.COMPLETED:
        raise Conflict(message, code="EVENT_COMPLETED", details={"event_id": event.id})


def _get_transaction_or_404(db: Session, event_id: int, transaction_id: int) -> EventKas:
    stmt = select(EventKas).where(EventKas.id == transaction_id, EventKas.event_id == event_id)
    transaction = db.execute(stmt).scalar_one_or_none()
    if transaction is None:
        raise NotFound("Transaction not found for this event.", code="EVENT_TRANSACTION_NOT_FOUND")
    return transaction


def list_events(db: Session, *, status: EventStatus | None = None) -> list[EventOverview]:
    stmt = select(Event)
    if status is not None:
        stmt = stmt.where(Event.status == status)
    stmt = stmt.order_by(Event.tanggal_mulai.desc(), Event.created_at.desc(), Event.id.desc())
    events = list(db.scalars(stmt).all())

    event_ids = [event.id for event in events]
    summaries = balance.summarize_by_event(db, event_ids)
    recipient_counts: dict[int, int] = {}
    if event_ids:
        counts = db.execute(
            select(EventRecipient.event_id, func.count(EventRecipient.id))
            .where(EventRecipient.event_id.in_(event_ids))
            .group_by(EventRecipient.event_id)
        )
        recipient_counts = {event_id: count for event_id, count in counts}

    return [
        EventOverview(
            event=event,
            summary=summaries[event.id],
            total_recipients=recipient_counts.get(event.id, 0),
        )
        for event in events
    ]


def get_event_detail(db: Session, event_id: int) -> EventDetail:
    event = _get_event_or_404(db, event_id)
    transactions = list(
        db.scalars(
            select(EventKas)
            .where(EventKas.event_id == event_id)
            .order_by(EventKas.tanggal.desc(), EventKas.created_at.desc(), EventKas.id.desc())
        ).all()
    )
    return EventDetail(event=event, transactions=transactions, summary=balance.aggregate(transactions))


def create_event(db: Session, payload: EventCreate, *, actor_id: int) -> Event:
    """Create a new event in the active state."""

    event = Event(
        nama=payload.nama,
        deskripsi=payload.deskripsi,
        tipe=payload.tipe,
        tanggal_mulai=payload.tanggal_mulai,
        status=EventStatus.ACTIVE,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info("Event created", extra={"event_id": event.id, "actor_id": actor_id})
    log_audit(
        db,
        actor_id=actor_id,
        action=f'Created event "{event.nama}"',
        entity="Event",
        entity_id=event.id,
        data={"tipe": event.tipe.value, "tanggal_mulai": event.tanggal_mulai.isoformat()},
    )
    return event


def update_event(db: Session, event_id: int, payload: EventUpdate, *, actor_id: int) -> Event:
    event = _get_event_or_404(db, event_id, lock=True)
    if get_settings().LOCK_COMPLETED_EVENTS:
        _ensure_active(event, "Cannot edit a completed event.")

    event.nama = payload.nama
    event.deskripsi = payload.deskripsi
    event.tipe = payload.tipe
    event.tanggal_mulai = payload.tanggal_mulai
    db.commit()
    db.refresh(event)
    logger.info("Event updated", extra={"event_id": event.id, "actor_id": actor_id})
    log_audit(
        db,
        actor_id=actor_id,
        action=f'Updated event ID {event.id}: "{event.nama}"',
        entity="Event",
        entity_id=event.id,
        data={"tipe": event.tipe.value, "tanggal_mulai": event.tanggal_mulai.isoformat()},
    )
    return event


def delete_event(db: Session, event_id: int, *, actor_id: int) -> None:
    """Delete an event that owns no transactions, whatever its status."""

    event = _get_event_or_404(db, event_id, lock=True)
    transaction_count = db.scalar(select(func.count(EventKas.id)).where(EventKas.event_id == event_id))
    if transaction_count:
        db.rollback()
        raise Conflict(
            "Event has transactions. Delete its transactions first or complete the event.",
            code="EVENT_HAS_TRANSACTIONS",
            details={"event_id": event_id, "transactions": transaction_count},
        )

    name = event.nama
    db.delete(event)
    db.commit()
    logger.info("Event deleted", extra={"event_id": event_id, "actor_id": actor_id})
    log_audit(
        db,
        actor_id=actor_id,
        action=f'Deleted event "{name}"',
        entity="Event",
        entity_id=event_id,
    )


def add_transaction(
    db: Session,
    event_id: int,
    payload: EventTransactionCreate,
    *,
    actor_id: int,
    idempotency_key: str | None = None,
) -> EventKas:
    """Record an inflow or outflow on an active event."""

    idempotency_key = normalize_key(idempotency_key)
    if idempotency_key:
        existing = find_by_key(db, EventKas, idempotency_key)
        if existing is not None:
            if existing.event_id != event_id:
                raise Conflict(
                    "Idempotency key already used for another event.",
                    code="IDEMPOTENCY_KEY_REUSED",
                )
            logger.info(
                "Idempotent event transaction reused",
                extra={"event_id": event_id, "transaction_id": existing.id},
            )
            return existing

    event = _get_event_or_404(db, event_id, lock=True)
    _ensure_active(event, "Cannot add a transaction to a completed event.")

    transaction = EventKas(
        event_id=event.id,
        type=payload.type,
        amount=balance.to_decimal(payload.amount),
        description=payload.description,
        tanggal=payload.tanggal,
        idempotency_key=idempotency_key,
    )
    transaction, created = insert_once(db, transaction, key=idempotency_key)
    if not created:
        return transaction
    logger.info(
        "Event transaction added",
        extra={"event_id": event_id, "transaction_id": transaction.id, "type": transaction.type.value},
    )
    log_audit(
        db,
        actor_id=actor_id,
        action=(
            f'Added {transaction.type.value} transaction of {transaction.amount} '
            f'to event "{event.nama}": {transaction.description}'
        ),
        entity="EventKas",
        entity_id=transaction.id,
        data={"event_id": event_id, "amount": str(transaction.amount), "type": transaction.type.value},
    )
    return transaction


def update_transaction(
    db: Session,
    event_id: int,
    transaction_id: int,
    payload: EventTransactionUpdate,
    *,
    actor_id: int,
) -> EventKas:
    event = _get_event_or_404(db, event_id, lock=True)
    _ensure_active(event, "Cannot change a transaction of a completed event.")
    transaction = _get_transaction_or_404(db, event_id, transaction_id)

    previous_amount = transaction.amount
    transaction.type = payload.type
    transaction.amount = balance.to_decimal(payload.amount)
    transaction.description = payload.description
    transaction.tanggal = payload.tanggal
    db.commit()
    db.refresh(transaction)
    logger.info("Event transaction updated", extra={"event_id": event_id, "transaction_id": transaction_id})
    log_audit(
        db,
        actor_id=actor_id,
        action=f'Updated transaction ID {transaction_id} of event "{event.nama}"',
        entity="EventKas",
        entity_id=transaction_id,
        data={
            "event_id": event_id,
            "previous_amount": str(previous_amount),
            "amount": str(transaction.amount),
            "type": transaction.type.value,
        },
    )
    return transaction


def delete_transaction(db: Session, event_id: int, transaction_id: int, *, actor_id: int) -> None:
    event = _get_event_or_404(db, event_id, lock=True)
    _ensure_active(event, "Cannot delete a transaction of a completed event.")
    transaction = _get_transaction_or_404(db, event_id, transaction_id)

    data = {"event_id": event_id, "amount": str(transaction.amount), "type": transaction.type.value}
    db.delete(transaction)
    db.commit()
    logger.info("Event transaction deleted", extra={"event_id": event_id, "transaction_id": transaction_id})
    log_audit(
        db,
        actor_id=actor_id,
        action=f'Deleted transaction ID {transaction_id} of event "{event.nama}"',
        entity="EventKas",
        entity_id=transaction_id,
        data=data,
    )


def _mark_completed(db: Session, event_id: int) -> bool:
    """Flip ``aktif`` to ``selesai``; False when another caller already did."""

    stmt = (
        update(Event)
        .where(Event.id == event_id, Event.status == EventStatus.ACTIVE)
        .values(status=EventStatus.COMPLETED, tanggal_selesai=local_today(), updated_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    result = db.execute(stmt)
    return result.rowcount == 1


def complete_event(db: Session, event_id: int, *, actor_id: int) -> CompletionResult:
    """Close an event and transfer its remaining balance to the mosque cash ledger."""

    event = _get_event_or_404(db, event_id, lock=True)
    if event.status == EventStatus.COMPLETED:
        db.rollback()
        raise Conflict("Event is already completed.", code="EVENT_ALREADY_COMPLETED", details={"event_id": event_id})

    summary = balance.summarize_event(db, event_id)
    saldo = summary.balance
    if saldo < ZERO:
        db.rollback()
        raise InvalidState(
            f"Cannot complete an event with a negative balance ({saldo}).",
            code="NEGATIVE_EVENT_BALANCE",
            details={"event_id": event_id, "balance": str(saldo)},
        )

    if not _mark_completed(db, event_id):
        db.rollback()
        raise Conflict("Event is already completed.", code="EVENT_ALREADY_COMPLETED", details={"event_id": event_id})

    kas_entry: KasMasjid | None = None
    if saldo > ZERO:
        kas_entry = KasMasjid(
            type=Direction.INFLOW,
            amount=saldo,
            description=f"Remaining funds from event: {event.nama}",
            category=TRANSFER_CATEGORY,
            tanggal=local_today(),
            event_id=event_id,
        )
        db.add(kas_entry)
    db.commit()
    db.refresh(event)
    if kas_entry is not None:
        db.refresh(kas_entry)

    transferred = saldo if saldo > ZERO else ZERO
    logger.info(
        "Event completed",
        extra={
            "event_id": event_id,
            "actor_id": actor_id,
            "transferred_amount": str(transferred),
            "kas_entry_id": kas_entry.id if kas_entry else None,
        },
    )
    log_audit(
        db,
        actor_id=actor_id,
        action=f'Completed event "{event.nama}"; {transferred} transferred to the mosque cash ledger',
        entity="Event",
        entity_id=event_id,
        data={
            "transferred_amount": str(transferred),
            "kas_entry_id": kas_entry.id if kas_entry else None,
            **summary.as_dict(),
        },
    )
    return CompletionResult(event=event, transferred_amount=transferred, kas_entry=kas_entry)


__all__ = [
    "CompletionResult",
    "EventDetail",
    "EventOverview",
    "add_transaction",
    "complete_event",
    "create_event",
    "delete_event",
    "delete_transaction",
    "get_event_detail",
    "get_event_or_404",
    "list_events",
    "update_event",
    "update_transaction",
]
