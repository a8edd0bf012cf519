"""Mosque cash ledger services."""
from __future__ import annotations

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from halodkm.models.kas import Direction, KasMasjid
from halodkm.schemas.kas import KasCreate, KasUpdate
from halodkm.services import balance
from halodkm.services.balance import LedgerSummary
from halodkm.services.idempotency import find_by_key, insert_once, normalize_key
from halodkm.utils.audit import log_audit
from halodkm.utils.errors import InvalidInput, NotFound

logger = logging.getLogger(__name__)


def _get_entry_or_404(db: Session, entry_id: int) -> KasMasjid:
    entry = db.get(KasMasjid, entry_id)
    if entry is None:
        raise NotFound("Cash ledger entry not found.", code="KAS_ENTRY_NOT_FOUND")
    return entry


def list_entries(
    db: Session,
    *,
    start_date: date | None = None,
    end_date: date | None = None,
    direction: Direction | None = None,
) -> tuple[list[KasMasjid], LedgerSummary]:
    """Return filtered entries (newest first) and the summary of the whole ledger."""

    if start_date and end_date and start_date > end_date:
        raise InvalidInput(
            "start_date must not be after end_date.",
            code="INVALID_DATE_RANGE",
            details={"start_date": start_date.isoformat(), "end_date": end_date.isoformat()},
        )

    stmt = select(KasMasjid)
    if start_date:
        stmt = stmt.where(KasMasjid.tanggal >= start_date)
    if end_date:
        stmt = stmt.where(KasMasjid.tanggal <= end_date)
    if direction:
        stmt = stmt.where(KasMasjid.type == direction)
    stmt = stmt.order_by(KasMasjid.tanggal.desc(), KasMasjid.created_at.desc(), KasMasjid.id.desc())

    entries = list(db.scalars(stmt).all())
    return entries, balance.summarize(db, KasMasjid)


def create_entry(
    db: Session,
    payload: KasCreate,
    *,
    actor_id: int,
    idempotency_key: str | None = None,
) -> KasMasjid:
    idempotency_key = normalize_key(idempotency_key)
    existing = find_by_key(db, KasMasjid, idempotency_key)
    if existing is not None:
        logger.info("Idempotent cash entry reused", extra={"kas_entry_id": existing.id})
        return existing

    entry = KasMasjid(
        type=payload.type,
        amount=balance.to_decimal(payload.amount),
        description=payload.description,
        category=payload.category or None,
        tanggal=payload.tanggal,
        idempotency_key=idempotency_key,
    )
    entry, created = insert_once(db, entry, key=idempotency_key)
    if not created:
        return entry

    logger.info("Cash entry created", extra={"kas_entry_id": entry.id, "actor_id": actor_id})
    log_audit(
        db,
        actor_id=actor_id,
        action=f"Added cash entry: {entry.type.value} {entry.amount} - {entry.description}",
        entity="KasMasjid",
        entity_id=entry.id,
        data={"amount": str(entry.amount), "type": entry.type.value, "category": entry.category},
    )
    return entry


def update_entry(db: Session, entry_id: int, payload: KasUpdate, *, actor_id: int) -> KasMasjid:
    entry = _get_entry_or_404(db, entry_id)

    previous_amount = entry.amount
    entry.type = payload.type
    entry.amount = balance.to_decimal(payload.amount)
    entry.description = payload.description
    entry.category = payload.category or None
    entry.tanggal = payload.tanggal
    db.commit()
    db.refresh(entry)
    logger.info("Cash entry updated", extra={"kas_entry_id": entry.id, "actor_id": actor_id})
    log_audit(
        db,
        actor_id=actor_id,
        action=f"Updated cash entry ID {entry.id}: {entry.type.value} {entry.amount} - {entry.description}",
        entity="KasMasjid",
        entity_id=entry.id,
        data={"previous_amount": str(previous_amount), "amount": str(entry.amount), "type": entry.type.value},
    )
    return entry


def delete_entry(db: Session, entry_id: int, *, actor_id: int) -> None:
    entry = _get_entry_or_404(db, entry_id)

    description = entry.description
    data = {"amount": str(entry.amount), "type": entry.type.value, "category": entry.category}
    db.delete(entry)
    db.commit()
    logger.info("Cash entry deleted", extra={"kas_entry_id": entry_id, "actor_id": actor_id})
    log_audit(
        db,
        actor_id=actor_id,
        action=f"Deleted cash entry: {description}",
        entity="KasMasjid",
        entity_id=entry_id,
        data=data,
    )


__all__ = ["create_entry", "delete_entry", "list_entries", "update_entry"]
