"""Idempotency-key helpers for ledger inserts.

Clients may send an ``Idempotency-Key`` header when recording money so that a
retried request never books the same amount twice.
"""
from __future__ import annotations

import logging
from typing import TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

T = TypeVar("T")


def normalize_key(key: str | None) -> str | None:
    """Blank keys mean "no key"; they are never stored."""

    if key is None:
        return None
    return key.strip() or None


def find_by_key(db: Session, model: type[T], key: str | None) -> T | None:
    """Return the row already stored under ``key``, if any."""

    if not key:
        return None
    stmt = select(model).where(model.idempotency_key == key).limit(1)
    return db.scalars(stmt).first()


def insert_once(db: Session, instance: T, *, key: str | None) -> tuple[T, bool]:
    """Insert and commit ``instance``.

    Returns ``(row, created)``. When a concurrent request committed the same
    key first, the unique index rejects this insert and the winning row is
    returned with ``created=False``.
    """

    db.add(instance)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        existing = find_by_key(db, type(instance), key)
        if existing is None:
            raise
        logger.info(
            "Idempotent insert reused after race",
            extra={"model": type(instance).__name__, "row_id": existing.id},
        )
        return existing, False
    db.refresh(instance)
    return instance, True


__all__ = ["find_by_key", "insert_once", "normalize_key"]
