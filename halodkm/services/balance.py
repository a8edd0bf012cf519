"""Ledger balance aggregation.

Balances are always derived from the ledger rows, never stored. The same
aggregate is available in two forms: ``aggregate`` folds rows already loaded
in memory, ``summarize`` lets the database compute conditional sums.
Both work on Decimal only.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from halodkm.models.event import EventKas
from halodkm.models.kas import Direction

ZERO = Decimal("0.00")
CENT = Decimal("0.01")


def to_decimal(value: Any) -> Decimal:
    """
    Convert a money amount to a two-place Decimal.
    Accepts Decimal, int, float, str. Raises ValueError if invalid.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        d = value
    else:
        try:
            # str() avoids binary float artefacts
            d = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError) as e:
            raise ValueError(f"Invalid money amount: {value!r}") from e
    return d.quantize(CENT)


@dataclass(frozen=True)
class LedgerSummary:
    total_inflow: Decimal = ZERO
    total_outflow: Decimal = ZERO

    @property
    def balance(self) -> Decimal:
        return self.total_inflow - self.total_outflow

    def as_dict(self) -> dict[str, str]:
        return {
            "total_inflow": str(self.total_inflow),
            "total_outflow": str(self.total_outflow),
            "balance": str(self.balance),
        }


def aggregate(transactions: Iterable[Any]) -> LedgerSummary:
    """Sum inflows and outflows of ``transactions`` (objects with ``type`` and ``amount``)."""

    inflow = ZERO
    outflow = ZERO
    for row in transactions:
        amount = to_decimal(row.amount)
        if Direction(row.type) is Direction.INFLOW:
            inflow += amount
        else:
            outflow += amount
    return LedgerSummary(total_inflow=inflow, total_outflow=outflow)


def _sum_columns(model) -> tuple:
    inflow = func.coalesce(func.sum(case((model.type == Direction.INFLOW, model.amount), else_=0)), 0)
    outflow = func.coalesce(func.sum(case((model.type == Direction.OUTFLOW, model.amount), else_=0)), 0)
    return inflow.label("total_inflow"), outflow.label("total_outflow")


def summarize(db: Session, model, *criteria) -> LedgerSummary:
    """Aggregate ``model`` rows matching ``criteria`` in a single grouped query."""

    inflow, outflow = _sum_columns(model)
    row = db.execute(select(inflow, outflow).where(*criteria)).one()
    return LedgerSummary(total_inflow=to_decimal(row.total_inflow), total_outflow=to_decimal(row.total_outflow))


def summarize_event(db: Session, event_id: int) -> LedgerSummary:
    return summarize(db, EventKas, EventKas.event_id == event_id)


def summarize_by_event(db: Session, event_ids: Sequence[int]) -> dict[int, LedgerSummary]:
    """Return one summary per event id; events without transactions get zeros."""

    if not event_ids:
        return {}
    inflow, outflow = _sum_columns(EventKas)
    stmt = (
        select(EventKas.event_id, inflow, outflow)
        .where(EventKas.event_id.in_(event_ids))
        .group_by(EventKas.event_id)
    )
    summaries = {event_id: LedgerSummary() for event_id in event_ids}
    for row in db.execute(stmt):
        summaries[row.event_id] = LedgerSummary(
            total_inflow=to_decimal(row.total_inflow),
            total_outflow=to_decimal(row.total_outflow),
        )
    return summaries


__all__ = [
    "LedgerSummary",
    "ZERO",
    "aggregate",
    "summarize",
    "summarize_by_event",
    "summarize_event",
    "to_decimal",
]
