"""Mosque cash ledger schemas."""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from halodkm.models.kas import Direction
from halodkm.schemas.event import LedgerSummaryRead


class KasCreate(BaseModel):
    type: Direction
    amount: Decimal = Field(gt=Decimal("0"), max_digits=18, decimal_places=2)
    description: str = Field(min_length=1)
    category: str | None = Field(default=None, max_length=100)
    tanggal: date

    model_config = ConfigDict(str_strip_whitespace=True)


class KasUpdate(KasCreate):
    pass


class KasRead(BaseModel):
    id: int
    type: Direction
    amount: Decimal
    description: str
    category: str | None
    tanggal: date
    event_id: int | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class KasListRead(BaseModel):
    data: list[KasRead]
    summary: LedgerSummaryRead
