"""Event schemas."""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from halodkm.models.event import EventStatus, EventType
from halodkm.models.kas import Direction


class EventCreate(BaseModel):
    nama: str = Field(min_length=1, max_length=255)
    deskripsi: str | None = None
    tipe: EventType = EventType.FUNDRAISING
    tanggal_mulai: date

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("tipe", mode="before")
    @classmethod
    def _default_type(cls, value: object) -> object:
        """An empty or null type falls back to fundraising."""

        if value is None or value == "":
            return EventType.FUNDRAISING
        return value

    @field_validator("deskripsi")
    @classmethod
    def _blank_description(cls, value: str | None) -> str | None:
        return value or None


class EventUpdate(EventCreate):
    pass


class EventRead(BaseModel):
    id: int
    nama: str
    deskripsi: str | None
    tipe: EventType
    tanggal_mulai: date
    tanggal_selesai: date | None
    status: EventStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LedgerSummaryRead(BaseModel):
    total_inflow: Decimal
    total_outflow: Decimal
    balance: Decimal

    model_config = ConfigDict(from_attributes=True)


class EventListItem(EventRead):
    total_inflow: Decimal
    total_outflow: Decimal
    balance: Decimal
    total_recipients: int


class EventTransactionCreate(BaseModel):
    type: Direction
    amount: Decimal = Field(gt=Decimal("0"), max_digits=18, decimal_places=2)
    description: str = Field(min_length=1)
    tanggal: date

    model_config = ConfigDict(str_strip_whitespace=True)


class EventTransactionUpdate(EventTransactionCreate):
    pass


class EventTransactionRead(BaseModel):
    id: int
    event_id: int
    type: Direction
    amount: Decimal
    description: str
    tanggal: date
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class EventDetailRead(BaseModel):
    event: EventRead
    transactions: list[EventTransactionRead]
    summary: LedgerSummaryRead


class EventCompletionRead(BaseModel):
    event: EventRead
    transferred_amount: Decimal
    kas_entry_id: int | None = None
    message: str


class EventRecipientCreate(BaseModel):
    nama: str = Field(min_length=1, max_length=255)
    alamat: str | None = None
    no_hp: str | None = Field(default=None, max_length=32)
    jenis_bantuan: str | None = Field(default=None, max_length=100)
    jumlah: Decimal | None = Field(default=None, ge=Decimal("0"), max_digits=18, decimal_places=2)
    keterangan: str | None = None

    model_config = ConfigDict(str_strip_whitespace=True)


class EventRecipientUpdate(EventRecipientCreate):
    pass


class EventRecipientRead(BaseModel):
    id: int
    event_id: int
    nama: str
    alamat: str | None
    no_hp: str | None
    jenis_bantuan: str | None
    jumlah: Decimal | None
    keterangan: str | None

    model_config = ConfigDict(from_attributes=True)


class EventCommitteeMemberCreate(BaseModel):
    nama: str = Field(min_length=1, max_length=255)
    jabatan: str | None = Field(default=None, max_length=100)
    no_hp: str | None = Field(default=None, max_length=32)
    keterangan: str | None = None

    model_config = ConfigDict(str_strip_whitespace=True)


class EventCommitteeMemberUpdate(EventCommitteeMemberCreate):
    pass


class EventCommitteeMemberRead(BaseModel):
    id: int
    event_id: int
    nama: str
    jabatan: str | None
    no_hp: str | None
    keterangan: str | None

    model_config = ConfigDict(from_attributes=True)
