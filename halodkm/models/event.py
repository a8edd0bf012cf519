"""Event related models."""
from datetime import date
from decimal import Decimal
from enum import Enum as PyEnum

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, value_enum
from .kas import Direction


class EventType(str, PyEnum):
    """Kind of campaign run by an event."""

    FUNDRAISING = "penggalangan_dana"
    DISTRIBUTION = "distribusi"


class EventStatus(str, PyEnum):
    """Lifecycle status of an event."""

    ACTIVE = "aktif"
    COMPLETED = "selesai"


class Event(Base):
    """A fundraising or distribution campaign with its own cash ledger."""

    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint(
            "(status = 'selesai' AND tanggal_selesai IS NOT NULL)"
            " OR (status <> 'selesai' AND tanggal_selesai IS NULL)",
            name="ck_events_completion_date_matches_status",
        ),
        Index("ix_events_status", "status"),
        Index("ix_events_tanggal_mulai", "tanggal_mulai"),
    )

    nama: Mapped[str] = mapped_column(String(255), nullable=False)
    deskripsi: Mapped[str | None] = mapped_column(Text, nullable=True)
    tipe: Mapped[EventType] = mapped_column(
        value_enum(EventType, "event_type"),
        default=EventType.FUNDRAISING,
        nullable=False,
    )
    tanggal_mulai: Mapped[date] = mapped_column(Date, nullable=False)
    tanggal_selesai: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[EventStatus] = mapped_column(
        value_enum(EventStatus, "event_status"),
        default=EventStatus.ACTIVE,
        nullable=False,
    )

    transactions = relationship("EventKas", back_populates="event", passive_deletes="all")
    recipients = relationship("EventRecipient", back_populates="event", cascade="all, delete-orphan")
    committee_members = relationship("EventCommitteeMember", back_populates="event", cascade="all, delete-orphan")


class EventKas(Base):
    """Cash movement recorded against a single event."""

    __tablename__ = "event_kas"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_event_kas_positive_amount"),
        Index("ix_event_kas_event_tanggal", "event_id", "tanggal"),
    )

    event_id: Mapped[int] = mapped_column(ForeignKey("events.id", ondelete="RESTRICT"), nullable=False, index=True)
    type: Mapped[Direction] = mapped_column(value_enum(Direction, "cash_direction"), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    tanggal: Mapped[date] = mapped_column(Date, nullable=False)
    idempotency_key: Mapped[str | None] = mapped_column(String(64), unique=True, nullable=True, index=True)

    event = relationship("Event", back_populates="transactions")


class EventRecipient(Base):
    """Beneficiary of a distribution event."""

    __tablename__ = "event_recipients"

    event_id: Mapped[int] = mapped_column(ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    nama: Mapped[str] = mapped_column(String(255), nullable=False)
    alamat: Mapped[str | None] = mapped_column(Text, nullable=True)
    no_hp: Mapped[str | None] = mapped_column(String(32), nullable=True)
    jenis_bantuan: Mapped[str | None] = mapped_column(String(100), nullable=True)
    jumlah: Mapped[Decimal | None] = mapped_column(Numeric(18, 2), nullable=True)
    keterangan: Mapped[str | None] = mapped_column(Text, nullable=True)

    event = relationship("Event", back_populates="recipients")


class EventCommitteeMember(Base):
    """Member of the committee running an event."""

    __tablename__ = "event_committee_members"

    event_id: Mapped[int] = mapped_column(ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    nama: Mapped[str] = mapped_column(String(255), nullable=False)
    jabatan: Mapped[str | None] = mapped_column(String(100), nullable=True)
    no_hp: Mapped[str | None] = mapped_column(String(32), nullable=True)
    keterangan: Mapped[str | None] = mapped_column(Text, nullable=True)

    event = relationship("Event", back_populates="committee_members")
