"""Mosque cash ledger model."""
from datetime import date
from decimal import Decimal
from enum import Enum as PyEnum

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, value_enum

TRANSFER_CATEGORY = "Transfer Event"


class Direction(str, PyEnum):
    """Direction of a cash movement."""

    INFLOW = "masuk"
    OUTFLOW = "keluar"


class KasMasjid(Base):
    """Entry of the organisation-wide cash ledger."""

    __tablename__ = "kas_masjid"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_kas_masjid_positive_amount"),
        Index("ix_kas_masjid_tanggal", "tanggal"),
        Index("ix_kas_masjid_type", "type"),
    )

    type: Mapped[Direction] = mapped_column(value_enum(Direction, "cash_direction"), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    tanggal: Mapped[date] = mapped_column(Date, nullable=False)
    # Set on transfer entries created by event completion.
    event_id: Mapped[int | None] = mapped_column(
        ForeignKey("events.id", ondelete="SET NULL"), nullable=True, index=True
    )
    idempotency_key: Mapped[str | None] = mapped_column(String(64), unique=True, nullable=True, index=True)
