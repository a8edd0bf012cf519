"""Declarative base model for SQLAlchemy."""
from datetime import UTC, datetime

from sqlalchemy import DateTime, Enum as SqlEnum
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


def enum_values(enum_cls) -> list[str]:
    """Persist enum values rather than member names."""

    return [member.value for member in enum_cls]


def value_enum(enum_cls, name: str) -> SqlEnum:
    """VARCHAR column with a CHECK constraint over the enum values."""

    return SqlEnum(
        enum_cls,
        name=name,
        values_callable=enum_values,
        validate_strings=True,
        native_enum=False,
        create_constraint=True,
        length=32,
    )


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )
