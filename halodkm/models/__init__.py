"""ORM models package."""
from .audit import AuditLog
from .base import Base
from .event import Event, EventCommitteeMember, EventKas, EventRecipient, EventStatus, EventType
from .kas import TRANSFER_CATEGORY, Direction, KasMasjid

__all__ = [
    "AuditLog",
    "Base",
    "Direction",
    "Event",
    "EventCommitteeMember",
    "EventKas",
    "EventRecipient",
    "EventStatus",
    "EventType",
    "KasMasjid",
    "TRANSFER_CATEGORY",
]
