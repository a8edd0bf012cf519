"""Pydantic schemas for the HaloDKM API."""
from .audit import AuditLogRead
from .event import (
    EventCommitteeMemberCreate,
    EventCommitteeMemberRead,
    EventCommitteeMemberUpdate,
    EventCompletionRead,
    EventCreate,
    EventDetailRead,
    EventListItem,
    EventRead,
    EventRecipientCreate,
    EventRecipientRead,
    EventRecipientUpdate,
    EventTransactionCreate,
    EventTransactionRead,
    EventTransactionUpdate,
    EventUpdate,
    LedgerSummaryRead,
)
from .kas import KasCreate, KasListRead, KasRead, KasUpdate

__all__ = [
    "AuditLogRead",
    "EventCommitteeMemberCreate",
    "EventCommitteeMemberRead",
    "EventCommitteeMemberUpdate",
    "EventCompletionRead",
    "EventCreate",
    "EventDetailRead",
    "EventListItem",
    "EventRead",
    "EventRecipientCreate",
    "EventRecipientRead",
    "EventRecipientUpdate",
    "EventTransactionCreate",
    "EventTransactionRead",
    "EventTransactionUpdate",
    "EventUpdate",
    "KasCreate",
    "KasListRead",
    "KasRead",
    "KasUpdate",
    "LedgerSummaryRead",
]
