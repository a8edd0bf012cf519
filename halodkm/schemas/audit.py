"""Audit log schemas."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class AuditLogRead(BaseModel):
    id: int
    user_id: int
    action: str
    entity: str | None
    entity_id: int | None
    data_json: dict
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
