"""Pydantic schemas for AuditLog."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel


class AuditLogResponse(BaseModel):
    id: UUID
    table_name: str
    record_id: UUID
    action: str
    old_data: dict[str, Any]
    new_data: dict[str, Any]
    changed_by: str
    created_at: datetime

    model_config = {"from_attributes": True}
