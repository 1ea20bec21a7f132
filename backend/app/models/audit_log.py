"""AuditLog model for tracking order and budget state changes."""

from enum import Enum

from sqlalchemy import JSON, Column, DateTime, String, func

from app.core.database import Base
from app.models.shared import UUIDType, generate_uuid


class AuditAction(str, Enum):
    UPDATE = "UPDATE"
    CONVERSION = "CONVERSION"


class AuditLog(Base):
    """AuditLog model - append-only record of one state change."""

    __tablename__ = "audit_logs"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    table_name = Column(String(50), nullable=False, index=True)
    record_id = Column(UUIDType, nullable=False, index=True)
    action = Column(String(20), nullable=False, index=True)
    old_data = Column(JSON, nullable=False, default=dict)
    new_data = Column(JSON, nullable=False, default=dict)
    changed_by = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
