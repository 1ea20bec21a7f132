from sqlalchemy import JSON, Column, DateTime, String, func

from app.core.database import Base
from app.models.shared import UUIDType, generate_uuid


class UserActivityLog(Base):
    __tablename__ = "user_activity_logs"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    user_id = Column(String(255), nullable=False, index=True)
    action = Column(String(50), nullable=False, index=True)
    details = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
