from enum import Enum

from sqlalchemy import JSON, Column, DateTime, ForeignKey, String, func

from app.core.database import Base
from app.models.shared import UUIDType, generate_uuid


class CartStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


class Cart(Base):
    __tablename__ = "carts"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    user_id = Column(
        UUIDType, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    items = Column(JSON, nullable=False, default=list)
    status = Column(String(20), nullable=False, default=CartStatus.ACTIVE.value, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
