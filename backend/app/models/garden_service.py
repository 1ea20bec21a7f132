from sqlalchemy import Column, DateTime, String, Text, func

from app.core.database import Base
from app.models.shared import Money, UUIDType, generate_uuid


class GardenService(Base):
    """Labour the store offers (installation, landscaping, cleaning)."""

    __tablename__ = "services"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    price = Column(Money, nullable=False)
    unit = Column(String(30), nullable=True)
    category = Column(String(100), nullable=True, index=True)
    image_url = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
