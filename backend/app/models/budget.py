from enum import Enum

from sqlalchemy import JSON, Column, DateTime, ForeignKey, String, Text, func

from app.core.database import Base
from app.models.shared import Money, UTCDateTime, UUIDType, generate_uuid


class BudgetStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    EXPIRED = "expired"


class Budget(Base):
    __tablename__ = "budgets"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    customer_id = Column(
        UUIDType, ForeignKey("customers.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    status = Column(String(20), nullable=False, default=BudgetStatus.DRAFT.value, index=True)

    items = Column(JSON, nullable=False, default=list)
    subtotal = Column(Money, nullable=False, default=0)
    tax = Column(Money, nullable=True)
    total = Column(Money, nullable=False, default=0)

    valid_until = Column(UTCDateTime, nullable=False)
    notes = Column(Text, nullable=True)

    # Set once, when the budget is converted into an order
    order_id = Column(UUIDType, nullable=True, index=True)

    created_by = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
