from enum import Enum

from sqlalchemy import JSON, Column, DateTime, ForeignKey, String, Text, func

from app.core.database import Base
from app.models.shared import Money, UTCDateTime, UUIDType, generate_uuid, utc_now


class OrderStatus(str, Enum):
    PENDING = "pending"
    QUOTATION = "quotation"
    QUOTED = "quoted"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    READY = "ready"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    REJECTED = "rejected"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentMethod(str, Enum):
    CREDIT = "credit"
    DEBIT = "debit"
    PIX = "pix"
    BOLETO = "boleto"
    CASH = "cash"


class Order(Base):
    __tablename__ = "orders"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    user_id = Column(
        UUIDType, ForeignKey("customers.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value, index=True)

    # Product snapshots taken when the order was placed
    items = Column(JSON, nullable=False, default=list)
    total = Column(Money, nullable=False, default=0)

    # Delivery/contact snapshot (name, email, phone, address, city, zip, paymentMethod)
    user_info = Column(JSON, nullable=False, default=dict)

    budget_id = Column(
        UUIDType, ForeignKey("budgets.id", ondelete="SET NULL"), nullable=True, index=True
    )

    payment_status = Column(String(20), nullable=True)
    payment_method = Column(String(20), nullable=True)
    delivery_address = Column(String(255), nullable=True)
    delivery_date = Column(UTCDateTime, nullable=True)
    notes = Column(Text, nullable=True)

    date = Column(UTCDateTime, nullable=False, default=utc_now)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
