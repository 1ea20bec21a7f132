from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.order import OrderStatus, PaymentMethod, PaymentStatus
from app.schemas.line_item import LineItem, UserInfo


class OrderCreate(BaseModel):
    user_id: UUID
    items: list[LineItem] = Field(min_length=1)
    total: Decimal = Field(..., ge=0, decimal_places=2)
    user_info: UserInfo
    status: OrderStatus = OrderStatus.PENDING
    budget_id: UUID | None = None
    payment_status: PaymentStatus | None = None
    payment_method: PaymentMethod | None = None
    delivery_address: str | None = None
    delivery_date: datetime | None = None
    notes: str | None = None
    date: datetime | None = None


class OrderUpdate(BaseModel):
    """Patch of an order's supplementary fields.

    ``status`` is accepted by the schema only so that the service can reject
    it explicitly; status changes go through the status endpoint.
    """

    status: OrderStatus | None = None
    user_info: UserInfo | None = None
    payment_status: PaymentStatus | None = None
    payment_method: PaymentMethod | None = None
    delivery_address: str | None = None
    delivery_date: datetime | None = None
    notes: str | None = None


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class OrderResponse(BaseModel):
    id: UUID
    user_id: UUID
    status: str
    items: list[dict[str, Any]]
    total: Decimal
    user_info: dict[str, Any]
    budget_id: UUID | None
    payment_status: str | None
    payment_method: str | None
    delivery_address: str | None
    delivery_date: datetime | None
    notes: str | None
    date: datetime
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
