from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.budget import BudgetStatus
from app.schemas.line_item import LineItem, UserInfo


class BudgetCreate(BaseModel):
    customer_id: UUID
    items: list[LineItem] = Field(min_length=1)
    subtotal: Decimal | None = Field(default=None, ge=0)
    tax: Decimal | None = Field(default=None, ge=0)
    valid_until: datetime | None = None
    notes: str | None = None


class BudgetUpdate(BaseModel):
    """Patch of a budget's content; ``status`` is rejected by the service."""

    status: BudgetStatus | None = None
    items: list[LineItem] | None = Field(default=None, min_length=1)
    subtotal: Decimal | None = Field(default=None, ge=0)
    tax: Decimal | None = Field(default=None, ge=0)
    valid_until: datetime | None = None
    notes: str | None = None


class BudgetStatusUpdate(BaseModel):
    status: BudgetStatus


class BudgetConvertRequest(BaseModel):
    user_info: UserInfo
    # Defaults to the budget's own customer
    customer_user_id: UUID | None = None


class BudgetResponse(BaseModel):
    id: UUID
    customer_id: UUID
    status: str
    items: list[dict[str, Any]]
    subtotal: Decimal
    tax: Decimal | None
    total: Decimal
    valid_until: datetime
    notes: str | None
    order_id: UUID | None
    created_by: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ExpireBudgetsResponse(BaseModel):
    expired_count: int
    budget_ids: list[UUID]
