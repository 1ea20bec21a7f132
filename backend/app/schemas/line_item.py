"""Line items shared by carts, orders and budgets."""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class LineItem(BaseModel):
    """Snapshot of a catalog product at the time it was added.

    Extra product attributes sent by the storefront (description, image URL,
    measurements) are kept as-is so the snapshot stays complete.
    """

    model_config = ConfigDict(extra="allow")

    product_id: str | None = None
    name: str = Field(..., min_length=1, max_length=255)
    price: Decimal = Field(..., ge=0)
    quantity: Decimal = Field(..., gt=0)
    category: str | None = None
    unit: str | None = None

    @property
    def amount(self) -> Decimal:
        return self.price * self.quantity


class UserInfo(BaseModel):
    """Delivery and contact details captured at checkout."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str | None = None
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    zip: str = Field(..., min_length=1)
    payment_method: Literal["credit", "debit", "pix"]
