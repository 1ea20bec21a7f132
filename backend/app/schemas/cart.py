from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from app.schemas.line_item import LineItem, UserInfo


class CartSave(BaseModel):
    items: list[LineItem] = Field(default_factory=list)


class CartResponse(BaseModel):
    user_id: UUID
    items: list[dict[str, Any]]


class CheckoutRequest(BaseModel):
    # Empty carts are rejected by the checkout service, not by validation
    items: list[LineItem] = Field(default_factory=list)
    user_info: UserInfo
