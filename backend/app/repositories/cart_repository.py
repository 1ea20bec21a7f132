from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.cart import Cart, CartStatus
from app.models.shared import utc_now


class CartRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_active(self, user_id: UUID) -> Cart | None:
        return (
            self.db.query(Cart)
            .filter(Cart.user_id == user_id, Cart.status == CartStatus.ACTIVE.value)
            .order_by(Cart.updated_at.desc())
            .first()
        )

    def create(self, user_id: UUID, items: list[dict[str, Any]]) -> Cart:
        now = utc_now()
        cart = Cart(
            user_id=user_id,
            items=items,
            status=CartStatus.ACTIVE.value,
            created_at=now,
            updated_at=now,
        )
        self.db.add(cart)
        self.db.commit()
        self.db.refresh(cart)
        return cart

    def update_items(self, cart: Cart, items: list[dict[str, Any]]) -> Cart:
        cart.items = items  # type: ignore[assignment]
        cart.updated_at = utc_now()  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(cart)
        return cart

    def set_status(self, cart: Cart, status: CartStatus) -> Cart:
        cart.status = status.value  # type: ignore[assignment]
        cart.updated_at = utc_now()  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(cart)
        return cart

    def get_idle_active(
        self, idle_since: datetime, not_before: datetime, limit: int = 100
    ) -> list[Cart]:
        """Active carts last touched between ``not_before`` and ``idle_since``."""
        return (
            self.db.query(Cart)
            .filter(
                Cart.status == CartStatus.ACTIVE.value,
                Cart.updated_at < idle_since,
                Cart.updated_at > not_before,
            )
            .order_by(Cart.updated_at.desc())
            .limit(limit)
            .all()
        )
