"""Persistence of customer shopping carts and abandoned-cart reminders."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.cart import Cart, CartStatus
from app.models.shared import utc_now
from app.repositories.cart_repository import CartRepository
from app.repositories.customer_repository import CustomerRepository
from app.schemas.line_item import LineItem
from app.services.email_service import EmailService
from app.services.hooks import run_best_effort

logger = logging.getLogger(__name__)


class CartService:
    """Keeps one active cart per customer."""

    def __init__(self, db: Session, email_service: EmailService | None = None):
        self.db = db
        self.repo = CartRepository(db)
        self.customer_repo = CustomerRepository(db)
        self.email_service = email_service or EmailService(db)

    def save_cart(self, user_id: UUID, items: list[LineItem]) -> Cart:
        """Replace the items of the customer's active cart, creating it if needed."""
        payload = [item.model_dump(mode="json") for item in items]
        cart = self.repo.get_active(user_id)
        if cart:
            return self.repo.update_items(cart, payload)
        return self.repo.create(user_id, payload)

    def load_cart(self, user_id: UUID) -> list[dict[str, Any]] | None:
        cart = self.repo.get_active(user_id)
        if cart is None:
            return None
        return list(cart.items or [])

    def clear_cart(self, user_id: UUID) -> Cart | None:
        """Close the active cart after checkout. Returns None if there was none."""
        cart = self.repo.get_active(user_id)
        if cart is None:
            return None
        return self.repo.set_status(cart, CartStatus.COMPLETED)

    async def _abandon(self, cart: Cart) -> bool:
        self.repo.set_status(cart, CartStatus.ABANDONED)
        items = list(cart.items or [])
        customer = self.customer_repo.get_by_id(cart.user_id)  # type: ignore[arg-type]
        if not items or customer is None:
            return False
        outcome = await run_best_effort(
            "abandoned cart email", self.email_service.send_abandoned_cart_email, customer, items
        )
        return outcome.succeeded

    async def mark_and_notify_abandoned_cart(self, user_id: UUID) -> bool:
        """Mark the customer's active cart abandoned and remind them by email.

        Returns True when a reminder was sent.
        """
        cart = self.repo.get_active(user_id)
        if cart is None:
            return False
        return await self._abandon(cart)

    async def process_abandoned_carts(self, now: datetime | None = None) -> int:
        """Remind customers whose active cart has been idle for the configured window.

        Each cart is notified at most once since it leaves the active state.
        Returns the number of reminders sent.
        """
        now = now or utc_now()
        carts = self.repo.get_idle_active(
            idle_since=now - timedelta(hours=settings.ABANDONED_CART_MIN_HOURS),
            not_before=now - timedelta(hours=settings.ABANDONED_CART_MAX_HOURS),
            limit=settings.ABANDONED_CART_BATCH_LIMIT,
        )
        if carts:
            logger.info("Found %d abandoned carts", len(carts))

        sent = 0
        for cart in carts:
            if await self._abandon(cart):
                sent += 1
        return sent
