"""Turns a customer's cart into a pending order."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from decimal import Decimal
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import AuthenticationRequiredError, EmptyCartError
from app.models.order import Order, OrderStatus, PaymentMethod
from app.models.shared import sum_money
from app.schemas.line_item import LineItem, UserInfo
from app.schemas.order import OrderCreate
from app.services.cart_service import CartService
from app.services.email_service import EmailService
from app.services.hooks import hook_warnings, run_best_effort
from app.services.order_service import OrderService
from app.services.results import ServiceResult, service_operation

logger = logging.getLogger(__name__)


def calculate_cart_total(items: Sequence[LineItem], shipping_fee: Decimal) -> Decimal:
    """Sum of price x quantity over the cart plus the flat shipping fee."""
    return sum_money([*(item.amount for item in items), shipping_fee])


class CheckoutService:
    def __init__(
        self,
        db: Session,
        email_service: EmailService | None = None,
        shipping_fee: Decimal | None = None,
    ):
        self.db = db
        self.email_service = email_service or EmailService(db)
        self.order_service = OrderService(db, email_service=self.email_service)
        self.cart_service = CartService(db, email_service=self.email_service)
        self.shipping_fee = settings.SHIPPING_FEE if shipping_fee is None else shipping_fee

    @service_operation("place_order")
    async def place_order(
        self,
        customer_id: UUID | None,
        items: Sequence[LineItem],
        user_info: UserInfo,
    ) -> ServiceResult[Order]:
        """Create a pending order from the cart contents.

        The order confirmation email is sent by order creation; closing the
        persisted cart afterwards is best-effort.
        """
        if customer_id is None:
            raise AuthenticationRequiredError("You must be signed in to place an order")
        if not items:
            raise EmptyCartError("Cannot place an order with an empty cart")

        total = calculate_cart_total(items, self.shipping_fee)
        result = await self.order_service.create_order(
            OrderCreate(
                user_id=customer_id,
                items=list(items),
                total=total,
                user_info=user_info,
                status=OrderStatus.PENDING,
                payment_method=PaymentMethod(user_info.payment_method),
            )
        )
        if not result.success:
            return result

        order = result.data
        assert order is not None
        logger.info("Customer %s placed order %s totalling %s", customer_id, order.id, total)
        cart_cleanup = await run_best_effort(
            "cart cleanup", self.cart_service.clear_cart, customer_id
        )
        result.warnings.extend(hook_warnings(cart_cleanup))
        return result
