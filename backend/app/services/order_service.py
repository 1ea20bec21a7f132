"""Order lifecycle: creation, queries and validated status transitions."""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.errors import InvalidTransitionError, NotFoundError, ValidationError
from app.models.order import Order, OrderStatus
from app.repositories.order_repository import OrderRepository
from app.schemas.order import OrderCreate, OrderUpdate
from app.services.audit_service import ORDERS_TABLE, AuditService
from app.services.email_service import EmailService
from app.services.hooks import hook_warnings, run_best_effort
from app.services.results import ServiceResult, service_operation
from app.services.status_transitions import can_transition_order, status_value

logger = logging.getLogger(__name__)


class OrderService:
    """Service for managing orders through their delivery lifecycle."""

    def __init__(self, db: Session, email_service: EmailService | None = None):
        self.db = db
        self.repo = OrderRepository(db)
        self.audit_service = AuditService(db)
        self.email_service = email_service or EmailService(db)

    def _get_or_raise(self, order_id: UUID) -> Order:
        order = self.repo.get_by_id(order_id)
        if not order:
            raise NotFoundError("Order not found")
        return order

    @service_operation("create_order")
    async def create_order(self, data: OrderCreate) -> ServiceResult[Order]:
        """Persist a new order and send its confirmation email."""
        order = self.repo.create(
            user_id=data.user_id,
            items=[item.model_dump(mode="json") for item in data.items],
            total=data.total,
            user_info=data.user_info.model_dump(mode="json"),
            status=data.status,
            budget_id=data.budget_id,
            date=data.date,
            payment_status=data.payment_status.value if data.payment_status else None,
            payment_method=data.payment_method.value if data.payment_method else None,
            delivery_address=data.delivery_address,
            delivery_date=data.delivery_date,
            notes=data.notes,
        )
        logger.info("Created order %s for customer %s", order.id, order.user_id)

        confirmation = await run_best_effort(
            "order confirmation email", self.email_service.send_order_confirmation, order
        )
        return ServiceResult.ok(order, warnings=hook_warnings(confirmation))

    @service_operation("get_order")
    def get_order(self, order_id: UUID) -> ServiceResult[Order]:
        return ServiceResult.ok(self._get_or_raise(order_id))

    @service_operation("list_orders")
    def list_orders(
        self,
        status: OrderStatus | None = None,
        skip: int = 0,
        limit: int = 50,
        order_by: str | None = None,
    ) -> ServiceResult[list[Order]]:
        return ServiceResult.ok(
            self.repo.get_all(skip=skip, limit=limit, status=status, order_by=order_by)
        )

    @service_operation("get_user_orders")
    def get_user_orders(self, user_id: UUID) -> ServiceResult[list[Order]]:
        return ServiceResult.ok(self.repo.get_all(user_id=user_id, limit=1000))

    @service_operation("get_orders_by_status")
    def get_orders_by_status(self, status: OrderStatus) -> ServiceResult[list[Order]]:
        return ServiceResult.ok(self.repo.get_all(status=status, limit=1000))

    @service_operation("get_orders_by_date_range")
    def get_orders_by_date_range(
        self, start: datetime, end: datetime
    ) -> ServiceResult[list[Order]]:
        return ServiceResult.ok(self.repo.get_all(start=start, end=end, limit=1000))

    @service_operation("update_order_status")
    async def update_order_status(
        self,
        order_id: UUID,
        requested_status: OrderStatus | str,
        actor_id: str,
    ) -> ServiceResult[Order]:
        """Move an order to a new status.

        The status change is committed first; the audit entry and the status
        email run afterwards and cannot undo it. An illegal transition leaves
        the order and the audit trail untouched.
        """
        order = self._get_or_raise(order_id)
        current = str(order.status)
        requested = status_value(requested_status)

        if not can_transition_order(current, requested):
            raise InvalidTransitionError(current, requested)

        order = self.repo.set_status(order, OrderStatus(requested))
        logger.info("Order %s moved from %s to %s by %s", order.id, current, requested, actor_id)

        audit = await run_best_effort(
            "order audit log",
            self.audit_service.log_status_change,
            ORDERS_TABLE,
            order.id,
            current,
            requested,
            actor_id,
        )
        notification = await run_best_effort(
            "order status email", self.email_service.send_order_status_update, order
        )
        return ServiceResult.ok(order, warnings=hook_warnings(audit, notification))

    @service_operation("update_order")
    def update_order(self, order_id: UUID, data: OrderUpdate) -> ServiceResult[Order]:
        """Patch supplementary order fields. Status changes are refused here."""
        if "status" in data.model_fields_set:
            raise ValidationError("Order status can only be changed through a status transition")

        order = self._get_or_raise(order_id)
        values: dict[str, Any] = {}
        for key in data.model_fields_set:
            value = getattr(data, key)
            if key == "user_info" and value is not None:
                value = value.model_dump(mode="json")
            elif isinstance(value, Enum):
                value = value.value
            values[key] = value

        return ServiceResult.ok(self.repo.update(order, values))

    @service_operation("delete_order")
    def delete_order(self, order_id: UUID) -> ServiceResult[None]:
        """Administrative removal of an order; not part of the normal workflow."""
        order = self._get_or_raise(order_id)
        self.repo.delete(order)
        logger.warning("Order %s deleted", order_id)
        return ServiceResult.ok()
