"""Budget lifecycle: quotations, status transitions and conversion into orders."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import (
    InvalidStateError,
    InvalidTransitionError,
    NotFoundError,
    PartialConversionError,
    PersistenceError,
    ValidationError,
)
from app.models.budget import Budget, BudgetStatus
from app.models.order import Order, OrderStatus, PaymentMethod
from app.models.shared import round_money, sum_money, utc_now
from app.repositories.budget_repository import BudgetRepository
from app.repositories.order_repository import OrderRepository
from app.schemas.budget import BudgetCreate, BudgetUpdate
from app.schemas.line_item import LineItem, UserInfo
from app.services.audit_service import BUDGETS_TABLE, AuditService
from app.services.email_service import EmailService
from app.services.hooks import hook_warnings, run_best_effort
from app.services.results import ServiceResult, service_operation
from app.services.status_transitions import can_transition_budget, status_value

logger = logging.getLogger(__name__)

SYSTEM_ACTOR = "system"


def _items_subtotal(items: list[LineItem]) -> Decimal:
    return sum_money(item.amount for item in items)


class BudgetService:
    """Service for managing budgets (price quotations) and converting them to orders."""

    def __init__(self, db: Session, email_service: EmailService | None = None):
        self.db = db
        self.repo = BudgetRepository(db)
        self.order_repo = OrderRepository(db)
        self.audit_service = AuditService(db)
        self.email_service = email_service or EmailService(db)

    def _get_or_raise(self, budget_id: UUID) -> Budget:
        budget = self.repo.get_by_id(budget_id)
        if not budget:
            raise NotFoundError("Budget not found")
        return budget

    async def _record_transition(
        self, budget: Budget, old_status: str, actor_id: str
    ) -> list[str]:
        """Audit and announce a committed budget status change."""
        audit = await run_best_effort(
            "budget audit log",
            self.audit_service.log_status_change,
            BUDGETS_TABLE,
            budget.id,
            old_status,
            str(budget.status),
            actor_id,
        )
        notification = await run_best_effort(
            "budget status email", self.email_service.send_budget_status_update, budget
        )
        return hook_warnings(audit, notification)

    @service_operation("create_budget")
    async def create_budget(self, data: BudgetCreate, created_by: str) -> ServiceResult[Budget]:
        """Create a draft budget and send it to the customer.

        The subtotal defaults to the sum of the line items and ``valid_until``
        to the configured validity window.
        """
        subtotal = data.subtotal if data.subtotal is not None else _items_subtotal(data.items)
        total = round_money(subtotal + (data.tax or Decimal(0)))
        valid_until = data.valid_until or utc_now() + timedelta(
            days=settings.BUDGET_VALIDITY_DAYS
        )

        budget = self.repo.create(
            customer_id=data.customer_id,
            items=[item.model_dump(mode="json") for item in data.items],
            subtotal=subtotal,
            tax=data.tax,
            total=total,
            valid_until=valid_until,
            created_by=created_by,
            notes=data.notes,
        )
        logger.info(
            "Budget %s created by %s for customer %s", budget.id, created_by, budget.customer_id
        )

        notification = await run_best_effort(
            "budget notification email", self.email_service.send_budget_notification, budget
        )
        return ServiceResult.ok(budget, warnings=hook_warnings(notification))

    @service_operation("get_budget")
    def get_budget(self, budget_id: UUID) -> ServiceResult[Budget]:
        return ServiceResult.ok(self._get_or_raise(budget_id))

    @service_operation("list_budgets")
    def list_budgets(
        self,
        customer_id: UUID | None = None,
        status: BudgetStatus | None = None,
        skip: int = 0,
        limit: int = 50,
        order_by: str | None = None,
    ) -> ServiceResult[list[Budget]]:
        return ServiceResult.ok(
            self.repo.get_all(
                skip=skip,
                limit=limit,
                customer_id=customer_id,
                status=status,
                order_by=order_by,
            )
        )

    @service_operation("get_budgets_by_status")
    def get_budgets_by_status(self, status: BudgetStatus) -> ServiceResult[list[Budget]]:
        return ServiceResult.ok(self.repo.get_all(status=status, limit=1000))

    @service_operation("update_budget")
    def update_budget(self, budget_id: UUID, data: BudgetUpdate) -> ServiceResult[Budget]:
        """Edit a budget's content. Totals are recomputed from what changed."""
        if "status" in data.model_fields_set:
            raise ValidationError("Budget status can only be changed through a status transition")

        budget = self._get_or_raise(budget_id)
        values: dict[str, Any] = {}

        subtotal = Decimal(str(budget.subtotal))
        tax = Decimal(str(budget.tax)) if budget.tax is not None else None

        if data.items is not None:
            values["items"] = [item.model_dump(mode="json") for item in data.items]
            subtotal = _items_subtotal(data.items)
        if data.subtotal is not None:
            subtotal = data.subtotal
        if "tax" in data.model_fields_set:
            tax = data.tax
            values["tax"] = tax
        if data.valid_until is not None:
            values["valid_until"] = data.valid_until
        if "notes" in data.model_fields_set:
            values["notes"] = data.notes

        values["subtotal"] = subtotal
        values["total"] = round_money(subtotal + (tax or Decimal(0)))
        return ServiceResult.ok(self.repo.update(budget, values))

    @service_operation("delete_budget")
    def delete_budget(self, budget_id: UUID) -> ServiceResult[None]:
        budget = self._get_or_raise(budget_id)
        self.repo.delete(budget)
        logger.warning("Budget %s deleted", budget_id)
        return ServiceResult.ok()

    @service_operation("update_budget_status")
    async def update_budget_status(
        self,
        budget_id: UUID,
        requested_status: BudgetStatus | str,
        actor_id: str,
    ) -> ServiceResult[Budget]:
        """Move a budget to a new status.

        Same contract as order status updates: validate against the
        transition table, commit, then audit and notify on a best-effort basis.
        """
        budget = self._get_or_raise(budget_id)
        current = str(budget.status)
        requested = status_value(requested_status)

        if not can_transition_budget(current, requested):
            raise InvalidTransitionError(current, requested)

        budget = self.repo.update(budget, {"status": requested})
        logger.info("Budget %s moved from %s to %s by %s", budget.id, current, requested, actor_id)

        warnings = await self._record_transition(budget, current, actor_id)
        return ServiceResult.ok(budget, warnings=warnings)

    @service_operation("convert_budget_to_order")
    async def convert_budget_to_order(
        self,
        budget_id: UUID,
        customer_user_id: UUID | None,
        user_info: UserInfo,
        actor_id: str,
    ) -> ServiceResult[Order]:
        """Create a confirmed order from an accepted budget and link the two.

        Converting a budget that is already linked returns the linked order
        without writing anything. The order is created before the budget is
        touched: if that fails the budget is left as it was. If the order
        exists but the budget cannot be linked, the result is a
        ``partial_conversion`` failure carrying the order; running the
        conversion again reuses that order instead of creating another one.
        """
        budget = self._get_or_raise(budget_id)

        if budget.order_id is not None:
            linked = self.order_repo.get_by_id(budget.order_id)  # type: ignore[arg-type]
            if linked is None:
                raise InvalidStateError(
                    f"Budget was already converted to order {budget.order_id}, "
                    "which no longer exists"
                )
            logger.info("Budget %s already converted to order %s", budget.id, linked.id)
            return ServiceResult.ok(linked)

        if budget.status != BudgetStatus.ACCEPTED.value:
            raise InvalidStateError("Only accepted budgets can be converted to orders")

        order = self.order_repo.get_by_budget_id(budget.id)  # type: ignore[arg-type]
        if order is not None:
            logger.warning(
                "Reusing order %s from an earlier incomplete conversion of budget %s",
                order.id,
                budget.id,
            )
        else:
            order = self._create_order_from_budget(budget, customer_user_id, user_info)

        order_id = order.id
        try:
            budget = self.repo.update(budget, {"order_id": order_id})
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(
                "Order %s created but budget %s could not be linked", order_id, budget_id
            )
            return ServiceResult.failure(
                PartialConversionError(budget_id, order_id),  # type: ignore[arg-type]
                data=order,
            )

        warnings = await self._record_transition(budget, BudgetStatus.ACCEPTED.value, actor_id)
        conversion_audit = await run_best_effort(
            "budget conversion audit log",
            self.audit_service.log_conversion,
            budget.id,
            order_id,
            actor_id,
        )
        logger.info("Budget %s converted to order %s by %s", budget.id, order_id, actor_id)
        return ServiceResult.ok(order, warnings=warnings + hook_warnings(conversion_audit))

    def _create_order_from_budget(
        self, budget: Budget, customer_user_id: UUID | None, user_info: UserInfo
    ) -> Order:
        try:
            return self.order_repo.create(
                user_id=customer_user_id or budget.customer_id,  # type: ignore[arg-type]
                items=list(budget.items),  # type: ignore[arg-type]
                total=Decimal(str(budget.total)),
                user_info=user_info.model_dump(mode="json"),
                status=OrderStatus.CONFIRMED,
                budget_id=budget.id,  # type: ignore[arg-type]
                payment_method=PaymentMethod(user_info.payment_method).value,
            )
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to create order from budget %s", budget.id)
            raise PersistenceError(
                "Could not create the order for this budget", original=exc
            ) from exc

    @service_operation("expire_stale_budgets")
    async def expire_stale_budgets(
        self, now: datetime | None = None, actor_id: str = SYSTEM_ACTOR
    ) -> ServiceResult[list[Budget]]:
        """Mark budgets past ``valid_until`` as expired.

        Accepted, rejected and already expired budgets are left alone, so
        running the sweep twice expires nothing the second time.
        """
        now = now or utc_now()
        stale = self.repo.get_expirable(now)
        previous = {budget.id: str(budget.status) for budget in stale}

        count = self.repo.mark_expired(list(previous))
        if count:
            logger.info("Expired %d stale budgets", count)

        warnings: list[str] = []
        for budget_id, old_status in previous.items():
            audit = await run_best_effort(
                "budget expiry audit log",
                self.audit_service.log_status_change,
                BUDGETS_TABLE,
                budget_id,
                old_status,
                BudgetStatus.EXPIRED.value,
                actor_id,
            )
            warnings.extend(hook_warnings(audit))
        return ServiceResult.ok(stale, warnings=warnings)
