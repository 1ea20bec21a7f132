from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Query, Session

from app.core.sorting import apply_order_by
from app.models.budget import Budget, BudgetStatus
from app.models.shared import utc_now

# Budgets in these states are never swept to expired
EXPIRY_EXEMPT_STATUSES = (
    BudgetStatus.ACCEPTED.value,
    BudgetStatus.REJECTED.value,
    BudgetStatus.EXPIRED.value,
)


class BudgetRepository:
    def __init__(self, db: Session):
        self.db = db

    def _filtered(
        self,
        customer_id: UUID | None = None,
        status: BudgetStatus | None = None,
    ) -> Query:  # type: ignore[type-arg]
        query = self.db.query(Budget)
        if customer_id:
            query = query.filter(Budget.customer_id == customer_id)
        if status:
            query = query.filter(Budget.status == status.value)
        return query

    def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        customer_id: UUID | None = None,
        status: BudgetStatus | None = None,
        order_by: str | None = None,
    ) -> list[Budget]:
        query = apply_order_by(self._filtered(customer_id, status), Budget, order_by)
        return query.offset(skip).limit(limit).all()

    def count(self, customer_id: UUID | None = None, status: BudgetStatus | None = None) -> int:
        return self._filtered(customer_id, status).count()

    def get_by_id(self, budget_id: UUID) -> Budget | None:
        return self.db.query(Budget).filter(Budget.id == budget_id).first()

    def create(
        self,
        *,
        customer_id: UUID,
        items: list[dict[str, Any]],
        subtotal: Decimal,
        tax: Decimal | None,
        total: Decimal,
        valid_until: datetime,
        created_by: str,
        notes: str | None = None,
    ) -> Budget:
        now = utc_now()
        budget = Budget(
            customer_id=customer_id,
            items=items,
            subtotal=subtotal,
            tax=tax,
            total=total,
            valid_until=valid_until,
            created_by=created_by,
            notes=notes,
            status=BudgetStatus.DRAFT.value,
            created_at=now,
            updated_at=now,
        )
        self.db.add(budget)
        self.db.commit()
        self.db.refresh(budget)
        return budget

    def update(self, budget: Budget, values: dict[str, Any]) -> Budget:
        for key, value in values.items():
            setattr(budget, key, value)
        budget.updated_at = utc_now()  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(budget)
        return budget

    def get_expirable(self, now: datetime) -> list[Budget]:
        """Budgets past ``valid_until`` that have not reached a final state."""
        return (
            self.db.query(Budget)
            .filter(
                Budget.valid_until < now,
                Budget.status.notin_(EXPIRY_EXEMPT_STATUSES),
            )
            .order_by(Budget.valid_until.desc())
            .all()
        )

    def mark_expired(self, budget_ids: list[UUID]) -> int:
        if not budget_ids:
            return 0
        count = (
            self.db.query(Budget)
            .filter(Budget.id.in_(budget_ids))
            .update(
                {Budget.status: BudgetStatus.EXPIRED.value, Budget.updated_at: utc_now()},
                synchronize_session="fetch",
            )
        )
        self.db.commit()
        return count

    def delete(self, budget: Budget) -> None:
        self.db.delete(budget)
        self.db.commit()
