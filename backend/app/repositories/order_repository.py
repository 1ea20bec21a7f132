from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Query, Session

from app.core.sorting import apply_order_by
from app.models.order import Order, OrderStatus
from app.models.shared import as_utc, utc_now


class OrderRepository:
    def __init__(self, db: Session):
        self.db = db

    def _filtered(
        self,
        status: OrderStatus | None = None,
        user_id: UUID | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> Query:  # type: ignore[type-arg]
        query = self.db.query(Order)
        if status:
            query = query.filter(Order.status == status.value)
        if user_id:
            query = query.filter(Order.user_id == user_id)
        if start:
            query = query.filter(Order.created_at >= as_utc(start))
        if end:
            query = query.filter(Order.created_at <= as_utc(end))
        return query

    def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        status: OrderStatus | None = None,
        user_id: UUID | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        order_by: str | None = None,
    ) -> list[Order]:
        query = self._filtered(status=status, user_id=user_id, start=start, end=end)
        query = apply_order_by(query, Order, order_by)
        return query.offset(skip).limit(limit).all()

    def count(
        self,
        status: OrderStatus | None = None,
        user_id: UUID | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> int:
        return self._filtered(status=status, user_id=user_id, start=start, end=end).count()

    def get_by_id(self, order_id: UUID) -> Order | None:
        return self.db.query(Order).filter(Order.id == order_id).first()

    def get_by_budget_id(self, budget_id: UUID) -> Order | None:
        return (
            self.db.query(Order)
            .filter(Order.budget_id == budget_id)
            .order_by(Order.created_at.asc())
            .first()
        )

    def create(
        self,
        *,
        user_id: UUID,
        items: list[dict[str, Any]],
        total: Decimal,
        user_info: dict[str, Any],
        status: OrderStatus = OrderStatus.PENDING,
        budget_id: UUID | None = None,
        date: datetime | None = None,
        **extra: Any,
    ) -> Order:
        now = utc_now()
        order = Order(
            user_id=user_id,
            items=items,
            total=total,
            user_info=user_info,
            status=status.value,
            budget_id=budget_id,
            date=date or now,
            created_at=now,
            updated_at=now,
            **extra,
        )
        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        return order

    def update(self, order: Order, values: dict[str, Any]) -> Order:
        for key, value in values.items():
            setattr(order, key, value)
        order.updated_at = utc_now()  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(order)
        return order

    def set_status(self, order: Order, status: OrderStatus) -> Order:
        return self.update(order, {"status": status.value})

    def delete(self, order: Order) -> None:
        self.db.delete(order)
        self.db.commit()
