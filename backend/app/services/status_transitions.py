"""Allowed status transitions for orders and budgets.

Each table maps a current status to the set of statuses it may move to.
Final states only map to themselves, so re-applying a final status is an
accepted no-op while every other target is refused.
"""

from enum import Enum
from types import MappingProxyType

from app.models.budget import BudgetStatus
from app.models.order import OrderStatus

ORDER_TRANSITIONS: MappingProxyType[OrderStatus, frozenset[OrderStatus]] = MappingProxyType(
    {
        OrderStatus.PENDING: frozenset(
            {OrderStatus.QUOTATION, OrderStatus.CONFIRMED, OrderStatus.CANCELLED}
        ),
        OrderStatus.QUOTATION: frozenset(
            {OrderStatus.QUOTED, OrderStatus.REJECTED, OrderStatus.CANCELLED}
        ),
        OrderStatus.QUOTED: frozenset(
            {OrderStatus.CONFIRMED, OrderStatus.REJECTED, OrderStatus.CANCELLED}
        ),
        OrderStatus.CONFIRMED: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
        OrderStatus.PROCESSING: frozenset({OrderStatus.READY, OrderStatus.CANCELLED}),
        OrderStatus.READY: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
        OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
        OrderStatus.DELIVERED: frozenset({OrderStatus.DELIVERED}),
        OrderStatus.CANCELLED: frozenset({OrderStatus.CANCELLED}),
        OrderStatus.REJECTED: frozenset({OrderStatus.REJECTED}),
    }
)

BUDGET_TRANSITIONS: MappingProxyType[BudgetStatus, frozenset[BudgetStatus]] = MappingProxyType(
    {
        BudgetStatus.DRAFT: frozenset({BudgetStatus.SENT, BudgetStatus.EXPIRED}),
        BudgetStatus.SENT: frozenset(
            {BudgetStatus.ACCEPTED, BudgetStatus.REJECTED, BudgetStatus.EXPIRED}
        ),
        BudgetStatus.ACCEPTED: frozenset({BudgetStatus.ACCEPTED}),
        BudgetStatus.REJECTED: frozenset({BudgetStatus.REJECTED}),
        BudgetStatus.EXPIRED: frozenset({BudgetStatus.EXPIRED}),
    }
)

ORDER_TERMINAL_STATUSES = frozenset(
    status for status, targets in ORDER_TRANSITIONS.items() if targets == {status}
)
BUDGET_TERMINAL_STATUSES = frozenset(
    status for status, targets in BUDGET_TRANSITIONS.items() if targets == {status}
)


def status_value(status: Enum | str) -> str:
    """Plain string value of a status given as enum member or string."""
    return str(status.value) if isinstance(status, Enum) else str(status)


def _parse_order_status(value: str) -> OrderStatus | None:
    try:
        return OrderStatus(value)
    except ValueError:
        return None


def _parse_budget_status(value: str) -> BudgetStatus | None:
    try:
        return BudgetStatus(value)
    except ValueError:
        return None


def allowed_order_transitions(current: str) -> frozenset[OrderStatus]:
    status = _parse_order_status(current)
    if status is None:
        return frozenset()
    return ORDER_TRANSITIONS[status]


def allowed_budget_transitions(current: str) -> frozenset[BudgetStatus]:
    status = _parse_budget_status(current)
    if status is None:
        return frozenset()
    return BUDGET_TRANSITIONS[status]


def can_transition_order(current: str, requested: str) -> bool:
    """Whether an order in ``current`` may move to ``requested``.

    Unknown statuses on either side are never allowed.
    """
    target = _parse_order_status(requested)
    return target is not None and target in allowed_order_transitions(current)


def can_transition_budget(current: str, requested: str) -> bool:
    """Whether a budget in ``current`` may move to ``requested``."""
    target = _parse_budget_status(requested)
    return target is not None and target in allowed_budget_transitions(current)
