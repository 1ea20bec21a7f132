"""Tests for the order and budget status transition tables."""

import pytest

from app.models.budget import BudgetStatus
from app.models.order import OrderStatus
from app.services.status_transitions import (
    BUDGET_TERMINAL_STATUSES,
    BUDGET_TRANSITIONS,
    ORDER_TERMINAL_STATUSES,
    ORDER_TRANSITIONS,
    allowed_budget_transitions,
    allowed_order_transitions,
    can_transition_budget,
    can_transition_order,
    status_value,
)

EXPECTED_ORDER_TRANSITIONS = {
    "pending": {"quotation", "confirmed", "cancelled"},
    "quotation": {"quoted", "rejected", "cancelled"},
    "quoted": {"confirmed", "rejected", "cancelled"},
    "confirmed": {"processing", "cancelled"},
    "processing": {"ready", "cancelled"},
    "ready": {"shipped", "cancelled"},
    "shipped": {"delivered"},
    "delivered": {"delivered"},
    "cancelled": {"cancelled"},
    "rejected": {"rejected"},
}

EXPECTED_BUDGET_TRANSITIONS = {
    "draft": {"sent", "expired"},
    "sent": {"accepted", "rejected", "expired"},
    "accepted": {"accepted"},
    "rejected": {"rejected"},
    "expired": {"expired"},
}

INVALID_ORDER_PAIRS = [
    (current, requested.value)
    for current, allowed in EXPECTED_ORDER_TRANSITIONS.items()
    for requested in OrderStatus
    if requested.value not in allowed
]

INVALID_BUDGET_PAIRS = [
    (current, requested.value)
    for current, allowed in EXPECTED_BUDGET_TRANSITIONS.items()
    for requested in BudgetStatus
    if requested.value not in allowed
]


class TestOrderTransitions:
    def test_every_status_has_an_entry(self):
        assert set(ORDER_TRANSITIONS) == set(OrderStatus)

    @pytest.mark.parametrize("current", [s.value for s in OrderStatus])
    @pytest.mark.parametrize("requested", [s.value for s in OrderStatus])
    def test_full_pair_sweep(self, current, requested):
        expected = requested in EXPECTED_ORDER_TRANSITIONS[current]
        assert can_transition_order(current, requested) is expected

    def test_terminal_statuses(self):
        assert {s.value for s in ORDER_TERMINAL_STATUSES} == {
            "delivered",
            "cancelled",
            "rejected",
        }

    def test_shipped_cannot_be_cancelled(self):
        assert can_transition_order("shipped", "cancelled") is False

    def test_unknown_current_status(self):
        assert can_transition_order("lost", "pending") is False
        assert allowed_order_transitions("lost") == frozenset()

    def test_unknown_requested_status(self):
        assert can_transition_order("pending", "teleported") is False

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            ORDER_TRANSITIONS[OrderStatus.PENDING] = frozenset()  # type: ignore[index]


class TestBudgetTransitions:
    def test_every_status_has_an_entry(self):
        assert set(BUDGET_TRANSITIONS) == set(BudgetStatus)

    @pytest.mark.parametrize("current", [s.value for s in BudgetStatus])
    @pytest.mark.parametrize("requested", [s.value for s in BudgetStatus])
    def test_full_pair_sweep(self, current, requested):
        expected = requested in EXPECTED_BUDGET_TRANSITIONS[current]
        assert can_transition_budget(current, requested) is expected

    def test_terminal_statuses(self):
        assert {s.value for s in BUDGET_TERMINAL_STATUSES} == {"accepted", "rejected", "expired"}

    def test_draft_cannot_skip_to_accepted(self):
        assert can_transition_budget("draft", "accepted") is False

    def test_unknown_status(self):
        assert allowed_budget_transitions("archived") == frozenset()
        assert can_transition_budget("draft", "archived") is False


class TestStatusValue:
    def test_enum_member(self):
        assert status_value(OrderStatus.SHIPPED) == "shipped"

    def test_plain_string(self):
        assert status_value("sent") == "sent"
