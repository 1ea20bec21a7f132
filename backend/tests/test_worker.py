"""Tests for worker background tasks and cron job registration."""

from datetime import UTC, datetime, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.core.errors import PersistenceError
from app.models.budget import BudgetStatus
from app.repositories.budget_repository import BudgetRepository
from app.schemas.line_item import LineItem
from app.services.cart_service import CartService
from app.services.results import ServiceResult
from app.worker import (
    WorkerSettings,
    expire_stale_budgets_task,
    process_abandoned_carts_task,
)
from tests.conftest import DEFAULT_ACTOR, make_item


class TestExpireStaleBudgetsTask:
    @pytest.mark.asyncio
    async def test_expires_stale_budgets(self, db_session, customer_id):
        budget = BudgetRepository(db_session).create(
            customer_id=customer_id,
            items=[make_item()],
            subtotal=Decimal("90.00"),
            tax=None,
            total=Decimal("90.00"),
            valid_until=datetime.now(UTC) - timedelta(days=1),
            created_by=DEFAULT_ACTOR,
        )

        assert await expire_stale_budgets_task({}) == 1

        db_session.refresh(budget)
        assert budget.status == BudgetStatus.EXPIRED.value

    @pytest.mark.asyncio
    async def test_nothing_to_expire(self):
        assert await expire_stale_budgets_task({}) == 0

    @pytest.mark.asyncio
    async def test_failed_sweep_returns_zero(self):
        mock_service = MagicMock()
        mock_service.expire_stale_budgets = AsyncMock(
            return_value=ServiceResult.failure(PersistenceError("db down"))
        )
        with patch("app.worker.BudgetService", return_value=mock_service):
            assert await expire_stale_budgets_task({}) == 0

    @pytest.mark.asyncio
    async def test_creates_session_and_passes_it(self):
        mock_service = MagicMock()
        mock_service.expire_stale_budgets = AsyncMock(return_value=ServiceResult.ok([]))

        with patch("app.worker.BudgetService", return_value=mock_service) as mock_cls:
            await expire_stale_budgets_task({})

        mock_cls.assert_called_once()
        assert mock_cls.call_args[0][0] is not None


class TestProcessAbandonedCartsTask:
    @pytest.mark.asyncio
    async def test_notifies_idle_carts(self, db_session, customer_id):
        cart = CartService(db_session).save_cart(customer_id, [LineItem(**make_item())])
        cart.updated_at = datetime.now(UTC) - timedelta(hours=30)
        db_session.commit()

        assert await process_abandoned_carts_task({}) == 1

    @pytest.mark.asyncio
    async def test_returns_service_count(self):
        mock_service = MagicMock()
        mock_service.process_abandoned_carts = AsyncMock(return_value=4)
        with patch("app.worker.CartService", return_value=mock_service):
            assert await process_abandoned_carts_task({}) == 4


class TestWorkerSettings:
    def test_functions_registered(self):
        assert expire_stale_budgets_task in WorkerSettings.functions
        assert process_abandoned_carts_task in WorkerSettings.functions

    def test_cron_jobs_are_hourly(self):
        assert len(WorkerSettings.cron_jobs) == 2
        for job in WorkerSettings.cron_jobs:
            assert len(job.minute) == 1
            assert job.hour is None
