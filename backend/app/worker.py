import logging
from typing import Any

from arq import cron

from app.core.database import session_scope
from app.services.budget_service import BudgetService
from app.services.cart_service import CartService
from app.tasks import redis_settings

logger = logging.getLogger(__name__)


async def expire_stale_budgets_task(ctx: dict[str, Any]) -> int:
    """Background task: expire budgets whose validity date has passed.

    Runs hourly.
    """
    with session_scope() as db:
        result = await BudgetService(db).expire_stale_budgets()
        if not result.success:
            logger.error("Budget expiry sweep failed: %s", result.error)
            return 0
        for warning in result.warnings:
            logger.warning("Budget expiry sweep: %s", warning)
        count = len(result.data or [])
        if count > 0:
            logger.info("Expired %d budgets", count)
        return count


async def process_abandoned_carts_task(ctx: dict[str, Any]) -> int:
    """Background task: remind customers about carts left idle between
    ABANDONED_CART_MIN_HOURS and ABANDONED_CART_MAX_HOURS.

    Runs hourly.
    """
    with session_scope() as db:
        count = await CartService(db).process_abandoned_carts()
        if count > 0:
            logger.info("Sent %d abandoned cart reminders", count)
        return count


class WorkerSettings:
    functions = [
        expire_stale_budgets_task,
        process_abandoned_carts_task,
    ]
    cron_jobs = [
        cron(expire_stale_budgets_task, minute={0}),  # hourly
        cron(process_abandoned_carts_task, minute={30}),  # hourly
    ]
    redis_settings = redis_settings
