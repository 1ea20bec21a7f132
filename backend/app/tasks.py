"""Enqueue storefront sweeps on the arq worker outside their cron schedule."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from arq import create_pool
from arq.connections import ArqRedis, RedisSettings
from arq.jobs import Job

from app.core.config import settings

EXPIRE_STALE_BUDGETS_TASK = "expire_stale_budgets_task"
PROCESS_ABANDONED_CARTS_TASK = "process_abandoned_carts_task"

redis_settings = RedisSettings.from_dsn(settings.REDIS_URL)


async def get_redis_pool() -> ArqRedis:
    return await create_pool(redis_settings)


@asynccontextmanager
async def redis_pool() -> AsyncIterator[ArqRedis]:
    """Short-lived pool, closed when the block exits."""
    pool = await get_redis_pool()
    try:
        yield pool
    finally:
        await pool.close()


async def enqueue_task(task_name: str, *args: Any, **kwargs: Any) -> Job:
    """Queue ``task_name`` with the given arguments and return the arq job."""
    async with redis_pool() as pool:
        job = await pool.enqueue_job(task_name, *args, **kwargs)
    return job  # type: ignore[return-value]


async def enqueue_expire_stale_budgets() -> Job:
    return await enqueue_task(EXPIRE_STALE_BUDGETS_TASK)


async def enqueue_process_abandoned_carts() -> Job:
    return await enqueue_task(PROCESS_ABANDONED_CARTS_TASK)
