"""Uniform result shape returned by order, budget and checkout operations."""

from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import ErrorCode, PersistenceError, StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred, please try again later"


@dataclass
class ServiceResult(Generic[T]):
    """Either the entity an operation produced or a description of why it failed.

    ``warnings`` collects best-effort hook failures (audit, email) that did not
    affect the outcome.
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: ErrorCode | None = None
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def ok(cls, data: T | None = None, warnings: list[str] | None = None) -> ServiceResult[T]:
        return cls(success=True, data=data, warnings=list(warnings or []))

    @classmethod
    def failure(cls, exc: StoreError, data: T | None = None) -> ServiceResult[T]:
        return cls(success=False, data=data, error=exc.message, error_code=exc.code)


def _persistence_failure(db: Any, operation: str, exc: SQLAlchemyError) -> ServiceResult[Any]:
    if db is not None:
        db.rollback()
    logger.exception("Database error in %s", operation)
    return ServiceResult.failure(
        PersistenceError(f"Database error while running {operation}", original=exc)
    )


def _unexpected_failure(operation: str) -> ServiceResult[Any]:
    logger.exception("Unexpected error in %s", operation)
    return ServiceResult(
        success=False,
        error=UNEXPECTED_ERROR_MESSAGE,
        error_code=ErrorCode.UNEXPECTED_ERROR,
    )


def service_operation(operation: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Turn a service method into an operation boundary.

    Domain errors become failure results carrying their message; database
    errors roll back the session and become ``persistence_error``; anything
    else is logged and reported with a generic message. Works on both sync
    and async methods of services exposing ``self.db``.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(self: Any, *args: Any, **kwargs: Any) -> ServiceResult[Any]:
                try:
                    return await func(self, *args, **kwargs)  # type: ignore[no-any-return]
                except StoreError as exc:
                    return ServiceResult.failure(exc)
                except SQLAlchemyError as exc:
                    return _persistence_failure(getattr(self, "db", None), operation, exc)
                except Exception:
                    return _unexpected_failure(operation)

            return async_wrapper

        @functools.wraps(func)
        def wrapper(self: Any, *args: Any, **kwargs: Any) -> ServiceResult[Any]:
            try:
                return func(self, *args, **kwargs)  # type: ignore[no-any-return]
            except StoreError as exc:
                return ServiceResult.failure(exc)
            except SQLAlchemyError as exc:
                return _persistence_failure(getattr(self, "db", None), operation, exc)
            except Exception:
                return _unexpected_failure(operation)

        return wrapper

    return decorator
