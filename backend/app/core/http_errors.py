"""Translation of service results into HTTP responses."""

from typing import TypeVar

from fastapi import HTTPException

from app.core.errors import ErrorCode
from app.services.results import ServiceResult

T = TypeVar("T")

ERROR_STATUS_CODES: dict[ErrorCode, int] = {
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.INVALID_TRANSITION: 400,
    ErrorCode.INVALID_STATE: 400,
    ErrorCode.EMPTY_CART: 400,
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.AUTHENTICATION_REQUIRED: 401,
    ErrorCode.PARTIAL_CONVERSION: 409,
    ErrorCode.CONFLICT: 409,
    ErrorCode.PERSISTENCE_ERROR: 500,
    ErrorCode.UNEXPECTED_ERROR: 500,
}


def unwrap(result: ServiceResult[T]) -> T:
    """Return the result's data or raise the matching HTTPException.

    The service's error message is passed through verbatim as ``detail``.
    """
    if result.success:
        return result.data  # type: ignore[return-value]
    code = result.error_code or ErrorCode.UNEXPECTED_ERROR
    raise HTTPException(status_code=ERROR_STATUS_CODES[code], detail=result.error)
