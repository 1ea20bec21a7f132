"""Domain errors raised inside the order and budget services."""

from enum import Enum
from uuid import UUID


class ErrorCode(str, Enum):
    NOT_FOUND = "not_found"
    INVALID_TRANSITION = "invalid_transition"
    INVALID_STATE = "invalid_state"
    PERSISTENCE_ERROR = "persistence_error"
    EMPTY_CART = "empty_cart"
    AUTHENTICATION_REQUIRED = "authentication_required"
    PARTIAL_CONVERSION = "partial_conversion"
    VALIDATION_ERROR = "validation_error"
    CONFLICT = "conflict"
    UNEXPECTED_ERROR = "unexpected_error"


class StoreError(Exception):
    """Base class for expected failures of a store operation."""

    code: ErrorCode = ErrorCode.UNEXPECTED_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(StoreError):
    code = ErrorCode.NOT_FOUND


class InvalidTransitionError(StoreError):
    code = ErrorCode.INVALID_TRANSITION

    def __init__(self, current: str, requested: str):
        super().__init__(f"Invalid status transition from {current} to {requested}")
        self.current = current
        self.requested = requested


class InvalidStateError(StoreError):
    code = ErrorCode.INVALID_STATE


class PersistenceError(StoreError):
    code = ErrorCode.PERSISTENCE_ERROR

    def __init__(self, message: str, original: Exception | None = None):
        super().__init__(message)
        self.original = original


class EmptyCartError(StoreError):
    code = ErrorCode.EMPTY_CART

    def __init__(self, message: str = "Cart is empty"):
        super().__init__(message)


class AuthenticationRequiredError(StoreError):
    code = ErrorCode.AUTHENTICATION_REQUIRED

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class PartialConversionError(StoreError):
    """The order was created but the budget could not be linked to it."""

    code = ErrorCode.PARTIAL_CONVERSION

    def __init__(self, budget_id: UUID, order_id: UUID):
        super().__init__(
            f"Order {order_id} was created but budget {budget_id} could not be marked "
            "as converted; retry the conversion to link them"
        )
        self.budget_id = budget_id
        self.order_id = order_id


class ValidationError(StoreError):
    code = ErrorCode.VALIDATION_ERROR


class ConflictError(StoreError):
    code = ErrorCode.CONFLICT
