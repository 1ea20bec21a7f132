"""Column types and defaults shared by the storefront models."""

import uuid
from collections.abc import Iterable
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from sqlalchemy import DateTime, Numeric, String, TypeDecorator
from sqlalchemy.engine import Dialect

CENTS = Decimal("0.01")

# Monetary amounts in the store currency, 2 fraction digits
Money = Numeric(12, 2)


class UUIDType(TypeDecorator[uuid.UUID]):
    """UUID kept in its canonical 36-character text form on every backend."""

    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Dialect) -> str | None:
        if value is None:
            return None
        return str(value if isinstance(value, uuid.UUID) else uuid.UUID(str(value)))

    def process_result_value(self, value: Any, dialect: Dialect) -> uuid.UUID | None:
        if value is None or isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(value)


def as_utc(value: datetime | None) -> datetime | None:
    """Convert to UTC, reading naive values as already UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class UTCDateTime(TypeDecorator[datetime]):
    """Timestamp normalised to UTC on the way in and tagged UTC on the way out.

    SQLite keeps no offset, so aware values are converted before storing and
    naive values are read as UTC. Query parameters compared against the column
    go through the same conversion.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Dialect) -> datetime | None:
        return as_utc(value)

    def process_result_value(self, value: Any, dialect: Dialect) -> datetime | None:
        return as_utc(value)


def round_money(value: Decimal) -> Decimal:
    """Round to whole cents, halves away from zero."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def sum_money(amounts: Iterable[Decimal]) -> Decimal:
    return round_money(sum(amounts, Decimal(0)))


def generate_uuid() -> uuid.UUID:
    return uuid.uuid4()


def utc_now() -> datetime:
    return datetime.now(UTC)
