"""Parsing of the ``order_by`` query parameter shared by the list endpoints."""

from __future__ import annotations

from sqlalchemy import asc, desc
from sqlalchemy.orm import Query

from app.core.database import Base

SORT_DIRECTIONS = {"asc": asc, "desc": desc}


def parse_order_by(order_by: str | None, columns: set[str]) -> tuple[str, str] | None:
    """Split ``"field:direction"`` into its parts.

    Returns None when the field is not one of ``columns``. A missing or
    unrecognised direction reads as ascending.
    """
    if not order_by:
        return None
    field, _, direction = order_by.partition(":")
    if field not in columns:
        return None
    return field, direction if direction in SORT_DIRECTIONS else "asc"


def apply_order_by(
    query: Query,  # type: ignore[type-arg]
    model: type[Base],
    order_by: str | None,
    default_field: str = "created_at",
    default_direction: str = "desc",
) -> Query:  # type: ignore[type-arg]
    """Order ``query`` by a column of ``model``, newest first unless asked otherwise."""
    parsed = parse_order_by(order_by, set(model.__table__.columns.keys()))
    field, direction = parsed or (default_field, default_direction)
    return query.order_by(SORT_DIRECTIONS[direction](getattr(model, field)))
