from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from app.core.auth import get_current_actor, get_current_customer
from app.core.database import get_db
from app.core.http_errors import unwrap
from app.models.order import Order, OrderStatus
from app.repositories.order_repository import OrderRepository
from app.schemas.order import OrderResponse, OrderStatusUpdate, OrderUpdate
from app.services.order_service import OrderService

router = APIRouter()


@router.get(
    "/",
    response_model=list[OrderResponse],
    summary="List orders",
)
async def list_orders(
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=1000),
    status: OrderStatus | None = None,
    user_id: UUID | None = None,
    start: datetime | None = None,
    end: datetime | None = None,
    order_by: str | None = Query(default=None, description="field:direction, e.g. total:asc"),
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> list[Order]:
    """List orders, newest first, with optional filters."""
    repo = OrderRepository(db)
    response.headers["X-Total-Count"] = str(
        repo.count(status=status, user_id=user_id, start=start, end=end)
    )
    return repo.get_all(
        skip=skip,
        limit=limit,
        status=status,
        user_id=user_id,
        start=start,
        end=end,
        order_by=order_by,
    )


@router.get(
    "/mine",
    response_model=list[OrderResponse],
    summary="List my orders",
    responses={401: {"description": "Missing or invalid session token"}},
)
async def list_my_orders(
    db: Session = Depends(get_db),
    customer_id: UUID = Depends(get_current_customer),
) -> list[Order]:
    """Orders placed by the customer the bearer token belongs to, newest first."""
    return unwrap(OrderService(db).get_user_orders(customer_id))

@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    summary="Get order",
    responses={404: {"description": "Order not found"}},
)
async def get_order(
    order_id: UUID,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> Order:
    """Get an order by ID."""
    return unwrap(OrderService(db).get_order(order_id))


@router.put(
    "/{order_id}",
    response_model=OrderResponse,
    summary="Update order",
    responses={
        400: {"description": "Status cannot be changed through this endpoint"},
        404: {"description": "Order not found"},
    },
)
async def update_order(
    order_id: UUID,
    data: OrderUpdate,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> Order:
    """Update an order's delivery, payment or note fields."""
    return unwrap(OrderService(db).update_order(order_id, data))


@router.post(
    "/{order_id}/status",
    response_model=OrderResponse,
    summary="Change order status",
    responses={
        400: {"description": "Transition not allowed from the current status"},
        401: {"description": "Missing actor identity"},
        404: {"description": "Order not found"},
    },
)
async def update_order_status(
    order_id: UUID,
    data: OrderStatusUpdate,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> Order:
    """Move an order along its lifecycle; the change is audited and emailed."""
    return unwrap(await OrderService(db).update_order_status(order_id, data.status, actor_id))


@router.delete(
    "/{order_id}",
    status_code=204,
    summary="Delete order",
    responses={404: {"description": "Order not found"}},
)
async def delete_order(
    order_id: UUID,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> Response:
    """Remove an order. Administrative use only."""
    unwrap(OrderService(db).delete_order(order_id))
    return Response(status_code=204)
