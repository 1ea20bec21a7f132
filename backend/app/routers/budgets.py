from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from app.core.auth import get_current_actor
from app.core.database import get_db
from app.core.http_errors import unwrap
from app.models.budget import Budget, BudgetStatus
from app.models.order import Order
from app.repositories.budget_repository import BudgetRepository
from app.schemas.budget import (
    BudgetConvertRequest,
    BudgetCreate,
    BudgetResponse,
    BudgetStatusUpdate,
    BudgetUpdate,
    ExpireBudgetsResponse,
)
from app.schemas.order import OrderResponse
from app.services.budget_service import BudgetService

router = APIRouter()


@router.post(
    "/",
    response_model=BudgetResponse,
    status_code=201,
    summary="Create budget",
    responses={401: {"description": "Missing actor identity"}},
)
async def create_budget(
    data: BudgetCreate,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> Budget:
    """Create a draft budget on behalf of a customer."""
    return unwrap(await BudgetService(db).create_budget(data, created_by=actor_id))


@router.get(
    "/",
    response_model=list[BudgetResponse],
    summary="List budgets",
)
async def list_budgets(
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=1000),
    customer_id: UUID | None = None,
    status: BudgetStatus | None = None,
    order_by: str | None = None,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> list[Budget]:
    """List budgets, newest first, with optional filters."""
    repo = BudgetRepository(db)
    response.headers["X-Total-Count"] = str(repo.count(customer_id=customer_id, status=status))
    return repo.get_all(
        skip=skip, limit=limit, customer_id=customer_id, status=status, order_by=order_by
    )


@router.post(
    "/expire",
    response_model=ExpireBudgetsResponse,
    summary="Expire stale budgets",
    responses={401: {"description": "Missing actor identity"}},
)
async def expire_budgets(
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> ExpireBudgetsResponse:
    """Mark every budget past its validity date as expired."""
    expired = unwrap(await BudgetService(db).expire_stale_budgets(actor_id=actor_id))
    return ExpireBudgetsResponse(
        expired_count=len(expired),
        budget_ids=[budget.id for budget in expired],
    )


@router.get(
    "/{budget_id}",
    response_model=BudgetResponse,
    summary="Get budget",
    responses={404: {"description": "Budget not found"}},
)
async def get_budget(
    budget_id: UUID,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> Budget:
    """Get a budget by ID."""
    return unwrap(BudgetService(db).get_budget(budget_id))


@router.put(
    "/{budget_id}",
    response_model=BudgetResponse,
    summary="Update budget",
    responses={
        400: {"description": "Status cannot be changed through this endpoint"},
        404: {"description": "Budget not found"},
    },
)
async def update_budget(
    budget_id: UUID,
    data: BudgetUpdate,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> Budget:
    """Update a budget's items, amounts, validity or notes."""
    return unwrap(BudgetService(db).update_budget(budget_id, data))


@router.post(
    "/{budget_id}/status",
    response_model=BudgetResponse,
    summary="Change budget status",
    responses={
        400: {"description": "Transition not allowed from the current status"},
        401: {"description": "Missing actor identity"},
        404: {"description": "Budget not found"},
    },
)
async def update_budget_status(
    budget_id: UUID,
    data: BudgetStatusUpdate,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> Budget:
    """Move a budget along its lifecycle; the change is audited and emailed."""
    return unwrap(await BudgetService(db).update_budget_status(budget_id, data.status, actor_id))


@router.post(
    "/{budget_id}/convert",
    response_model=OrderResponse,
    summary="Convert budget to order",
    responses={
        400: {"description": "Budget is not accepted"},
        401: {"description": "Missing actor identity"},
        404: {"description": "Budget not found"},
        409: {"description": "Order created but budget could not be linked"},
    },
)
async def convert_budget(
    budget_id: UUID,
    data: BudgetConvertRequest,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> Order:
    """Create a confirmed order from an accepted budget.

    Repeating the call for an already converted budget returns the same order.
    """
    service = BudgetService(db)
    return unwrap(
        await service.convert_budget_to_order(
            budget_id, data.customer_user_id, data.user_info, actor_id
        )
    )


@router.delete(
    "/{budget_id}",
    status_code=204,
    summary="Delete budget",
    responses={404: {"description": "Budget not found"}},
)
async def delete_budget(
    budget_id: UUID,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> Response:
    """Remove a budget."""
    unwrap(BudgetService(db).delete_budget(budget_id))
    return Response(status_code=204)
