from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from app.core.auth import get_current_actor
from app.core.database import get_db
from app.models.garden_service import GardenService
from app.repositories.garden_service_repository import GardenServiceRepository
from app.schemas.garden_service import (
    GardenServiceCreate,
    GardenServiceResponse,
    GardenServiceUpdate,
)

router = APIRouter()


@router.get("/", response_model=list[GardenServiceResponse], summary="List services")
async def list_services(
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    category: str | None = None,
    search: str | None = Query(default=None, min_length=1, max_length=100),
    order_by: str | None = None,
    db: Session = Depends(get_db),
) -> list[GardenService]:
    """List the labour services on offer, newest first."""
    repo = GardenServiceRepository(db)
    response.headers["X-Total-Count"] = str(repo.count(category=category, search=search))
    return repo.get_all(
        skip=skip, limit=limit, category=category, search=search, order_by=order_by
    )


@router.get(
    "/{service_id}",
    response_model=GardenServiceResponse,
    summary="Get service",
    responses={404: {"description": "Service not found"}},
)
async def get_service(service_id: UUID, db: Session = Depends(get_db)) -> GardenService:
    service = GardenServiceRepository(db).get_by_id(service_id)
    if not service:
        raise HTTPException(status_code=404, detail="Service not found")
    return service


@router.post(
    "/",
    response_model=GardenServiceResponse,
    status_code=201,
    summary="Create service",
    responses={401: {"description": "Missing actor identity"}},
)
async def create_service(
    data: GardenServiceCreate,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> GardenService:
    return GardenServiceRepository(db).create(data)


@router.put(
    "/{service_id}",
    response_model=GardenServiceResponse,
    summary="Update service",
    responses={404: {"description": "Service not found"}},
)
async def update_service(
    service_id: UUID,
    data: GardenServiceUpdate,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> GardenService:
    service = GardenServiceRepository(db).update(service_id, data)
    if not service:
        raise HTTPException(status_code=404, detail="Service not found")
    return service


@router.delete(
    "/{service_id}",
    status_code=204,
    summary="Delete service",
    responses={404: {"description": "Service not found"}},
)
async def delete_service(
    service_id: UUID,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> Response:
    if not GardenServiceRepository(db).delete(service_id):
        raise HTTPException(status_code=404, detail="Service not found")
    return Response(status_code=204)
