from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from app.core.auth import get_current_actor, get_current_customer
from app.core.database import get_db
from app.core.http_errors import unwrap
from app.models.customer import Customer
from app.repositories.customer_repository import CustomerRepository
from app.schemas.customer import (
    CustomerCreate,
    CustomerLogin,
    CustomerResponse,
    CustomerTokenResponse,
    CustomerUpdate,
)
from app.services.customer_service import CustomerService

router = APIRouter()


@router.post(
    "/",
    response_model=CustomerResponse,
    status_code=201,
    summary="Register customer",
    responses={409: {"description": "Email already registered"}},
)
async def create_customer(data: CustomerCreate, db: Session = Depends(get_db)) -> Customer:
    """Register a storefront customer and send the welcome email."""
    return unwrap(await CustomerService(db).register(data))


@router.post(
    "/login",
    response_model=CustomerTokenResponse,
    summary="Customer login",
    responses={401: {"description": "Invalid email or password"}},
)
async def login(data: CustomerLogin, db: Session = Depends(get_db)) -> CustomerTokenResponse:
    """Exchange the customer's email and password for a bearer token."""
    return unwrap(CustomerService(db).authenticate(data.email, data.password))


@router.get(
    "/me",
    response_model=CustomerResponse,
    summary="Current customer",
    responses={401: {"description": "Missing or invalid session token"}},
)
async def get_me(
    db: Session = Depends(get_db),
    customer_id: UUID = Depends(get_current_customer),
) -> Customer:
    """Profile of the customer the bearer token belongs to."""
    customer = CustomerRepository(db).get_by_id(customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


@router.get("/", response_model=list[CustomerResponse], summary="List customers")
async def list_customers(
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> list[Customer]:
    """List customers, newest first."""
    repo = CustomerRepository(db)
    response.headers["X-Total-Count"] = str(repo.count())
    return repo.get_all(skip=skip, limit=limit)


@router.get(
    "/{customer_id}",
    response_model=CustomerResponse,
    summary="Get customer",
    responses={404: {"description": "Customer not found"}},
)
async def get_customer(
    customer_id: UUID,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> Customer:
    """Get a customer by ID."""
    customer = CustomerRepository(db).get_by_id(customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


@router.put(
    "/{customer_id}",
    response_model=CustomerResponse,
    summary="Update customer",
    responses={404: {"description": "Customer not found"}},
)
async def update_customer(
    customer_id: UUID,
    data: CustomerUpdate,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> Customer:
    """Update a customer's contact details."""
    customer = CustomerRepository(db).update(customer_id, data)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer
