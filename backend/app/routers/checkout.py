from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.auth import get_current_customer, get_optional_customer
from app.core.database import get_db
from app.core.http_errors import unwrap
from app.models.order import Order
from app.schemas.cart import CartResponse, CartSave, CheckoutRequest
from app.schemas.order import OrderResponse
from app.services.cart_service import CartService
from app.services.checkout_service import CheckoutService

router = APIRouter()


@router.post(
    "/checkout",
    response_model=OrderResponse,
    status_code=201,
    summary="Place order",
    responses={
        400: {"description": "Cart is empty"},
        401: {"description": "Customer is not signed in"},
    },
)
async def checkout(
    data: CheckoutRequest,
    db: Session = Depends(get_db),
    customer_id: UUID | None = Depends(get_optional_customer),
) -> Order:
    """Turn the submitted cart into a pending order for the signed-in customer."""
    service = CheckoutService(db)
    return unwrap(await service.place_order(customer_id, data.items, data.user_info))


@router.get(
    "/cart",
    response_model=CartResponse,
    summary="Get cart",
    responses={401: {"description": "Customer is not signed in"}},
)
async def get_cart(
    db: Session = Depends(get_db),
    customer_id: UUID = Depends(get_current_customer),
) -> CartResponse:
    """Return the customer's saved cart (empty if none)."""
    items = CartService(db).load_cart(customer_id)
    return CartResponse(user_id=customer_id, items=items or [])


@router.put(
    "/cart",
    response_model=CartResponse,
    summary="Save cart",
    responses={401: {"description": "Customer is not signed in"}},
)
async def save_cart(
    data: CartSave,
    db: Session = Depends(get_db),
    customer_id: UUID = Depends(get_current_customer),
) -> CartResponse:
    """Replace the items of the customer's saved cart."""
    cart = CartService(db).save_cart(customer_id, data.items)
    return CartResponse(user_id=customer_id, items=list(cart.items))


@router.delete(
    "/cart",
    status_code=204,
    summary="Clear cart",
    responses={401: {"description": "Customer is not signed in"}},
)
async def clear_cart(
    db: Session = Depends(get_db),
    customer_id: UUID = Depends(get_current_customer),
) -> None:
    """Close the customer's saved cart."""
    CartService(db).clear_cart(customer_id)
