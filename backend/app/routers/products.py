from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from app.core.auth import get_current_actor
from app.core.database import get_db
from app.models.product import PRODUCT_CATEGORY_LABELS, Product, ProductCategory
from app.repositories.product_repository import ProductRepository
from app.schemas.product import (
    ProductBulkCreate,
    ProductCategoryResponse,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)

router = APIRouter()


@router.get("/", response_model=list[ProductResponse], summary="List products")
async def list_products(
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    category: ProductCategory | None = None,
    search: str | None = Query(default=None, min_length=1, max_length=100),
    order_by: str | None = Query(default=None, description="field:direction, e.g. price:asc"),
    db: Session = Depends(get_db),
) -> list[Product]:
    """Browse the catalog, newest first; ``search`` matches name or description."""
    repo = ProductRepository(db)
    response.headers["X-Total-Count"] = str(repo.count(category=category, search=search))
    return repo.get_all(
        skip=skip, limit=limit, category=category, search=search, order_by=order_by
    )


@router.get(
    "/categories",
    response_model=list[ProductCategoryResponse],
    summary="List product categories",
)
async def list_categories() -> list[ProductCategoryResponse]:
    return [
        ProductCategoryResponse(value=category.value, label=label)
        for category, label in PRODUCT_CATEGORY_LABELS.items()
    ]


@router.get(
    "/categories/{category}",
    response_model=list[ProductResponse],
    summary="List products in a category",
)
async def list_category_products(
    category: ProductCategory, db: Session = Depends(get_db)
) -> list[Product]:
    """Every product of one category, alphabetically."""
    return ProductRepository(db).get_by_category(category)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Get product",
    responses={404: {"description": "Product not found"}},
)
async def get_product(product_id: UUID, db: Session = Depends(get_db)) -> Product:
    product = ProductRepository(db).get_by_id(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.post(
    "/",
    response_model=ProductResponse,
    status_code=201,
    summary="Create product",
    responses={401: {"description": "Missing actor identity"}},
)
async def create_product(
    data: ProductCreate,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> Product:
    return ProductRepository(db).create(data)


@router.post(
    "/bulk",
    response_model=list[ProductResponse],
    status_code=201,
    summary="Create products in bulk",
    responses={401: {"description": "Missing actor identity"}},
)
async def create_products(
    data: ProductBulkCreate,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> list[Product]:
    """Import a batch of products; either all are created or none."""
    return ProductRepository(db).create_many(data.items)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Update product",
    responses={404: {"description": "Product not found"}},
)
async def update_product(
    product_id: UUID,
    data: ProductUpdate,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> Product:
    product = ProductRepository(db).update(product_id, data)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.delete(
    "/{product_id}",
    status_code=204,
    summary="Delete product",
    responses={404: {"description": "Product not found"}},
)
async def delete_product(
    product_id: UUID,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> Response:
    if not ProductRepository(db).delete(product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    return Response(status_code=204)
