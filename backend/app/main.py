from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.routers import (
    audit_logs,
    budgets,
    checkout,
    customers,
    garden_services,
    orders,
    products,
)

OPENAPI_TAGS = [
    {"name": "Customers", "description": "Customer registration, login and profiles."},
    {"name": "Catalog", "description": "Browse products and services; staff manage them."},
    {"name": "Storefront", "description": "Saved carts and checkout for signed-in customers."},
    {"name": "Orders", "description": "Manage orders and move them through delivery."},
    {"name": "Budgets", "description": "Price quotations and their conversion into orders."},
    {"name": "Audit Logs", "description": "Query the status history of orders and budgets."},
]

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.version,
    description=(
        "Order and budget management API for a garden products store. "
        "Customers check out saved carts; employees quote budgets, convert "
        "them into orders and follow orders through delivery."
    ),
    openapi_tags=OPENAPI_TAGS,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Total-Count"],
)


app.include_router(customers.router, prefix="/v1/customers", tags=["Customers"])
app.include_router(products.router, prefix="/v1/products", tags=["Catalog"])
app.include_router(garden_services.router, prefix="/v1/services", tags=["Catalog"])
app.include_router(checkout.router, prefix="/v1", tags=["Storefront"])
app.include_router(orders.router, prefix="/v1/orders", tags=["Orders"])
app.include_router(budgets.router, prefix="/v1/budgets", tags=["Budgets"])
app.include_router(audit_logs.router, prefix="/v1/audit_logs", tags=["Audit Logs"])


@app.get("/")
async def root() -> dict[str, str]:
    return {
        "app": settings.APP_NAME,
        "version": settings.version,
        "domain": settings.APP_DOMAIN,
        "status": "running",
    }
