from app.schemas.audit_log import AuditLogResponse
from app.schemas.budget import (
    BudgetConvertRequest,
    BudgetCreate,
    BudgetResponse,
    BudgetStatusUpdate,
    BudgetUpdate,
    ExpireBudgetsResponse,
)
from app.schemas.cart import CartResponse, CartSave, CheckoutRequest
from app.schemas.customer import (
    CustomerCreate,
    CustomerLogin,
    CustomerResponse,
    CustomerTokenResponse,
    CustomerUpdate,
)
from app.schemas.garden_service import (
    GardenServiceCreate,
    GardenServiceResponse,
    GardenServiceUpdate,
)
from app.schemas.line_item import LineItem, UserInfo
from app.schemas.order import OrderCreate, OrderResponse, OrderStatusUpdate, OrderUpdate
from app.schemas.product import (
    ProductBulkCreate,
    ProductCategoryResponse,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)

__all__ = [
    "AuditLogResponse",
    "BudgetConvertRequest",
    "BudgetCreate",
    "BudgetResponse",
    "BudgetStatusUpdate",
    "BudgetUpdate",
    "CartResponse",
    "CartSave",
    "CheckoutRequest",
    "CustomerCreate",
    "CustomerLogin",
    "CustomerResponse",
    "CustomerTokenResponse",
    "CustomerUpdate",
    "ExpireBudgetsResponse",
    "GardenServiceCreate",
    "GardenServiceResponse",
    "GardenServiceUpdate",
    "LineItem",
    "OrderCreate",
    "OrderResponse",
    "OrderStatusUpdate",
    "OrderUpdate",
    "ProductBulkCreate",
    "ProductCategoryResponse",
    "ProductCreate",
    "ProductResponse",
    "ProductUpdate",
    "UserInfo",
]
