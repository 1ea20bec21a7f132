from app.models.audit_log import AuditAction, AuditLog
from app.models.budget import Budget, BudgetStatus
from app.models.cart import Cart, CartStatus
from app.models.customer import Customer
from app.models.garden_service import GardenService
from app.models.order import Order, OrderStatus, PaymentMethod, PaymentStatus
from app.models.product import PRODUCT_CATEGORY_LABELS, Product, ProductCategory
from app.models.user_activity_log import UserActivityLog

__all__ = [
    "AuditAction",
    "AuditLog",
    "Budget",
    "BudgetStatus",
    "Cart",
    "CartStatus",
    "Customer",
    "GardenService",
    "Order",
    "OrderStatus",
    "PaymentMethod",
    "PaymentStatus",
    "PRODUCT_CATEGORY_LABELS",
    "Product",
    "ProductCategory",
    "UserActivityLog",
]
