from app.repositories.audit_log_repository import AuditLogRepository
from app.repositories.budget_repository import BudgetRepository
from app.repositories.cart_repository import CartRepository
from app.repositories.customer_repository import CustomerRepository
from app.repositories.garden_service_repository import GardenServiceRepository
from app.repositories.order_repository import OrderRepository
from app.repositories.product_repository import ProductRepository
from app.repositories.user_activity_log_repository import UserActivityLogRepository

__all__ = [
    "AuditLogRepository",
    "BudgetRepository",
    "CartRepository",
    "CustomerRepository",
    "GardenServiceRepository",
    "OrderRepository",
    "ProductRepository",
    "UserActivityLogRepository",
]
