"""Customer accounts: registration and password login."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.core.auth import create_customer_token, hash_password, verify_password
from app.core.config import settings
from app.core.errors import AuthenticationRequiredError, ConflictError
from app.models.customer import Customer
from app.repositories.customer_repository import CustomerRepository
from app.schemas.customer import CustomerCreate, CustomerTokenResponse
from app.services.activity_log_service import LOGIN, ActivityLogService
from app.services.email_service import EmailService, mask_email
from app.services.hooks import hook_warnings, run_best_effort
from app.services.results import ServiceResult, service_operation

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class CustomerService:
    def __init__(self, db: Session, email_service: EmailService | None = None):
        self.db = db
        self.repo = CustomerRepository(db)
        self.activity_service = ActivityLogService(db)
        self.email_service = email_service or EmailService(db)

    @service_operation("register_customer")
    async def register(self, data: CustomerCreate) -> ServiceResult[Customer]:
        """Create a customer account and greet them by email.

        Accounts created without a password exist for budgets and orders
        but cannot log in to the storefront.
        """
        if self.repo.email_exists(data.email):
            raise ConflictError("A customer with this email already exists")

        password_hash = hash_password(data.password) if data.password else None
        customer = self.repo.create(data, password_hash=password_hash)
        logger.info("Registered customer %s (%s)", customer.id, mask_email(customer.email))

        welcome = await run_best_effort(
            "welcome email", self.email_service.send_welcome_email, customer
        )
        return ServiceResult.ok(customer, warnings=hook_warnings(welcome))

    @service_operation("authenticate_customer")
    def authenticate(self, email: str, password: str) -> ServiceResult[CustomerTokenResponse]:
        """Exchange an email and password for a session token."""
        customer = self.repo.get_by_email(email)
        if not customer or not verify_password(password, customer.password_hash):
            logger.info("Failed login attempt for %s", mask_email(email))
            raise AuthenticationRequiredError(INVALID_CREDENTIALS)

        self.activity_service.log_activity(str(customer.id), LOGIN, {"method": "password"})
        return ServiceResult.ok(
            CustomerTokenResponse(
                customer_id=customer.id,
                token=create_customer_token(customer.id),
                expires_in=settings.CUSTOMER_TOKEN_TTL_HOURS * 3600,
            )
        )
