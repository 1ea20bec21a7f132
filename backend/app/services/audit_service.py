"""Audit service for recording order and budget state changes."""

from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.audit_log import AuditAction, AuditLog
from app.repositories.audit_log_repository import AuditLogRepository

ORDERS_TABLE = "orders"
BUDGETS_TABLE = "budgets"
CONVERSIONS_TABLE = "budgets_to_orders"


class AuditService:
    """Service for appending audit trail entries."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AuditLogRepository(db)

    def _append(self, **fields: object) -> AuditLog:
        try:
            return self.repo.create(**fields)  # type: ignore[arg-type]
        except SQLAlchemyError:
            # Leave the session usable for the caller's remaining work
            self.db.rollback()
            raise

    def log_status_change(
        self,
        table_name: str,
        record_id: UUID,
        old_status: str,
        new_status: str,
        changed_by: str,
    ) -> AuditLog:
        """Log a status change; only the status field is captured."""
        return self._append(
            table_name=table_name,
            record_id=record_id,
            action=AuditAction.UPDATE,
            old_data={"status": old_status},
            new_data={"status": new_status},
            changed_by=changed_by,
        )

    def log_conversion(self, budget_id: UUID, order_id: UUID, changed_by: str) -> AuditLog:
        """Log the conversion of a budget into an order."""
        return self._append(
            table_name=CONVERSIONS_TABLE,
            record_id=budget_id,
            action=AuditAction.CONVERSION,
            old_data={"budget_id": str(budget_id)},
            new_data={"order_id": str(order_id)},
            changed_by=changed_by,
        )
