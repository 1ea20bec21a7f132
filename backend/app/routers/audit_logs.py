"""Audit log API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from app.core.auth import get_current_actor
from app.core.database import get_db
from app.models.audit_log import AuditLog
from app.repositories.audit_log_repository import AuditLogRepository
from app.schemas.audit_log import AuditLogResponse

router = APIRouter()


@router.get(
    "/",
    response_model=list[AuditLogResponse],
    summary="List audit logs",
)
async def list_audit_logs(
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    table_name: str | None = None,
    record_id: UUID | None = None,
    action: str | None = None,
    order_by: str | None = None,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> list[AuditLog]:
    """List audit logs with optional filters."""
    repo = AuditLogRepository(db)
    response.headers["X-Total-Count"] = str(
        repo.count(table_name=table_name, record_id=record_id, action=action)
    )
    return repo.get_all(
        skip=skip,
        limit=limit,
        table_name=table_name,
        record_id=record_id,
        action=action,
        order_by=order_by,
    )


@router.get(
    "/{table_name}/{record_id}",
    response_model=list[AuditLogResponse],
    summary="Get audit trail for a record",
)
async def get_record_audit_trail(
    table_name: str,
    record_id: UUID,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> list[AuditLog]:
    """Get the audit trail of one order or budget, oldest first."""
    return AuditLogRepository(db).get_by_record(table_name, record_id, skip=skip, limit=limit)
