"""Repository for AuditLog create and read operations."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.sorting import apply_order_by
from app.models.audit_log import AuditAction, AuditLog
from app.models.shared import utc_now


class AuditLogRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        *,
        table_name: str,
        record_id: UUID,
        action: AuditAction,
        old_data: dict[str, Any],
        new_data: dict[str, Any],
        changed_by: str,
    ) -> AuditLog:
        audit_log = AuditLog(
            table_name=table_name,
            record_id=record_id,
            action=action.value,
            old_data=old_data,
            new_data=new_data,
            changed_by=changed_by,
            created_at=utc_now(),
        )
        self.db.add(audit_log)
        self.db.commit()
        self.db.refresh(audit_log)
        return audit_log

    def get_by_record(
        self,
        table_name: str,
        record_id: UUID,
        skip: int = 0,
        limit: int = 100,
    ) -> list[AuditLog]:
        return (
            self.db.query(AuditLog)
            .filter(
                AuditLog.table_name == table_name,
                AuditLog.record_id == record_id,
            )
            .order_by(AuditLog.created_at.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        table_name: str | None = None,
        record_id: UUID | None = None,
        action: str | None = None,
        order_by: str | None = None,
    ) -> list[AuditLog]:
        query = self.db.query(AuditLog)
        if table_name:
            query = query.filter(AuditLog.table_name == table_name)
        if record_id:
            query = query.filter(AuditLog.record_id == record_id)
        if action:
            query = query.filter(AuditLog.action == action)
        query = apply_order_by(query, AuditLog, order_by)
        return query.offset(skip).limit(limit).all()

    def count(
        self,
        table_name: str | None = None,
        record_id: UUID | None = None,
        action: str | None = None,
    ) -> int:
        query = self.db.query(AuditLog)
        if table_name:
            query = query.filter(AuditLog.table_name == table_name)
        if record_id:
            query = query.filter(AuditLog.record_id == record_id)
        if action:
            query = query.filter(AuditLog.action == action)
        return query.count()
