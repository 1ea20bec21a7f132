"""Tests for AuditLogRepository and AuditService."""

from unittest.mock import patch
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from app.models.audit_log import AuditAction
from app.repositories.audit_log_repository import AuditLogRepository
from app.schemas.audit_log import AuditLogResponse
from app.services.audit_service import (
    BUDGETS_TABLE,
    CONVERSIONS_TABLE,
    ORDERS_TABLE,
    AuditService,
)


@pytest.fixture
def repo(db_session):
    return AuditLogRepository(db_session)


@pytest.fixture
def service(db_session):
    return AuditService(db_session)


# ---------------------------------------------------------------------------
# Repository tests
# ---------------------------------------------------------------------------


class TestAuditLogRepository:
    def test_create(self, repo):
        record_id = uuid4()
        log = repo.create(
            table_name=ORDERS_TABLE,
            record_id=record_id,
            action=AuditAction.UPDATE,
            old_data={"status": "pending"},
            new_data={"status": "confirmed"},
            changed_by="employee-1",
        )
        assert log.id is not None
        assert log.table_name == "orders"
        assert log.record_id == record_id
        assert log.action == "UPDATE"
        assert log.old_data == {"status": "pending"}
        assert log.new_data == {"status": "confirmed"}
        assert log.changed_by == "employee-1"
        assert log.created_at is not None

    def test_get_by_record_is_chronological(self, repo):
        record_id = uuid4()
        for old, new in [("pending", "confirmed"), ("confirmed", "processing")]:
            repo.create(
                table_name=ORDERS_TABLE,
                record_id=record_id,
                action=AuditAction.UPDATE,
                old_data={"status": old},
                new_data={"status": new},
                changed_by="employee-1",
            )
        repo.create(
            table_name=BUDGETS_TABLE,
            record_id=record_id,
            action=AuditAction.UPDATE,
            old_data={"status": "draft"},
            new_data={"status": "sent"},
            changed_by="employee-1",
        )

        trail = repo.get_by_record(ORDERS_TABLE, record_id)
        assert [entry.new_data["status"] for entry in trail] == ["confirmed", "processing"]

    def test_get_all_filters(self, repo):
        first, second = uuid4(), uuid4()
        for record_id in (first, second):
            repo.create(
                table_name=ORDERS_TABLE,
                record_id=record_id,
                action=AuditAction.UPDATE,
                old_data={},
                new_data={},
                changed_by="x",
            )
        repo.create(
            table_name=CONVERSIONS_TABLE,
            record_id=first,
            action=AuditAction.CONVERSION,
            old_data={},
            new_data={},
            changed_by="x",
        )

        assert len(repo.get_all()) == 3
        assert len(repo.get_all(table_name=ORDERS_TABLE)) == 2
        assert len(repo.get_all(record_id=first)) == 2
        assert len(repo.get_all(action="CONVERSION")) == 1
        assert repo.count(table_name=ORDERS_TABLE, record_id=second) == 1


# ---------------------------------------------------------------------------
# Service tests
# ---------------------------------------------------------------------------


class TestAuditService:
    def test_log_status_change_records_only_status(self, service):
        record_id = uuid4()
        log = service.log_status_change(BUDGETS_TABLE, record_id, "sent", "accepted", "emp-7")
        assert log.table_name == "budgets"
        assert log.action == "UPDATE"
        assert log.old_data == {"status": "sent"}
        assert log.new_data == {"status": "accepted"}
        assert log.changed_by == "emp-7"

    def test_log_conversion(self, service):
        budget_id, order_id = uuid4(), uuid4()
        log = service.log_conversion(budget_id, order_id, "emp-7")
        assert log.table_name == "budgets_to_orders"
        assert log.record_id == budget_id
        assert log.action == "CONVERSION"
        assert log.old_data == {"budget_id": str(budget_id)}
        assert log.new_data == {"order_id": str(order_id)}

    def test_database_error_rolls_back_and_raises(self, service, db_session):
        error = OperationalError("INSERT", {}, Exception("locked"))
        with (
            patch.object(service.repo, "create", side_effect=error),
            patch.object(db_session, "rollback") as rollback,
            pytest.raises(OperationalError),
        ):
            service.log_status_change(ORDERS_TABLE, uuid4(), "pending", "confirmed", "x")
        rollback.assert_called_once()

    def test_response_schema(self, service):
        log = service.log_status_change(ORDERS_TABLE, uuid4(), "ready", "shipped", "emp-1")
        response = AuditLogResponse.model_validate(log)
        assert response.id == log.id
        assert response.new_data == {"status": "shipped"}
