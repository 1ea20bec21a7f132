"""Tests for audit log API endpoints."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.services.audit_service import AuditService
from tests.conftest import DEFAULT_ACTOR

ACTOR_HEADERS = {"X-Actor-Id": DEFAULT_ACTOR}


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def seed_audit_logs(db_session):
    service = AuditService(db_session)
    order_id, budget_id = uuid4(), uuid4()
    service.log_status_change("orders", order_id, "pending", "confirmed", "emp-1")
    service.log_status_change("orders", order_id, "confirmed", "processing", "emp-2")
    service.log_status_change("budgets", budget_id, "sent", "accepted", "emp-1")
    service.log_conversion(budget_id, uuid4(), "emp-1")
    return {"order_id": order_id, "budget_id": budget_id}


class TestAuditLogAPI:
    def test_list_audit_logs(self, client, seed_audit_logs):
        response = client.get("/v1/audit_logs/", headers=ACTOR_HEADERS)
        assert response.status_code == 200
        assert len(response.json()) == 4
        assert response.headers["X-Total-Count"] == "4"

    def test_requires_actor(self, client, seed_audit_logs):
        assert client.get("/v1/audit_logs/").status_code == 401
        trail = client.get(f"/v1/audit_logs/orders/{seed_audit_logs['order_id']}")
        assert trail.status_code == 401

    def test_list_audit_logs_empty(self, client):
        response = client.get("/v1/audit_logs/", headers=ACTOR_HEADERS)
        assert response.status_code == 200
        assert response.json() == []

    def test_filter_by_table(self, client, seed_audit_logs):
        response = client.get(
            "/v1/audit_logs/", params={"table_name": "orders"}, headers=ACTOR_HEADERS
        )
        assert len(response.json()) == 2
        assert all(entry["table_name"] == "orders" for entry in response.json())

    def test_filter_by_action(self, client, seed_audit_logs):
        response = client.get(
            "/v1/audit_logs/", params={"action": "CONVERSION"}, headers=ACTOR_HEADERS
        )
        data = response.json()
        assert len(data) == 1
        assert data[0]["table_name"] == "budgets_to_orders"
        assert response.headers["X-Total-Count"] == "1"

    def test_filter_by_record(self, client, seed_audit_logs):
        response = client.get(
            "/v1/audit_logs/",
            params={"record_id": str(seed_audit_logs["budget_id"])},
            headers=ACTOR_HEADERS,
        )
        assert len(response.json()) == 2

    def test_pagination(self, client, seed_audit_logs):
        response = client.get(
            "/v1/audit_logs/", params={"skip": 1, "limit": 2}, headers=ACTOR_HEADERS
        )
        assert len(response.json()) == 2
        assert response.headers["X-Total-Count"] == "4"

    def test_record_trail_is_chronological(self, client, seed_audit_logs):
        response = client.get(
            f"/v1/audit_logs/orders/{seed_audit_logs['order_id']}", headers=ACTOR_HEADERS
        )
        assert response.status_code == 200
        data = response.json()
        assert [entry["new_data"]["status"] for entry in data] == ["confirmed", "processing"]
        assert [entry["changed_by"] for entry in data] == ["emp-1", "emp-2"]

    def test_record_trail_empty(self, client):
        response = client.get(f"/v1/audit_logs/orders/{uuid4()}", headers=ACTOR_HEADERS)
        assert response.status_code == 200
        assert response.json() == []

    def test_response_format(self, client, seed_audit_logs):
        entry = client.get(
            f"/v1/audit_logs/budgets/{seed_audit_logs['budget_id']}", headers=ACTOR_HEADERS
        ).json()[0]
        assert set(entry) == {
            "id",
            "table_name",
            "record_id",
            "action",
            "old_data",
            "new_data",
            "changed_by",
            "created_at",
        }
        assert entry["action"] == "UPDATE"
        assert entry["old_data"] == {"status": "sent"}
