"""Tests for the product catalog repository and endpoints."""

from decimal import Decimal
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.models.product import ProductCategory
from app.repositories.product_repository import ProductRepository
from app.schemas.product import ProductCreate, ProductUpdate
from tests.conftest import DEFAULT_ACTOR

ACTOR_HEADERS = {"X-Actor-Id": DEFAULT_ACTOR}


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


def _product(**overrides):  # type: ignore[no-untyped-def]
    fields = {
        "name": "Pedra São Tomé",
        "description": "Pedra natural antiderrapante para áreas externas",
        "usage": "Bordas de piscina e calçadas",
        "measurements": "40x40 cm",
        "price": Decimal("89.90"),
        "category": ProductCategory.STONES,
        "unit": "m²",
        "tags": ["piscina", "externa"],
    }
    fields.update(overrides)
    return ProductCreate(**fields)


@pytest.fixture
def repo(db_session):
    return ProductRepository(db_session)


@pytest.fixture
def seeded(repo):
    return repo.create_many(
        [
            _product(),
            _product(
                name="Bloquete Intertravado",
                description="Piso de concreto para garagens",
                price=Decimal("54.00"),
                category=ProductCategory.PAVERS,
                tags=[],
            ),
            _product(
                name="Adubo Orgânico",
                description="Saco de 10 kg",
                price=Decimal("32.50"),
                category=ProductCategory.GARDEN_CARE,
                unit="saco",
                tags=[],
            ),
            _product(name="Seixo Branco", description="Pedrisco decorativo", price="45.00"),
        ]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class TestProductRepository:
    def test_create_stores_category_value(self, repo):
        product = repo.create(_product())
        assert product.category == "stones"
        assert product.price == Decimal("89.90")
        assert product.tags == ["piscina", "externa"]
        assert product.created_at is not None

    def test_bulk_create(self, repo, seeded):
        assert len(seeded) == 4
        assert repo.count() == 4

    def test_filter_by_category(self, repo, seeded):
        stones = repo.get_all(category=ProductCategory.STONES)
        assert {p.name for p in stones} == {"Pedra São Tomé", "Seixo Branco"}
        assert repo.count(category=ProductCategory.PAVERS) == 1

    def test_search_matches_name_or_description(self, repo, seeded):
        assert [p.name for p in repo.get_all(search="bloquete")] == ["Bloquete Intertravado"]
        assert [p.name for p in repo.get_all(search="decorativo")] == ["Seixo Branco"]
        assert repo.get_all(search="grama sintética") == []

    def test_get_by_category_is_alphabetical(self, repo, seeded):
        names = [p.name for p in repo.get_by_category(ProductCategory.STONES)]
        assert names == ["Pedra São Tomé", "Seixo Branco"]

    def test_order_by_price(self, repo, seeded):
        prices = [p.price for p in repo.get_all(order_by="price:asc")]
        assert prices == sorted(prices)

    def test_update(self, repo):
        product = repo.create(_product())
        updated = repo.update(product.id, ProductUpdate(price=Decimal("95.00")))
        assert updated.price == Decimal("95.00")
        assert updated.name == "Pedra São Tomé"

    def test_update_not_found(self, repo):
        assert repo.update(uuid4(), ProductUpdate(name="x")) is None

    def test_delete(self, repo):
        product = repo.create(_product())
        assert repo.delete(product.id) is True
        assert repo.get_by_id(product.id) is None
        assert repo.delete(product.id) is False


# ---------------------------------------------------------------------------
# Storefront browsing
# ---------------------------------------------------------------------------


class TestBrowseProducts:
    def test_list_is_public(self, client, seeded):
        response = client.get("/v1/products/")
        assert response.status_code == 200
        assert len(response.json()) == 4
        assert response.headers["X-Total-Count"] == "4"

    def test_list_filters(self, client, seeded):
        response = client.get("/v1/products/", params={"category": "pavers"})
        assert [p["name"] for p in response.json()] == ["Bloquete Intertravado"]

        response = client.get("/v1/products/", params={"search": "saco"})
        assert [p["name"] for p in response.json()] == ["Adubo Orgânico"]
        assert response.headers["X-Total-Count"] == "1"

    def test_unknown_category(self, client):
        assert client.get("/v1/products/", params={"category": "mármore"}).status_code == 422

    def test_categories(self, client):
        response = client.get("/v1/products/categories")
        assert response.status_code == 200
        assert response.json()[0] == {"value": "stones", "label": "Pedras Ornamentais"}
        assert len(response.json()) == len(ProductCategory)

    def test_category_page(self, client, seeded):
        response = client.get("/v1/products/categories/stones")
        assert [p["name"] for p in response.json()] == ["Pedra São Tomé", "Seixo Branco"]

    def test_get(self, client, seeded):
        product = seeded[0]
        response = client.get(f"/v1/products/{product.id}")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Pedra São Tomé"
        assert Decimal(data["price"]) == Decimal("89.90")
        assert data["category"] == "stones"

    def test_get_not_found(self, client):
        response = client.get(f"/v1/products/{uuid4()}")
        assert response.status_code == 404
        assert response.json()["detail"] == "Product not found"


# ---------------------------------------------------------------------------
# Employee management
# ---------------------------------------------------------------------------


class TestManageProducts:
    payload = {
        "name": "Grama Esmeralda",
        "price": "12.90",
        "category": "garden_care",
        "unit": "m²",
    }

    def test_create(self, client):
        response = client.post("/v1/products/", json=self.payload, headers=ACTOR_HEADERS)
        assert response.status_code == 201
        data = response.json()
        assert data["category"] == "garden_care"
        assert data["tags"] == []

    def test_create_requires_actor(self, client):
        response = client.post("/v1/products/", json=self.payload)
        assert response.status_code == 401
        assert response.json()["detail"] == "X-Actor-Id header is required"

    def test_create_rejects_negative_price(self, client):
        payload = {**self.payload, "price": "-1.00"}
        response = client.post("/v1/products/", json=payload, headers=ACTOR_HEADERS)
        assert response.status_code == 422

    def test_bulk_create(self, client):
        items = [self.payload, {**self.payload, "name": "Grama São Carlos"}]
        response = client.post("/v1/products/bulk", json={"items": items}, headers=ACTOR_HEADERS)
        assert response.status_code == 201
        assert [p["name"] for p in response.json()] == ["Grama Esmeralda", "Grama São Carlos"]

    def test_bulk_create_rejects_empty_batch(self, client):
        response = client.post("/v1/products/bulk", json={"items": []}, headers=ACTOR_HEADERS)
        assert response.status_code == 422

    def test_update(self, client, seeded):
        product = seeded[0]
        response = client.put(
            f"/v1/products/{product.id}", json={"price": "99.00"}, headers=ACTOR_HEADERS
        )
        assert response.status_code == 200
        assert Decimal(response.json()["price"]) == Decimal("99.00")

    def test_update_requires_actor(self, client, seeded):
        response = client.put(f"/v1/products/{seeded[0].id}", json={"price": "99.00"})
        assert response.status_code == 401

    def test_delete(self, client, seeded):
        product = seeded[0]
        assert client.delete(f"/v1/products/{product.id}", headers=ACTOR_HEADERS).status_code == 204
        assert client.get(f"/v1/products/{product.id}").status_code == 404

    def test_delete_not_found(self, client):
        response = client.delete(f"/v1/products/{uuid4()}", headers=ACTOR_HEADERS)
        assert response.status_code == 404
