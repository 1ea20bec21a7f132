"""Tests for CartService persistence and the abandoned cart sweep."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from app.models.cart import Cart, CartStatus
from app.schemas.line_item import LineItem
from app.services.cart_service import CartService
from app.services.email_service import EmailService
from tests.conftest import make_item


@pytest.fixture
def email_service():
    service = AsyncMock(spec=EmailService)
    service.send_abandoned_cart_email.return_value = True
    return service


@pytest.fixture
def service(db_session, email_service):
    return CartService(db_session, email_service=email_service)


def _idle_for(db_session, cart, hours):  # type: ignore[no-untyped-def]
    cart.updated_at = datetime.now(UTC) - timedelta(hours=hours)
    db_session.commit()


class TestSaveAndLoad:
    def test_load_without_cart(self, service, customer_id):
        assert service.load_cart(customer_id) is None

    def test_save_then_load(self, service, customer_id):
        service.save_cart(customer_id, [LineItem(**make_item())])
        items = service.load_cart(customer_id)
        assert len(items) == 1
        assert items[0]["name"] == "Vaso de cerâmica"
        assert items[0]["price"] == "45.00"

    def test_save_replaces_items_of_active_cart(self, service, db_session, customer_id):
        service.save_cart(customer_id, [LineItem(**make_item())])
        service.save_cart(customer_id, [LineItem(**make_item(name="Regador", price="30.00"))])

        assert db_session.query(Cart).count() == 1
        assert [i["name"] for i in service.load_cart(customer_id)] == ["Regador"]

    def test_extra_product_attributes_are_kept(self, service, customer_id):
        service.save_cart(customer_id, [LineItem(**make_item(image_url="https://cdn/vaso.png"))])
        assert service.load_cart(customer_id)[0]["image_url"] == "https://cdn/vaso.png"

    def test_clear_cart(self, service, customer_id):
        service.save_cart(customer_id, [LineItem(**make_item())])
        cart = service.clear_cart(customer_id)

        assert cart.status == CartStatus.COMPLETED.value
        assert service.load_cart(customer_id) is None

    def test_clear_without_cart(self, service, customer_id):
        assert service.clear_cart(customer_id) is None

    def test_new_cart_after_clearing(self, service, db_session, customer_id):
        service.save_cart(customer_id, [LineItem(**make_item())])
        service.clear_cart(customer_id)
        service.save_cart(customer_id, [LineItem(**make_item())])
        assert db_session.query(Cart).count() == 2
        assert len(service.load_cart(customer_id)) == 1


class TestAbandonedCarts:
    @pytest.mark.asyncio
    async def test_mark_and_notify(self, service, email_service, customer_id):
        cart = service.save_cart(customer_id, [LineItem(**make_item())])

        assert await service.mark_and_notify_abandoned_cart(customer_id) is True
        assert cart.status == CartStatus.ABANDONED.value
        customer, items = email_service.send_abandoned_cart_email.await_args.args
        assert customer.id == customer_id
        assert items[0]["name"] == "Vaso de cerâmica"

    @pytest.mark.asyncio
    async def test_mark_without_cart(self, service, customer_id):
        assert await service.mark_and_notify_abandoned_cart(customer_id) is False

    @pytest.mark.asyncio
    async def test_empty_cart_is_abandoned_without_email(
        self, service, email_service, customer_id
    ):
        cart = service.save_cart(customer_id, [])
        assert await service.mark_and_notify_abandoned_cart(customer_id) is False
        assert cart.status == CartStatus.ABANDONED.value
        email_service.send_abandoned_cart_email.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_sweep_notifies_carts_in_window(
        self, service, email_service, db_session, customer_id
    ):
        cart = service.save_cart(customer_id, [LineItem(**make_item())])
        _idle_for(db_session, cart, 30)

        assert await service.process_abandoned_carts() == 1
        db_session.refresh(cart)
        assert cart.status == CartStatus.ABANDONED.value

        # Abandoned carts are not notified twice
        assert await service.process_abandoned_carts() == 0
        email_service.send_abandoned_cart_email.assert_awaited_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("hours", [2, 72])
    async def test_sweep_skips_carts_outside_window(
        self, service, email_service, db_session, customer_id, hours
    ):
        cart = service.save_cart(customer_id, [LineItem(**make_item())])
        _idle_for(db_session, cart, hours)

        assert await service.process_abandoned_carts() == 0
        db_session.refresh(cart)
        assert cart.status == CartStatus.ACTIVE.value
        email_service.send_abandoned_cart_email.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_email_failure_still_abandons(
        self, service, email_service, db_session, customer_id
    ):
        email_service.send_abandoned_cart_email.side_effect = ConnectionError("smtp down")
        cart = service.save_cart(customer_id, [LineItem(**make_item())])
        _idle_for(db_session, cart, 30)

        assert await service.process_abandoned_carts() == 0
        db_session.refresh(cart)
        assert cart.status == CartStatus.ABANDONED.value
