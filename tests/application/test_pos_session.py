"""Integration tests for the operator POS session."""

import logging
from decimal import Decimal

import pytest

from chakki.application.catalog import ListActiveProductsHandler
from chakki.application.checkout import CheckoutHandler
from chakki.application.pos_session import PosSession
from chakki.domain.exceptions import (
    CheckoutFailed,
    EmptyCart,
    EntityNotFoundError,
    GatewayError,
    InsufficientStock,
)
from chakki.domain.model.sale import Operator
from chakki.domain.model.value_objects import Quantity
from tests.fakes import FakeProductRepository, FakeSalesGateway, default_products, make_product


def _setup(products=None):
    product_repo = FakeProductRepository(products or default_products())
    gateway = FakeSalesGateway(product_repo)
    session = PosSession(
        operator=Operator("op-1", "Ali"),
        catalog=ListActiveProductsHandler(product_repo),
        checkout=CheckoutHandler(gateway),
    )
    return session, gateway, product_repo


class TestSelection:

    def test_add_clears_selection(self):
        session, _, _ = _setup()
        session.select("2")
        session.add_to_cart("3")
        assert session.selected is None
        assert session.cart.get("2").quantity == Quantity(3)

    def test_failed_add_keeps_selection(self):
        session, _, _ = _setup()
        session.select("3")
        with pytest.raises(InsufficientStock):
            session.add_to_cart("16")
        assert session.selected.id == "3"

    def test_add_without_selection_rejected(self):
        session, _, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="No product selected"):
            session.add_to_cart("1")

    def test_inactive_products_are_not_sellable(self):
        hidden = make_product("9", "Old Stock")
        hidden.deactivate()
        session, _, _ = _setup(default_products() + [hidden])
        with pytest.raises(EntityNotFoundError):
            session.select("9")

    def test_find_by_name_is_case_insensitive(self):
        session, _, _ = _setup()
        assert session.find_by_name("besan").id == "2"


class TestSessionCheckout:

    def test_checkout_keeps_last_result_and_refreshes_stock(self):
        session, _, _ = _setup()
        session.add_to_cart("2", product_id="1")
        result = session.checkout()

        assert session.last_result is result
        assert session.cart.is_empty
        assert session.find_product("1").stock == Decimal("93")

    def test_catalog_outage_after_checkout_still_returns_bill(self, monkeypatch, caplog):
        session, gateway, product_repo = _setup()
        session.add_to_cart("2", product_id="1")

        def unreachable():
            raise GatewayError("Could not reach the sales service")

        monkeypatch.setattr(product_repo, "list_all", unreachable)
        with caplog.at_level(logging.WARNING, logger="chakki"):
            result = session.checkout()

        assert session.last_result is result
        assert session.cart.is_empty
        assert len(gateway.sales) == 1
        assert "catalog refresh failed" in caplog.text

    def test_empty_checkout(self):
        session, gateway, _ = _setup()
        with pytest.raises(EmptyCart):
            session.checkout()
        assert gateway.requests == []

    def test_retry_after_network_failure_reuses_key(self):
        session, gateway, _ = _setup()
        session.add_to_cart("2", product_id="1")
        gateway.fail_next = True
        gateway.fail_after_commit = True

        with pytest.raises(CheckoutFailed):
            session.checkout()
        assert len(session.cart) == 1

        session.checkout()
        keys = {r.idempotency_key for r in gateway.requests}
        assert len(gateway.requests) == 2
        assert len(keys) == 1
        assert len(gateway.sales) == 1

    def test_changing_cart_after_failure_uses_new_key(self):
        session, gateway, _ = _setup()
        session.add_to_cart("2", product_id="1")
        gateway.fail_next = True

        with pytest.raises(CheckoutFailed):
            session.checkout()
        session.add_to_cart("1", product_id="2")
        session.checkout()

        assert gateway.requests[0].idempotency_key != gateway.requests[1].idempotency_key

    def test_clear_discards_cart(self):
        session, _, _ = _setup()
        session.add_to_cart("2", product_id="1")
        session.select("2")
        session.clear()
        assert session.cart.is_empty
        assert session.selected is None
