"""Unit tests for the Product aggregate."""

from decimal import Decimal

import pytest

from chakki.domain.exceptions import InsufficientStock, ValidationError
from chakki.domain.model.product import ProductStatus
from chakki.domain.model.value_objects import Money, Quantity
from tests.fakes import make_product


class TestStock:

    def test_deduct_stock(self):
        product = make_product(stock="95")
        product.deduct_stock(Quantity(Decimal("2.5")))
        assert product.stock == Decimal("92.5")

    def test_deduct_entire_stock(self):
        product = make_product(stock="5")
        product.deduct_stock(Quantity(5))
        assert product.stock == Decimal("0")

    def test_deduct_more_than_stock_rejected(self):
        product = make_product(name="Besan", stock="4")
        with pytest.raises(InsufficientStock, match="Insufficient stock for Besan") as info:
            product.deduct_stock(Quantity(5))
        assert info.value.requested == Decimal("5")
        assert info.value.available == Decimal("4")
        assert product.stock == Decimal("4")

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            make_product().set_stock(Decimal("-1"))


class TestLowStock:

    def test_at_threshold_is_low(self):
        assert make_product(stock="10", threshold="10").is_low_stock

    def test_above_threshold_is_not_low(self):
        assert not make_product(stock="11", threshold="10").is_low_stock


class TestPriceAndStatus:

    def test_update_price(self):
        product = make_product(price="42")
        product.update_price(Money.of("45"))
        assert product.price == Money.of("45")

    def test_zero_price_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            make_product().update_price(Money.of("0"))

    def test_deactivate(self):
        product = make_product()
        product.deactivate()
        assert product.status == ProductStatus.INACTIVE
        assert not product.is_active
