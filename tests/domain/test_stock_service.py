"""Unit tests for the two-phase stock deduction service."""

from decimal import Decimal

import pytest

from chakki.domain.exceptions import EntityNotFoundError, InsufficientStock
from chakki.domain.model.sale import CheckoutLine
from chakki.domain.model.value_objects import Money, Quantity
from chakki.domain.service.stock_service import StockService
from tests.fakes import FakeProductRepository, default_products


def _line(product_id: str, qty: str, total: str = "1") -> CheckoutLine:
    return CheckoutLine(product_id, Quantity.parse(qty), Money.of(total))


def _setup():
    repo = FakeProductRepository(default_products())
    return StockService(repo), repo


class TestDeduct:

    def test_deducts_every_line(self):
        svc, repo = _setup()
        svc.deduct_for_lines((_line("1", "2"), _line("2", "1.5")))
        assert repo.get_by_id("1").stock == Decimal("93")
        assert repo.get_by_id("2").stock == Decimal("38.5")

    def test_failing_line_leaves_all_stock_untouched(self):
        svc, repo = _setup()
        with pytest.raises(InsufficientStock, match="Turmeric Powder"):
            svc.deduct_for_lines((_line("1", "2"), _line("3", "16")))
        assert repo.get_by_id("1").stock == Decimal("95")
        assert repo.get_by_id("3").stock == Decimal("15")

    def test_split_lines_for_one_product_are_summed(self):
        svc, repo = _setup()
        with pytest.raises(InsufficientStock):
            svc.deduct_for_lines((_line("3", "10"), _line("3", "6")))
        assert repo.get_by_id("3").stock == Decimal("15")

    def test_unknown_product_rejected(self):
        svc, repo = _setup()
        with pytest.raises(EntityNotFoundError):
            svc.deduct_for_lines((_line("1", "1"), _line("99", "1")))
        assert repo.get_by_id("1").stock == Decimal("95")
