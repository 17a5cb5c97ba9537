"""Tests for the JSON-file product repository and sales service."""

import json
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from chakki.domain.exceptions import CheckoutFailed, EntityNotFoundError, InsufficientStock
from chakki.domain.model.sale import CheckoutLine, CheckoutRequest, Operator
from chakki.domain.model.value_objects import Money, Quantity
from chakki.domain.repository.sales_gateway import SalesFilter
from chakki.infrastructure.persistence.json_product_repository import JsonProductRepository
from chakki.infrastructure.persistence.json_sales_service import JsonSalesService
from tests.fakes import default_products

NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def products(tmp_path):
    repo = JsonProductRepository(tmp_path / "products.json")
    for product in default_products():
        repo.save(product)
    return repo


@pytest.fixture
def sales(tmp_path, products):
    return JsonSalesService(tmp_path / "sales.json", products)


def _request(*lines, key="key-1"):
    return CheckoutRequest(
        items=tuple(
            CheckoutLine(pid, Quantity.parse(qty), Money.of(total)) for pid, qty, total in lines
        ),
        operator=Operator("op-1", "Ali"),
        date=NOW,
        idempotency_key=key,
    )


class TestJsonProductRepository:

    def test_round_trips_decimals(self, products):
        products.save(default_products()[0])
        atta = products.get_by_id("1")
        assert atta.price == Money.of("42")
        assert atta.stock == Decimal("95")
        assert atta.unit == "Kg"

    def test_new_product_gets_next_id(self, products):
        new = default_products()[1]
        new.id = ""
        new.name = "Maida"
        assert products.save(new).id == "4"

    def test_delete(self, products):
        products.delete("2")
        assert products.get_by_id("2") is None
        with pytest.raises(EntityNotFoundError):
            products.delete("2")

    def test_writes_utf8_json(self, tmp_path, products):
        raw = json.loads((tmp_path / "products.json").read_text(encoding="utf-8"))
        assert raw[0]["price"] == "42"
        assert raw[0]["status"] == "active"


class TestJsonSalesServiceCheckout:

    def test_checkout_writes_rows_and_decrements_stock(self, sales, products):
        result = sales.checkout(_request(("1", "2", "84"), ("2", "1", "80")))

        assert len(result.items) == 2
        assert {s.bill_id for s in result.items} == {result.bill_id}
        assert [s.product_name for s in result.items] == ["Sharbati Wheat Atta", "Besan"]
        assert products.get_by_id("1").stock == Decimal("93")
        assert products.get_by_id("2").stock == Decimal("39")
        assert len(sales.list_sales()) == 2

    def test_insufficient_stock_writes_nothing(self, sales, products):
        with pytest.raises(InsufficientStock, match="Turmeric Powder"):
            sales.checkout(_request(("1", "2", "84"), ("3", "20", "6200")))

        assert sales.list_sales() == []
        assert products.get_by_id("1").stock == Decimal("95")

    def test_failed_sales_write_restores_stock(self, sales, products, monkeypatch):
        def disk_full(data):
            raise OSError("disk full")

        monkeypatch.setattr(sales, "_persist_raw", disk_full)
        with pytest.raises(CheckoutFailed, match="disk full"):
            sales.checkout(_request(("1", "2", "84"), ("2", "1", "80")))

        assert products.get_by_id("1").stock == Decimal("95")
        assert products.get_by_id("2").stock == Decimal("40")
        assert sales.list_sales() == []

    def test_failed_stock_write_restores_earlier_lines(self, sales, products, monkeypatch):
        real_save = products.save
        failures = []

        def flaky_save(product):
            if product.id == "2" and not failures:
                failures.append(product.id)
                raise OSError("read-only file system")
            return real_save(product)

        monkeypatch.setattr(products, "save", flaky_save)
        with pytest.raises(CheckoutFailed):
            sales.checkout(_request(("1", "2", "84"), ("2", "1", "80")))

        assert products.get_by_id("1").stock == Decimal("95")
        assert products.get_by_id("2").stock == Decimal("40")
        assert sales.list_sales() == []

    def test_replayed_key_returns_original_bill(self, sales, products):
        first = sales.checkout(_request(("1", "2", "84")))
        second = sales.checkout(_request(("1", "2", "84")))

        assert second.bill_id == first.bill_id
        assert len(sales.list_sales()) == 1
        assert products.get_by_id("1").stock == Decimal("93")

    def test_submitted_total_is_kept(self, sales):
        result = sales.checkout(_request(("1", "2", "80")))
        assert result.items[0].total == Money.of("80")

    def test_survives_reload(self, tmp_path, sales, products):
        result = sales.checkout(_request(("1", "2", "84")))
        reopened = JsonSalesService(tmp_path / "sales.json", products)
        assert reopened.get_bill(result.bill_id).items[0].quantity == Quantity(2)
        assert reopened.get_bill(result.bill_id).date == NOW


class TestJsonSalesServiceQueries:

    def test_filter_by_operator(self, sales):
        sales.checkout(_request(("1", "1", "42")))
        assert sales.list_sales(SalesFilter(operator_id="op-1"))
        assert sales.list_sales(SalesFilter(operator_id="op-2")) == []

    def test_unknown_bill(self, sales):
        with pytest.raises(EntityNotFoundError):
            sales.get_bill("missing")

    def test_delete_sale(self, sales):
        result = sales.checkout(_request(("1", "1", "42"), ("2", "1", "80")))
        sales.delete_sale(result.items[0].id)
        assert [s.id for s in sales.get_bill(result.bill_id).items] == [result.items[1].id]
        with pytest.raises(EntityNotFoundError):
            sales.delete_sale(result.items[0].id)

    def test_reads_legacy_list_file(self, tmp_path, products):
        legacy = [
            {
                "id": "old-1",
                "product_id": "1",
                "product_name": "Sharbati Wheat Atta",
                "quantity": "3",
                "total": "126",
                "operator_id": "op-1",
                "operator_name": "Ali",
                "date": "2025-01-05T10:00:00",
                "bill_id": None,
            }
        ]
        path = tmp_path / "legacy.json"
        path.write_text(json.dumps(legacy), encoding="utf-8")
        service = JsonSalesService(path, products)

        sale = service.get_sale("old-1")
        assert sale.bill_id is None
        assert sale.bill_key.value == "old-1"
        assert sale.date.tzinfo is not None
