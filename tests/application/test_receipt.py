"""Tests for receipt rendering."""

from datetime import datetime, timezone

from chakki.application.receipt import (
    PAPER_58MM,
    ReceiptHeader,
    format_receipt_text,
    render_receipt,
)
from chakki.domain.model.sale import Bill, Grouped, Ungrouped
from tests.fakes import default_products, make_sale

WHEN = datetime(2026, 10, 17, 12, 30, tzinfo=timezone.utc)


def _bill() -> Bill:
    return Bill(
        key=Grouped("7f3c9a10-aaaa-bbbb-cccc-000000000001"),
        items=(
            make_sale("s1", "B1", "1", "Sharbati Wheat Atta", "2", "84", date=WHEN),
            make_sale("s2", "B1", "2", "Besan", "1", "80", date=WHEN),
        ),
    )


class TestRenderReceipt:

    def test_one_row_per_line_item(self):
        receipt = render_receipt(_bill(), default_products())
        assert [line.name for line in receipt.lines] == ["Sharbati Wheat Atta", "Besan"]
        assert [line.quantity for line in receipt.lines] == ["2 Kg", "1 Kg"]

    def test_rate_line_uses_catalog_price(self):
        receipt = render_receipt(_bill(), default_products())
        assert receipt.lines[0].rate == "₨42 x 2 = ₨84"
        assert receipt.lines[1].rate == "₨80 x 1 = ₨80"

    def test_grand_total(self):
        receipt = render_receipt(_bill(), default_products())
        assert receipt.grand_total == "₨164"

    def test_header_and_metadata(self):
        header = ReceiptHeader("Punjab Atta Chakki", "Mall Road, Lahore", "+92-300-0000000")
        receipt = render_receipt(_bill(), default_products(), header)
        assert receipt.header.address == "Mall Road, Lahore"
        assert receipt.operator_name == "Ali"
        assert receipt.date == "2026-10-17 12:30"

    def test_deleted_product_renders_blank_unit(self):
        products = [p for p in default_products() if p.id != "2"]
        receipt = render_receipt(_bill(), products)

        besan = receipt.lines[1]
        assert besan.unit == ""
        assert besan.quantity == "1"
        assert besan.rate is None
        assert len(receipt.lines) == 2
        assert receipt.grand_total == "₨164"

    def test_empty_catalog_still_renders(self):
        receipt = render_receipt(_bill(), [])
        assert len(receipt.lines) == 2
        assert receipt.grand_total == "₨164"

    def test_ungrouped_sale(self):
        bill = Bill(key=Ungrouped("legacy-1"), items=(make_sale("legacy-1", date=WHEN),))
        receipt = render_receipt(bill, default_products())
        assert receipt.bill_ref == "legacy-1"
        assert receipt.grand_total == "₨42"


class TestFormatReceiptText:

    def test_fits_58mm_paper(self):
        text = format_receipt_text(render_receipt(_bill(), default_products()))
        assert all(len(line) <= PAPER_58MM for line in text.splitlines())

    def test_contains_items_total_and_footer(self):
        text = format_receipt_text(render_receipt(_bill(), default_products()))
        assert "Punjab Atta Chakki" in text
        assert "Rate: ₨42 x 2 = ₨84" in text
        assert "₨164" in text
        assert "Thank You" in text

    def test_long_names_are_truncated(self):
        bill = Bill(
            key=Grouped("B9"),
            items=(make_sale("s1", "B9", product_name="Extra Fine Chakki Fresh Wheat Flour Premium", date=WHEN),),
        )
        text = format_receipt_text(render_receipt(bill, default_products()))
        item_line = next(line for line in text.splitlines() if line.startswith("Extra"))
        assert len(item_line) == PAPER_58MM
        assert item_line.endswith("1 Kg")

    def test_total_wider_than_paper_does_not_crash(self):
        bill = Bill(
            key=Grouped("B9"),
            items=(make_sale("s1", "B9", "1", "Sharbati Wheat Atta", "30000", "1260000", date=WHEN),),
        )
        text = format_receipt_text(render_receipt(bill, default_products()), width=10)
        assert "₨1,260,000" in text

    def test_missing_product_prints_amount_instead_of_rate(self):
        text = format_receipt_text(render_receipt(_bill(), []))
        assert "Amount: ₨80" in text
