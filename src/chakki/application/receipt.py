"""Receipt rendering for thermal printers.

``render_receipt`` maps one bill to a printable payload;
``format_receipt_text`` lays that payload out as fixed-width text.  A
58mm roll fits 32 characters per line, an 80mm roll 48.

Unit prices are looked up from the catalog rather than stored on the
sale.  A product deleted after the sale still prints: its unit is left
blank and the rate line is omitted.
"""

from __future__ import annotations

import logging
import textwrap
from dataclasses import dataclass, field

from chakki.application.dto import DATE_FORMAT
from chakki.domain.exceptions import ProductLookupMissing
from chakki.domain.model.product import Product
from chakki.domain.model.sale import Bill

logger = logging.getLogger(__name__)

PAPER_58MM = 32
PAPER_80MM = 48


@dataclass(frozen=True)
class ReceiptHeader:
    business_name: str = "Punjab Atta Chakki"
    address: str = "Main Street, Punjab"
    phone: str = "+92-XXXXXXXXX"


@dataclass(frozen=True)
class ReceiptLine:
    name: str
    quantity: str  # with unit suffix, e.g. "2 Kg"
    unit: str
    line_total: str
    rate: str | None  # "₨42 x 2 = ₨84", None when the product is gone


@dataclass(frozen=True)
class Receipt:
    header: ReceiptHeader
    bill_ref: str
    lines: list[ReceiptLine]
    grand_total: str
    operator_name: str
    date: str
    title: str = "Sale Receipt"
    footer: list[str] = field(
        default_factory=lambda: ["Thank You", "Powered by Punjab Atta Chakki POS"]
    )


def _lookup(products: dict[str, Product], product_id: str) -> Product:
    product = products.get(product_id)
    if product is None:
        raise ProductLookupMissing(f"Product with ID '{product_id}' not found")
    return product


def render_receipt(
    bill: Bill,
    products: list[Product],
    header: ReceiptHeader | None = None,
    symbol: str | None = None,
) -> Receipt:
    """Build the receipt payload for *bill* using the catalog *products*."""
    catalog = {p.id: p for p in products}
    lines: list[ReceiptLine] = []

    for sale in bill.items:
        try:
            product = _lookup(catalog, sale.product_id)
        except ProductLookupMissing:
            logger.warning(
                "Product %s (%s) missing from catalog; printing without unit",
                sale.product_id,
                sale.product_name,
            )
            unit = ""
            rate = None
        else:
            unit = product.unit
            rate = (
                f"{product.price.format(symbol)} x {sale.quantity} = "
                f"{sale.total.format(symbol)}"
            )

        qty = f"{sale.quantity} {unit}".rstrip()
        lines.append(
            ReceiptLine(
                name=sale.product_name,
                quantity=qty,
                unit=unit,
                line_total=sale.total.format(symbol),
                rate=rate,
            )
        )

    return Receipt(
        header=header or ReceiptHeader(),
        bill_ref=bill.key.value,
        lines=lines,
        grand_total=bill.total_amount.format(symbol),
        operator_name=bill.operator_name,
        date=bill.date.astimezone().strftime(DATE_FORMAT),
    )


# ---------------------------------------------------------------------------
# Plain-text layout
# ---------------------------------------------------------------------------


def _two_columns(left: str, right: str, width: int) -> str:
    room = max(width - len(right) - 1, 0)
    if len(left) > room:
        left = left[: max(room - 1, 0)] + "…" if room > 1 else ""
    return f"{left:<{room}} {right}"


def _centered(text: str, width: int) -> list[str]:
    return [chunk.center(width).rstrip() for chunk in textwrap.wrap(text, width) or [""]]


def format_receipt_text(receipt: Receipt, width: int = PAPER_58MM) -> str:
    rule = "-" * width
    out = [
        *_centered(receipt.header.business_name, width),
        *_centered(receipt.header.address, width),
        *_centered(f"Mob: {receipt.header.phone}", width),
        rule,
        *_centered(receipt.title, width),
        _two_columns("Bill", receipt.bill_ref[:8], width),
        _two_columns("Item", "Qty", width),
    ]
    for line in receipt.lines:
        out.append(_two_columns(line.name, line.quantity, width))
        if line.rate is not None:
            out.extend(textwrap.wrap(f"Rate: {line.rate}", width, initial_indent="  ", subsequent_indent="    "))
        else:
            out.append(f"  Amount: {line.line_total}")
    out.extend(
        [
            rule,
            _two_columns("Total", receipt.grand_total, width),
            f"Date: {receipt.date}",
            f"Operator: {receipt.operator_name}",
            "",
        ]
    )
    for text in receipt.footer:
        out.extend(_centered(text, width))
    return "\n".join(out) + "\n"
