"""Sale line items and the bills they form.

A Sale is one persisted record of one product sold in one bill.  Sales
created by a single checkout share a ``bill_id``; legacy single-item
sales may have none, in which case each one is its own bill.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from chakki.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class Operator:
    """The already-authenticated identity recording a sale."""

    id: str
    name: str


@dataclass(frozen=True)
class Sale:
    """Immutable line item.

    ``total`` is supplied by whoever created the sale; it is not
    recomputed from the product price.
    """

    id: str
    product_id: str
    product_name: str
    quantity: Quantity
    total: Money
    operator_id: str
    operator_name: str
    date: datetime
    bill_id: str | None = None

    @property
    def bill_key(self) -> BillKey:
        if self.bill_id:
            return Grouped(self.bill_id)
        return Ungrouped(self.id)


# ---------------------------------------------------------------------------
# Bill keys
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Grouped:
    """Sales that share a bill identifier issued at checkout."""

    bill_id: str

    @property
    def value(self) -> str:
        return self.bill_id


@dataclass(frozen=True)
class Ungrouped:
    """A legacy sale without a bill identifier; a bill of one."""

    sale_id: str

    @property
    def value(self) -> str:
        return self.sale_id


BillKey = Grouped | Ungrouped


@dataclass(frozen=True)
class Bill:
    """One checkout transaction, derived from its Sale rows on read."""

    key: BillKey
    items: tuple[Sale, ...]

    @property
    def date(self) -> datetime:
        return self.items[0].date

    @property
    def operator_name(self) -> str:
        return self.items[0].operator_name

    @property
    def total_amount(self) -> Money:
        result = self.items[0].total
        for sale in self.items[1:]:
            result = result + sale.total
        return result

    @property
    def total_quantity(self) -> Quantity:
        result = self.items[0].quantity
        for sale in self.items[1:]:
            result = result + sale.quantity
        return result

    @property
    def descriptions(self) -> list[str]:
        return [f"{sale.product_name} ({sale.quantity})" for sale in self.items]


@dataclass(frozen=True)
class CheckoutLine:
    product_id: str
    quantity: Quantity
    total: Money


@dataclass(frozen=True)
class CheckoutRequest:
    """Everything the sales service needs to record one bill."""

    items: tuple[CheckoutLine, ...]
    operator: Operator
    date: datetime
    idempotency_key: str


@dataclass(frozen=True)
class CheckoutResult:
    """What the sales service hands back after recording a bill."""

    bill_id: str
    items: tuple[Sale, ...]
    operator_name: str
    date: datetime

    @property
    def bill(self) -> Bill:
        return Bill(key=Grouped(self.bill_id), items=self.items)

    @property
    def total_amount(self) -> Money:
        return self.bill.total_amount

    @property
    def total_quantity(self) -> Quantity:
        return self.bill.total_quantity
