"""Abstract gateway to the sales service.

The sales service is the sole arbiter of stock: ``checkout`` must insert
every line item and decrement every product's stock as one all-or-nothing
operation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date

from chakki.domain.model.sale import CheckoutRequest, CheckoutResult, Sale


@dataclass(frozen=True)
class SalesFilter:
    operator_id: str | None = None
    product_id: str | None = None
    bill_id: str | None = None
    start_date: date | None = None  # inclusive, local calendar day
    end_date: date | None = None  # inclusive, local calendar day

    def matches(self, sale: Sale) -> bool:
        if self.operator_id is not None and sale.operator_id != self.operator_id:
            return False
        if self.product_id is not None and sale.product_id != self.product_id:
            return False
        if self.bill_id is not None and sale.bill_id != self.bill_id:
            return False
        day = sale.date.astimezone().date()
        if self.start_date is not None and day < self.start_date:
            return False
        if self.end_date is not None and day > self.end_date:
            return False
        return True


class SalesGateway(ABC):

    @abstractmethod
    def checkout(self, request: CheckoutRequest) -> CheckoutResult:
        """Atomically record every line of *request* under one new bill id.

        Raises InsufficientStock (and writes nothing) if any line exceeds
        the product's current stock.  Submitting a request whose
        ``idempotency_key`` was already processed returns the original
        result instead of recording a second bill.
        """

    @abstractmethod
    def list_sales(self, sales_filter: SalesFilter | None = None) -> list[Sale]:
        """Return sales matching the filter, newest first."""

    @abstractmethod
    def get_sale(self, sale_id: str) -> Sale | None:
        """Return one sale by ID, or None."""

    @abstractmethod
    def get_bill(self, bill_id: str) -> CheckoutResult:
        """Return every line item of a bill. Raises EntityNotFoundError."""

    @abstractmethod
    def delete_sale(self, sale_id: str) -> None:
        """Hard-remove a sale. Raises EntityNotFoundError if absent."""
