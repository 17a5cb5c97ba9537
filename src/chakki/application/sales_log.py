"""Application services: Sales log and bill reprint (queries)."""

from __future__ import annotations

from datetime import date

from chakki.application.dto import BillDTO
from chakki.application.mapping import bill_to_dto
from chakki.application.receipt import Receipt, ReceiptHeader, render_receipt
from chakki.domain.exceptions import EntityNotFoundError
from chakki.domain.model.sale import Bill, Ungrouped
from chakki.domain.repository.product_repository import ProductRepository
from chakki.domain.repository.sales_gateway import SalesFilter, SalesGateway
from chakki.domain.service.bill_grouping import group_bills


class ShowSalesLogHandler:

    def __init__(self, sales_gateway: SalesGateway, symbol: str | None = None) -> None:
        self._sales_gateway = sales_gateway
        self._symbol = symbol

    def bills(
        self,
        operator_id: str | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> list[Bill]:
        sales = self._sales_gateway.list_sales(
            SalesFilter(operator_id=operator_id, start_date=start, end_date=end)
        )
        return group_bills(sales)

    def handle(
        self,
        operator_id: str | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> list[BillDTO]:
        """Today's (or any range of) sales, one row per bill, newest first."""
        return [
            bill_to_dto(bill, self._symbol)
            for bill in self.bills(operator_id, start, end)
        ]


class ReprintBillHandler:

    def __init__(
        self,
        sales_gateway: SalesGateway,
        product_repo: ProductRepository,
        header: ReceiptHeader | None = None,
        symbol: str | None = None,
    ) -> None:
        self._sales_gateway = sales_gateway
        self._product_repo = product_repo
        self._header = header
        self._symbol = symbol

    def find_bill(self, reference: str) -> Bill:
        """Resolve a bill id, or the id of any sale on the bill."""
        try:
            return self._sales_gateway.get_bill(reference).bill
        except EntityNotFoundError:
            sale = self._sales_gateway.get_sale(reference)
            if sale is None:
                raise EntityNotFoundError(f"No bill or sale with ID '{reference}'")
        if sale.bill_id:
            return self._sales_gateway.get_bill(sale.bill_id).bill
        return Bill(key=Ungrouped(sale.id), items=(sale,))

    def handle(self, reference: str) -> Receipt:
        bill = self.find_bill(reference)
        # inactive products still need their unit on a reprint
        products = self._product_repo.list_all()
        return render_receipt(bill, products, self._header, self._symbol)
