"""REST-API-backed implementation of SalesGateway.

``POST /sales/checkout`` is the single mutating call: the server inserts
every row, issues the bill id and decrements stock in one transaction.
The client's idempotency key travels in the ``Idempotency-Key`` header.
"""

from __future__ import annotations

from chakki.domain.exceptions import CheckoutFailed, EntityNotFoundError, GatewayError
from chakki.domain.model.sale import CheckoutRequest, CheckoutResult, Sale
from chakki.domain.repository.sales_gateway import SalesFilter, SalesGateway
from chakki.infrastructure.api.client import ApiClient
from chakki.infrastructure.serialization import checkout_result_from_raw, sale_from_raw

PAGE_SIZE = 100


class RestSalesGateway(SalesGateway):

    def __init__(self, client: ApiClient, currency: str = "PKR") -> None:
        self._client = client
        self._currency = currency

    def checkout(self, request: CheckoutRequest) -> CheckoutResult:
        payload = {
            "items": [
                {
                    "product_id": line.product_id,
                    "quantity": str(line.quantity.value),
                    "total": str(line.total.amount),
                }
                for line in request.items
            ],
            "date": request.date.isoformat(),
        }
        try:
            raw = self._client.post(
                "/sales/checkout",
                payload,
                headers={"Idempotency-Key": request.idempotency_key},
            )
        except CheckoutFailed:
            raise
        except GatewayError as exc:
            raise CheckoutFailed(f"Failed to process checkout: {exc}") from exc
        return checkout_result_from_raw(raw, self._currency)

    def list_sales(self, sales_filter: SalesFilter | None = None) -> list[Sale]:
        sales_filter = sales_filter or SalesFilter()
        params = {
            "operator_id": sales_filter.operator_id,
            "product_id": sales_filter.product_id,
            "bill_id": sales_filter.bill_id,
            "start_date": sales_filter.start_date.isoformat() if sales_filter.start_date else None,
            "end_date": sales_filter.end_date.isoformat() if sales_filter.end_date else None,
            "sort_by": "date",
            "sort_order": "desc",
            "page_size": PAGE_SIZE,
        }
        sales: list[Sale] = []
        page = 1
        while True:
            body = self._client.get("/sales", params={**params, "page": page})
            batch = body.get("sales", [])
            sales.extend(sale_from_raw(item, self._currency) for item in batch)
            if not batch or len(sales) >= body.get("total", 0):
                return sales
            page += 1

    def get_sale(self, sale_id: str) -> Sale | None:
        try:
            raw = self._client.get(f"/sales/{sale_id}")
        except EntityNotFoundError:
            return None
        return sale_from_raw(raw, self._currency)

    def get_bill(self, bill_id: str) -> CheckoutResult:
        raw = self._client.get(f"/sales/bill/{bill_id}")
        return checkout_result_from_raw(raw, self._currency)

    def delete_sale(self, sale_id: str) -> None:
        self._client.delete(f"/sales/{sale_id}")
