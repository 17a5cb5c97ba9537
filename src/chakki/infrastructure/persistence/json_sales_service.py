"""JSON-file-backed implementation of SalesGateway.

Plays the role of the sales service for a single-till installation:
checkout validates every line against the product file, deducts stock
and appends the sale rows under one freshly issued bill id.  Nothing is
written unless every line passes, and a write that fails part way puts
the stock back before raising CheckoutFailed.

The sales file also remembers which idempotency key produced which bill
so a resubmitted checkout returns the original bill.
"""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import replace
from pathlib import Path

from chakki.domain.exceptions import CheckoutFailed, DomainException, EntityNotFoundError
from chakki.domain.model.product import Product
from chakki.domain.model.sale import CheckoutRequest, CheckoutResult, Sale
from chakki.domain.repository.product_repository import ProductRepository
from chakki.domain.repository.sales_gateway import SalesFilter, SalesGateway
from chakki.domain.service.stock_service import StockService
from chakki.infrastructure.serialization import sale_from_raw, sale_to_raw

logger = logging.getLogger(__name__)


class JsonSalesService(SalesGateway):

    def __init__(
        self,
        file_path: Path,
        product_repo: ProductRepository,
        currency: str = "PKR",
    ) -> None:
        self._file_path = file_path
        self._product_repo = product_repo
        self._currency = currency
        self._ensure_file()

    # --- SalesGateway interface -----------------------------------------------

    def checkout(self, request: CheckoutRequest) -> CheckoutResult:
        data = self._load_raw()

        replayed = data["checkouts"].get(request.idempotency_key)
        if replayed is not None:
            logger.info(
                "Checkout key %s already processed as bill %s",
                request.idempotency_key,
                replayed,
            )
            return self.get_bill(replayed)

        svc = StockService(self._product_repo)
        checked = svc.check_lines(request.items)
        names = {product.id: product.name for product, _ in checked}
        prices = {product.id: product.price for product, _ in checked}

        for line in request.items:
            expected = prices[line.product_id] * line.quantity
            if expected != line.total:
                logger.warning(
                    "Line total for %s is %s, catalog price gives %s; keeping submitted total",
                    names[line.product_id],
                    line.total,
                    expected,
                )

        bill_id = str(uuid.uuid4())
        sales = tuple(
            Sale(
                id=uuid.uuid4().hex,
                product_id=line.product_id,
                product_name=names[line.product_id],
                quantity=line.quantity,
                total=line.total,
                operator_id=request.operator.id,
                operator_name=request.operator.name,
                date=request.date,
                bill_id=bill_id,
            )
            for line in request.items
        )
        data["sales"].extend(sale_to_raw(sale) for sale in sales)
        data["checkouts"][request.idempotency_key] = bill_id

        snapshots = [replace(product) for product, _ in checked]
        try:
            svc.deduct_for_lines(request.items)
            self._persist_raw(data)
        except Exception as exc:
            self._restore_stock(snapshots)
            if isinstance(exc, DomainException):
                raise
            raise CheckoutFailed(f"Could not record bill: {exc}") from exc

        return CheckoutResult(
            bill_id=bill_id,
            items=sales,
            operator_name=request.operator.name,
            date=request.date,
        )

    def list_sales(self, sales_filter: SalesFilter | None = None) -> list[Sale]:
        sales_filter = sales_filter or SalesFilter()
        sales = [s for s in self._load_sales() if sales_filter.matches(s)]
        return sorted(sales, key=lambda s: s.date, reverse=True)

    def get_sale(self, sale_id: str) -> Sale | None:
        for sale in self._load_sales():
            if sale.id == sale_id:
                return sale
        return None

    def get_bill(self, bill_id: str) -> CheckoutResult:
        items = tuple(s for s in self._load_sales() if s.bill_id == bill_id)
        if not items:
            raise EntityNotFoundError(f"Bill '{bill_id}' not found")
        return CheckoutResult(
            bill_id=bill_id,
            items=items,
            operator_name=items[0].operator_name,
            date=items[0].date,
        )

    def delete_sale(self, sale_id: str) -> None:
        data = self._load_raw()
        remaining = [raw for raw in data["sales"] if raw["id"] != sale_id]
        if len(remaining) == len(data["sales"]):
            raise EntityNotFoundError(f"Sale '{sale_id}' not found")
        data["sales"] = remaining
        self._persist_raw(data)

    # --- File helpers ---------------------------------------------------------

    def _restore_stock(self, snapshots: list[Product]) -> None:
        for product in snapshots:
            try:
                self._product_repo.save(product)
            except OSError:
                logger.exception(
                    "Could not restore stock for %s to %s", product.name, product.stock
                )

    def _load_sales(self) -> list[Sale]:
        return [sale_from_raw(raw, self._currency) for raw in self._load_raw()["sales"]]

    def _load_raw(self) -> dict:
        data = json.loads(self._file_path.read_text(encoding="utf-8"))
        if isinstance(data, list):
            # plain list of sale rows, as exported by older installs
            data = {"sales": data, "checkouts": {}}
        data.setdefault("sales", [])
        data.setdefault("checkouts", {})
        return data

    def _persist_raw(self, data: dict) -> None:
        self._file_path.write_text(
            json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(
                json.dumps({"sales": [], "checkouts": {}}), encoding="utf-8"
            )
