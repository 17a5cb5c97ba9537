"""JSON record <-> domain conversion.

The local JSON files and the REST API share one shape: decimals travel
as strings, timestamps as ISO 8601, ``bill_id`` may be null.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from chakki.domain.model.product import Product, ProductStatus
from chakki.domain.model.sale import CheckoutResult, Sale
from chakki.domain.model.value_objects import Money, Quantity


def parse_datetime(raw: str) -> datetime:
    value = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


# --- Products -----------------------------------------------------------------


def product_to_raw(product: Product) -> dict:
    return {
        "id": product.id,
        "name": product.name,
        "category": product.category,
        "unit": product.unit,
        "price": str(product.price.amount),
        "currency": product.price.currency,
        "stock": str(product.stock),
        "low_stock_threshold": str(product.low_stock_threshold),
        "status": product.status.value,
    }


def product_from_raw(raw: dict, currency: str = "PKR") -> Product:
    return Product(
        id=str(raw["id"]),
        name=raw["name"],
        price=Money(Decimal(str(raw["price"])), raw.get("currency", currency)),
        stock=Decimal(str(raw.get("stock", "0"))),
        unit=raw.get("unit", ""),
        category=raw.get("category", ""),
        low_stock_threshold=Decimal(str(raw.get("low_stock_threshold", "0"))),
        status=ProductStatus(raw.get("status", "active")),
    )


# --- Sales --------------------------------------------------------------------


def sale_to_raw(sale: Sale) -> dict:
    return {
        "id": sale.id,
        "product_id": sale.product_id,
        "product_name": sale.product_name,
        "quantity": str(sale.quantity.value),
        "total": str(sale.total.amount),
        "currency": sale.total.currency,
        "operator_id": sale.operator_id,
        "operator_name": sale.operator_name,
        "date": sale.date.isoformat(),
        "bill_id": sale.bill_id,
    }


def sale_from_raw(raw: dict, currency: str = "PKR") -> Sale:
    return Sale(
        id=str(raw["id"]),
        product_id=str(raw["product_id"]),
        product_name=raw["product_name"],
        quantity=Quantity(Decimal(str(raw["quantity"]))),
        total=Money(Decimal(str(raw["total"])), raw.get("currency", currency)),
        operator_id=str(raw["operator_id"]),
        operator_name=raw.get("operator_name", ""),
        date=parse_datetime(raw["date"]),
        bill_id=raw.get("bill_id") or None,
    )


def checkout_result_from_raw(raw: dict, currency: str = "PKR") -> CheckoutResult:
    items = tuple(sale_from_raw(item, currency) for item in raw["items"])
    return CheckoutResult(
        bill_id=str(raw["bill_id"]),
        items=items,
        operator_name=raw.get("operator_name") or items[0].operator_name,
        date=parse_datetime(raw["date"]) if raw.get("date") else items[0].date,
    )
