"""Application service: Add Product use case."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

from chakki.domain.exceptions import ValidationError
from chakki.domain.model.product import Product, ProductStatus
from chakki.domain.model.value_objects import Money
from chakki.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


def parse_stock(raw: str | int | Decimal, field: str = "Stock") -> Decimal:
    try:
        value = Decimal(str(raw).strip())
    except InvalidOperation as exc:
        raise ValidationError(f"Invalid {field.lower()}: {raw!r}") from exc
    if not value.is_finite() or value < 0:
        raise ValidationError(f"{field} cannot be negative")
    return value


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository, currency: str = "PKR") -> None:
        self._product_repo = product_repo
        self._currency = currency

    def handle(
        self,
        name: str,
        price: str,
        unit: str = "Kg",
        category: str = "",
        stock: str = "0",
        low_stock_threshold: str = "0",
    ) -> Product:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        existing = self._product_repo.get_by_name(name.strip())
        if existing is not None:
            raise ValidationError(f"Product '{name}' already exists")

        money = Money.of(price, self._currency)
        if money.amount <= 0:
            raise ValidationError("Product price must be greater than zero")

        product = Product(
            id="",
            name=name.strip(),
            price=money,
            stock=parse_stock(stock),
            unit=unit.strip(),
            category=category.strip(),
            low_stock_threshold=parse_stock(low_stock_threshold, "Low-stock threshold"),
            status=ProductStatus.ACTIVE,
        )
        saved = self._product_repo.save(product)
        logger.info("Added product %s '%s' at %s", saved.id, saved.name, saved.price)
        return saved
