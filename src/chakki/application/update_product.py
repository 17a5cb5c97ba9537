"""Application service: Update Product use case."""

from __future__ import annotations

import logging

from chakki.application.add_product import parse_stock
from chakki.domain.exceptions import EntityNotFoundError, ValidationError
from chakki.domain.model.product import Product, ProductStatus
from chakki.domain.model.value_objects import Money
from chakki.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        price: str | None = None,
        status: str | None = None,
        low_stock_threshold: str | None = None,
    ) -> Product:
        """Update a product's price, status or low-stock threshold.

        Sales already recorded keep their totals.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        if price is not None:
            product.update_price(Money.of(price, product.price.currency))
        if status is not None:
            try:
                product.status = ProductStatus(status.strip().lower())
            except ValueError as exc:
                raise ValidationError(
                    f"Invalid status '{status}' (expected active or inactive)"
                ) from exc
        if low_stock_threshold is not None:
            product.low_stock_threshold = parse_stock(
                low_stock_threshold, "Low-stock threshold"
            )

        saved = self._product_repo.save(product)
        logger.info("Updated product %s '%s'", saved.id, saved.name)
        return saved


class SetStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, stock: str) -> Product:
        """Overwrite the stock level of a product (restock or correction)."""
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        product.set_stock(parse_stock(stock))
        saved = self._product_repo.save(product)
        logger.info("Stock for '%s' set to %s", saved.name, saved.stock)
        return saved
