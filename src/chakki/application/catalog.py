"""Application service: Catalog queries.

The active product list is the snapshot the cart validates against.
"""

from __future__ import annotations

from chakki.domain.model.product import Product
from chakki.domain.repository.product_repository import ProductRepository


class ListActiveProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        search: str | None = None,
        category: str | None = None,
    ) -> list[Product]:
        products = self._product_repo.list_active()
        if search:
            needle = search.strip().lower()
            products = [p for p in products if needle in p.name.lower()]
        if category:
            products = [p for p in products if p.category.lower() == category.strip().lower()]
        return sorted(products, key=lambda p: p.name.lower())


class ListLowStockHandler:
    """Active products whose stock is at or below their threshold."""

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self) -> list[Product]:
        low = [p for p in self._product_repo.list_active() if p.is_low_stock]
        return sorted(low, key=lambda p: (p.stock, p.name.lower()))
