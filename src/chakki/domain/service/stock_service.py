"""Domain service: Stock Deduction.

Coordinates the cross-aggregate part of recording a bill: every product
on the bill must lose the sold quantity, or none may.

The two-phase approach (validate-then-mutate) ensures we never leave
stock partially deducted if one line fails validation.
"""

from __future__ import annotations

from decimal import Decimal

from chakki.domain.exceptions import EntityNotFoundError, InsufficientStock
from chakki.domain.model.product import Product
from chakki.domain.model.sale import CheckoutLine
from chakki.domain.model.value_objects import Quantity
from chakki.domain.repository.product_repository import ProductRepository


class StockService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def check_lines(self, lines: tuple[CheckoutLine, ...]) -> list[tuple[Product, Quantity]]:
        """Phase 1: load every product and make sure its stock covers the line.

        Lines for the same product are summed before comparing, so a
        request cannot slip past the check by splitting a quantity.
        Nothing is mutated.
        """
        needed: dict[str, Decimal] = {}
        products: dict[str, Product] = {}
        for line in lines:
            product = products.get(line.product_id)
            if product is None:
                product = self._product_repo.get_by_id(line.product_id)
                if product is None:
                    raise EntityNotFoundError(
                        f"Product with ID '{line.product_id}' not found"
                    )
                products[line.product_id] = product
            needed[line.product_id] = needed.get(line.product_id, Decimal("0")) + line.quantity.value

        for product_id, qty in needed.items():
            product = products[product_id]
            if qty > product.stock:
                raise InsufficientStock(product.name, qty, product.stock)

        return [(products[pid], Quantity(qty)) for pid, qty in needed.items()]

    def deduct_for_lines(self, lines: tuple[CheckoutLine, ...]) -> list[Product]:
        """Validate every line, then deduct and persist.

        Returns the updated products.
        """
        checked = self.check_lines(lines)

        # Phase 2: mutate and persist
        updated: list[Product] = []
        for product, qty in checked:
            product.deduct_stock(qty)
            updated.append(self._product_repo.save(product))
        return updated
