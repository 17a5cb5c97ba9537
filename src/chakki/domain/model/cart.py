"""Cart — the operator's in-progress, not-yet-submitted selection.

The cart validates against a *catalog snapshot*: the product list as it
was last fetched.  That check is optimistic; the sales service re-checks
stock authoritatively at checkout time.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from chakki.domain.exceptions import EntityNotFoundError, InsufficientStock
from chakki.domain.model.product import Product
from chakki.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class CartItem:
    product: Product
    quantity: Quantity

    @property
    def line_total(self) -> Money:
        return self.product.price * self.quantity


class Cart:
    """Single-operator, single-session collection of (product, quantity).

    At most one entry per product.  Adding a product that is already in
    the cart *replaces* its quantity; it does not add to it.
    """

    def __init__(self, products: list[Product] | None = None) -> None:
        self._catalog: dict[str, Product] = {}
        self._items: dict[str, CartItem] = {}
        self.refresh(products or [])

    # --- Catalog snapshot -----------------------------------------------------

    def refresh(self, products: list[Product]) -> None:
        """Swap in a newer catalog snapshot.

        Existing entries are re-pointed at the fresh product records so
        that totals use current prices.  Entries whose product vanished
        are kept as-is; the sales service will reject them.
        """
        self._catalog = {p.id: p for p in products}
        for product_id, item in list(self._items.items()):
            fresh = self._catalog.get(product_id)
            if fresh is not None:
                self._items[product_id] = CartItem(fresh, item.quantity)

    def current_stock(self, product_id: str) -> Decimal:
        return self._lookup(product_id).stock

    # --- Mutations ------------------------------------------------------------

    def add_or_update(
        self, product_id: str, quantity: Quantity | str | int | Decimal
    ) -> CartItem:
        """Put *quantity* of a product in the cart, replacing any prior entry.

        Raises InvalidQuantity for non-positive or unparseable input and
        InsufficientStock when the snapshot stock cannot cover it.  The
        cart is unchanged on failure.
        """
        if not isinstance(quantity, Quantity):
            quantity = Quantity.parse(quantity)
        product = self._lookup(product_id)
        if not product.can_supply(quantity):
            raise InsufficientStock(product.name, quantity.value, product.stock)
        item = CartItem(product=product, quantity=quantity)
        self._items[product_id] = item
        return item

    def remove(self, product_id: str) -> None:
        self._items.pop(product_id, None)

    def clear(self) -> None:
        self._items.clear()

    # --- Queries --------------------------------------------------------------

    @property
    def items(self) -> list[CartItem]:
        return list(self._items.values())

    @property
    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._items

    def get(self, product_id: str) -> CartItem | None:
        return self._items.get(product_id)

    def total(self) -> Money:
        result: Money | None = None
        for item in self._items.values():
            result = item.line_total if result is None else result + item.line_total
        if result is None:
            return Money.zero()
        return result

    # --- Internal helpers -----------------------------------------------------

    def _lookup(self, product_id: str) -> Product:
        product = self._catalog.get(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product
