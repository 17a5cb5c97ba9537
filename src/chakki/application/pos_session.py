"""Operator POS session.

Holds the transient state of one operator at the till: the catalog
snapshot, the cart, the currently selected product and the last
completed bill (kept for immediate receipt printing).
"""

from __future__ import annotations

import logging
from decimal import Decimal

from chakki.application.catalog import ListActiveProductsHandler
from chakki.application.checkout import CheckoutHandler, new_idempotency_key
from chakki.domain.exceptions import CheckoutFailed, DomainException, EntityNotFoundError
from chakki.domain.model.cart import Cart, CartItem
from chakki.domain.model.product import Product
from chakki.domain.model.sale import CheckoutResult, Operator
from chakki.domain.model.value_objects import Quantity

logger = logging.getLogger(__name__)


class PosSession:

    def __init__(
        self,
        operator: Operator,
        catalog: ListActiveProductsHandler,
        checkout: CheckoutHandler,
    ) -> None:
        self.operator = operator
        self._catalog = catalog
        self._checkout = checkout
        self.products: list[Product] = []
        self.cart = Cart()
        self.selected: Product | None = None
        self.last_result: CheckoutResult | None = None
        self._pending_key: str | None = None
        self.refresh()

    # --- Catalog --------------------------------------------------------------

    def refresh(self) -> list[Product]:
        """Re-fetch the active catalog and point the cart at it."""
        self.products = self._catalog.handle()
        self.cart.refresh(self.products)
        logger.debug("Catalog refreshed: %d active products", len(self.products))
        if self.selected is not None:
            self.selected = self.find_product(self.selected.id)
        return self.products

    def find_product(self, product_id: str) -> Product | None:
        for product in self.products:
            if product.id == product_id:
                return product
        return None

    def find_by_name(self, name: str) -> Product:
        wanted = name.strip().lower()
        for product in self.products:
            if product.name.lower() == wanted:
                return product
        raise EntityNotFoundError(f"Product not found: '{name}'")

    # --- Cart -----------------------------------------------------------------

    def select(self, product_id: str) -> Product:
        product = self.find_product(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        self.selected = product
        return product

    def add_to_cart(
        self,
        quantity: Quantity | str | int | Decimal,
        product_id: str | None = None,
    ) -> CartItem:
        """Add the selected (or given) product; clears the selection on success."""
        if product_id is None:
            if self.selected is None:
                raise EntityNotFoundError("No product selected")
            product_id = self.selected.id
        item = self.cart.add_or_update(product_id, quantity)
        self.selected = None
        self._pending_key = None
        return item

    def remove_from_cart(self, product_id: str) -> None:
        if product_id in self.cart:
            self._pending_key = None
        self.cart.remove(product_id)

    def clear(self) -> None:
        """Leave the session: drop the cart and any selection."""
        self.cart.clear()
        self.selected = None
        self._pending_key = None

    # --- Checkout -------------------------------------------------------------

    def checkout(self) -> CheckoutResult:
        """Submit the cart.

        A network failure keeps the idempotency key so that resubmitting
        the same cart cannot record the bill twice.  Success refreshes the
        catalog so the grid shows the decremented stock.
        """
        key = self._pending_key or new_idempotency_key()
        try:
            result = self._checkout.handle(self.cart, self.operator, idempotency_key=key)
        except DomainException as exc:
            # Only a transport failure may have been a late success.
            self._pending_key = key if isinstance(exc, CheckoutFailed) else None
            raise

        self._pending_key = None
        self.last_result = result
        try:
            self.refresh()
        except DomainException as exc:
            # The bill is recorded; a stale grid must not hide that.
            logger.warning("Bill %s recorded but catalog refresh failed: %s", result.bill_id, exc)
        return result
