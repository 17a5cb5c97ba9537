"""Product aggregate.

Products live independently of sales. They have their own lifecycle:
prices change, stock is topped up, products are deactivated or removed
from the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from chakki.domain.exceptions import InsufficientStock, ValidationError
from chakki.domain.model.value_objects import Money, Quantity


class ProductStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


@dataclass
class Product:
    """A sellable product in the catalog.

    Invariants:
    - ``stock`` is never negative
    - ``price`` is strictly positive
    """

    id: str
    name: str
    price: Money
    stock: Decimal = Decimal("0")
    unit: str = ""
    category: str = ""
    low_stock_threshold: Decimal = Decimal("0")
    status: ProductStatus = ProductStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == ProductStatus.ACTIVE

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.low_stock_threshold

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        Sales already recorded keep the total they were created with.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price

    def set_stock(self, stock: Decimal) -> None:
        if stock < 0:
            raise ValidationError("Stock cannot be negative")
        self.stock = stock

    def can_supply(self, quantity: Quantity) -> bool:
        return quantity.value <= self.stock

    def deduct_stock(self, quantity: Quantity) -> None:
        """Remove sold stock.

        Raises InsufficientStock if the product cannot cover the quantity.
        """
        if not self.can_supply(quantity):
            raise InsufficientStock(self.name, quantity.value, self.stock)
        self.stock -= quantity.value

    def activate(self) -> None:
        self.status = ProductStatus.ACTIVE

    def deactivate(self) -> None:
        self.status = ProductStatus.INACTIVE
