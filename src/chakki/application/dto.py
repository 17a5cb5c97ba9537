"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

DATE_FORMAT = "%Y-%m-%d %H:%M"


@dataclass(frozen=True)
class CartItemSpec:
    """Input: what the operator asked for (product name + raw quantity)."""

    product_name: str
    quantity: str


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    category: str
    unit: str
    price: str  # formatted, e.g. "₨42"
    stock: str  # e.g. "95"
    status: str
    is_low_stock: bool


@dataclass(frozen=True)
class CartLineDTO:
    product_id: str
    product_name: str
    quantity: str
    unit: str
    rate: str
    amount: str


@dataclass(frozen=True)
class CartDTO:
    lines: list[CartLineDTO]
    total: str


@dataclass(frozen=True)
class BillDTO:
    """Output: one bill as shown in the sales log."""

    key: str
    grouped: bool
    date: str
    operator_name: str
    items: list[str]  # e.g. ["Besan (1)", "Sharbati Wheat Atta (2)"]
    total_amount: str
    total_quantity: str
