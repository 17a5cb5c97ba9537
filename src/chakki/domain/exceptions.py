"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations

from decimal import Decimal


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidQuantity(ValidationError):
    """A quantity was non-positive or could not be parsed."""


class InsufficientStock(ValidationError):
    """Requested quantity exceeds the stock known for a product."""

    def __init__(
        self,
        product_name: str,
        requested: Decimal | None = None,
        available: Decimal | None = None,
        message: str | None = None,
    ) -> None:
        self.product_name = product_name
        self.requested = requested
        self.available = available
        if message is None:
            message = f"Insufficient stock for {product_name}"
            if requested is not None and available is not None:
                message += f" (need {requested}, have {available} available)"
        super().__init__(message)


class EmptyCart(ValidationError):
    """Checkout was attempted with no items in the cart."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductLookupMissing(EntityNotFoundError):
    """A sale references a product that is no longer in the catalog."""


class GatewayError(DomainException):
    """The remote sales/catalog service failed or could not be reached."""


class CheckoutFailed(GatewayError):
    """Checkout submission failed; the cart is left intact for a retry."""
