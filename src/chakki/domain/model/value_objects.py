"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from chakki.domain.exceptions import InvalidQuantity, ValidationError

CURRENCY_SYMBOLS = {
    "PKR": "₨",
    "INR": "₹",
    "USD": "$",
}

_CENTS = Decimal("0.01")


def format_decimal(value: Decimal) -> str:
    """Render a decimal without trailing zeros or exponent (``2.50`` -> ``2.5``)."""
    if value == value.to_integral_value():
        return f"{value.quantize(Decimal('1')):f}"
    return f"{value.normalize():f}"


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.
    """

    amount: Decimal
    currency: str = "PKR"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be a finite number, got {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        result = self.amount - other.amount
        if result < Decimal("0"):
            raise ValidationError("Money subtraction would result in a negative amount")
        return Money(result, self.currency)

    def __mul__(self, factor: Quantity | Decimal | int) -> Money:
        if isinstance(factor, Quantity):
            factor = factor.value
        if isinstance(factor, bool) or not isinstance(factor, (int, Decimal)):
            raise TypeError(
                f"Can only multiply Money by a quantity, got {type(factor).__name__}"
            )
        product = (self.amount * factor).quantize(_CENTS, rounding=ROUND_HALF_UP)
        return Money(product, self.currency)

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount >= other.amount

    # --- Display --------------------------------------------------------------

    @property
    def symbol(self) -> str:
        return CURRENCY_SYMBOLS.get(self.currency, self.currency + " ")

    def format(self, symbol: str | None = None) -> str:
        """Render with currency symbol and thousands grouping.

        Whole amounts drop the decimals (``₨1,640``); anything else is
        shown to two places (``₨1,640.50``).
        """
        sym = self.symbol if symbol is None else symbol
        if self.amount == self.amount.to_integral_value():
            return f"{sym}{self.amount:,.0f}"
        return f"{sym}{self.amount:,.2f}"

    def __str__(self) -> str:
        return self.format()

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = "PKR") -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)), currency)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero(currency: str = "PKR") -> Money:
        return Money(Decimal("0"), currency)


@dataclass(frozen=True)
class Quantity:
    """A strictly positive decimal quantity.

    Loose goods are sold by weight, so fractional quantities such as
    ``2.5`` Kg are valid.  Zero and negative values are not.
    """

    value: Decimal

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, (Decimal, int)):
            raise InvalidQuantity(
                f"Quantity must be a number, got {type(self.value).__name__}"
            )
        if isinstance(self.value, int):
            object.__setattr__(self, "value", Decimal(self.value))
        if not self.value.is_finite():
            raise InvalidQuantity(f"Quantity must be a finite number, got {self.value}")
        if self.value <= 0:
            raise InvalidQuantity("Quantity must be positive")

    def __add__(self, other: Quantity) -> Quantity:
        return Quantity(self.value + other.value)

    def __str__(self) -> str:
        return format_decimal(self.value)

    @staticmethod
    def parse(raw: str | int | float | Decimal) -> Quantity:
        """Parse operator input (``"2.5"``, ``3``) into a Quantity."""
        text = str(raw).strip()
        if not text:
            raise InvalidQuantity("Please enter a valid quantity")
        try:
            value = Decimal(text)
        except InvalidOperation as exc:
            raise InvalidQuantity(f"Invalid quantity: {raw!r}") from exc
        return Quantity(value)
