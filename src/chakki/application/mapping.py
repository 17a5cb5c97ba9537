"""Domain -> DTO mapping shared by the query handlers."""

from __future__ import annotations

from chakki.application.dto import DATE_FORMAT, BillDTO, CartDTO, CartLineDTO, ProductDTO
from chakki.domain.model.cart import Cart
from chakki.domain.model.product import Product
from chakki.domain.model.sale import Bill, Grouped
from chakki.domain.model.value_objects import format_decimal


def product_to_dto(product: Product, symbol: str | None = None) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        name=product.name,
        category=product.category,
        unit=product.unit,
        price=product.price.format(symbol),
        stock=format_decimal(product.stock),
        status=product.status.value,
        is_low_stock=product.is_low_stock,
    )


def cart_to_dto(cart: Cart, symbol: str | None = None) -> CartDTO:
    return CartDTO(
        lines=[
            CartLineDTO(
                product_id=item.product.id,
                product_name=item.product.name,
                quantity=str(item.quantity),
                unit=item.product.unit,
                rate=item.product.price.format(symbol),
                amount=item.line_total.format(symbol),
            )
            for item in cart.items
        ],
        total=cart.total().format(symbol),
    )


def bill_to_dto(bill: Bill, symbol: str | None = None) -> BillDTO:
    return BillDTO(
        key=bill.key.value,
        grouped=isinstance(bill.key, Grouped),
        date=bill.date.astimezone().strftime(DATE_FORMAT),
        operator_name=bill.operator_name,
        items=bill.descriptions,
        total_amount=bill.total_amount.format(symbol),
        total_quantity=str(bill.total_quantity),
    )
