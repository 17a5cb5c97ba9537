"""CLI commands for recording, listing and reprinting sales."""

from __future__ import annotations

from datetime import date, datetime

import click

from chakki.application.catalog import ListActiveProductsHandler
from chakki.application.checkout import CheckoutHandler
from chakki.application.delete_sale import DeleteSaleHandler
from chakki.application.dto import CartItemSpec
from chakki.application.mapping import cart_to_dto
from chakki.application.pos_session import PosSession
from chakki.application.receipt import format_receipt_text, render_receipt
from chakki.application.sales_log import ReprintBillHandler, ShowSalesLogHandler
from chakki.domain.exceptions import DomainException
from chakki.infrastructure.bootstrap import (
    operator,
    product_repository,
    receipt_header,
    sales_gateway,
    settings,
)


def _parse_items(raw: str) -> list[CartItemSpec]:
    """Parse 'Besan:1,Sharbati Wheat Atta:2.5' into CartItemSpec list."""
    specs: list[CartItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductName:Quantity'."
            )
        name, qty_str = pair.rsplit(":", 1)
        specs.append(CartItemSpec(product_name=name.strip(), quantity=qty_str.strip()))
    return specs


def build_session(operator_id: str | None, operator_name: str | None) -> PosSession:
    products = product_repository()
    return PosSession(
        operator=operator(operator_id, operator_name),
        catalog=ListActiveProductsHandler(products),
        checkout=CheckoutHandler(sales_gateway()),
    )


def display_cart(session: PosSession) -> None:
    dto = cart_to_dto(session.cart, settings().currency_symbol)
    if not dto.lines:
        click.echo("Cart is empty.")
        return
    click.echo(f"  {'Product':<24} {'Qty':>10} {'Rate':>8} {'Amount':>10}")
    click.echo(f"  {'-'*55}")
    for line in dto.lines:
        qty = f"{line.quantity} {line.unit}".strip()
        click.echo(f"  {line.product_name:<24} {qty:>10} {line.rate:>8} {line.amount:>10}")
    click.echo(f"  {'-'*55}")
    click.echo(f"  {'Total':<34} {dto.total:>20}")


def display_receipt(session: PosSession) -> None:
    cfg = settings()
    receipt = render_receipt(
        session.last_result.bill,
        session.products,
        receipt_header(),
        cfg.currency_symbol,
    )
    click.echo(format_receipt_text(receipt, cfg.receipt_width))


@click.command("checkout")
@click.option("--items", required=True, help="Items as 'Product:Qty,Product:Qty'.")
@click.option("--operator-id", default=None, help="Operator ID (defaults to CHAKKI_OPERATOR_ID).")
@click.option("--operator-name", default=None, help="Operator display name.")
@click.option("--print/--no-print", "print_bill", default=True, help="Print the bill after checkout.")
def sale_checkout(
    items: str, operator_id: str | None, operator_name: str | None, print_bill: bool
) -> None:
    """Sell one or more products as a single bill."""
    specs = _parse_items(items)

    try:
        session = build_session(operator_id, operator_name)
        for spec in specs:
            product = session.find_by_name(spec.product_name)
            session.add_to_cart(spec.quantity, product_id=product.id)
        display_cart(session)
        result = session.checkout()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo()
    click.echo(
        f"Checkout completed: bill {result.bill_id} "
        f"({len(result.items)} items, {result.total_amount.format(settings().currency_symbol)})"
    )
    if print_bill:
        click.echo()
        display_receipt(session)


def display_bills(bills) -> None:
    """Shared table layout for the sales log."""
    click.echo(f"{'Time':<17} {'Bill':<9} {'Items':<36} {'Qty':>6} {'Total':>10}")
    click.echo("-" * 82)
    for bill in bills:
        ref = bill.key[:8] if bill.grouped else f"({bill.key[:6]})"
        click.echo(
            f"{bill.date:<17} {ref:<9} {', '.join(bill.items):<36} "
            f"{bill.total_quantity:>6} {bill.total_amount:>10}"
        )


@click.command("log")
@click.option("--operator-id", default=None, help="Only this operator's sales.")
@click.option("--date", "day", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Day to show (YYYY-MM-DD); defaults to today.")
@click.option("--all", "show_all", is_flag=True, default=False, help="Every day, not just one.")
def sale_log(operator_id: str | None, day: datetime | None, show_all: bool) -> None:
    """Show the sales log grouped into bills, newest first."""
    if show_all:
        start = end = None
    else:
        start = end = day.date() if day else date.today()

    handler = ShowSalesLogHandler(sales_gateway(), settings().currency_symbol)
    try:
        bills = handler.handle(operator_id=operator_id, start=start, end=end)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not bills:
        click.echo("No sales found.")
        return
    display_bills(bills)


@click.command("receipt")
@click.option("--bill", "reference", required=True, help="Bill ID, or the ID of a sale on the bill.")
def sale_receipt(reference: str) -> None:
    """Reprint the receipt for a past bill."""
    cfg = settings()
    handler = ReprintBillHandler(
        sales_gateway(), product_repository(), receipt_header(), cfg.currency_symbol
    )
    try:
        receipt = handler.handle(reference)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(format_receipt_text(receipt, cfg.receipt_width))


@click.command("delete")
@click.option("--id", "sale_id", required=True, help="Sale ID to delete.")
@click.confirmation_option(prompt="Delete this sale permanently?")
def sale_delete(sale_id: str) -> None:
    """Permanently remove a sale (stock is not returned)."""
    try:
        DeleteSaleHandler(sales_gateway()).handle(sale_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sale {sale_id} deleted.")
