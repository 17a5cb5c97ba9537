"""Interactive POS session for the till operator."""

from __future__ import annotations

import click

from chakki.domain.exceptions import CheckoutFailed, DomainException, InsufficientStock
from chakki.infrastructure.bootstrap import settings
from chakki.infrastructure.cli.product_commands import display_products
from chakki.infrastructure.cli.sale_commands import (
    build_session,
    display_cart,
    display_receipt,
)

HELP = """\
Commands:
  products [text]     list sellable products (optionally filtered)
  select <id>         pick a product, then enter 'qty <n>'
  qty <n>             put n of the selected product in the cart
  add <id> <n>        put n of a product in the cart (replaces any earlier qty)
  remove <id>         take a product out of the cart
  cart                show the cart
  checkout            record the cart as one bill and print it
  print               reprint the last bill
  refresh             reload stock and prices
  quit                leave (the cart is discarded)"""


def _run(session, command: str, args: list[str]) -> bool:
    """Execute one command. Returns False when the session should end."""
    if command in ("quit", "exit", "q"):
        return False
    if command in ("help", "?"):
        click.echo(HELP)
    elif command == "products":
        text = " ".join(args).lower()
        products = [p for p in session.products if text in p.name.lower()]
        if products:
            display_products(products)
        else:
            click.echo("No matching products found.")
    elif command == "select" and len(args) == 1:
        product = session.select(args[0])
        click.echo(f"Selected {product.name}. Enter quantity with 'qty <n>'.")
    elif command == "qty" and len(args) == 1:
        item = session.add_to_cart(args[0])
        click.echo(f"{item.product.name}: {item.quantity} {item.product.unit} in cart.")
    elif command == "add" and len(args) == 2:
        item = session.add_to_cart(args[1], product_id=args[0])
        click.echo(f"{item.product.name}: {item.quantity} {item.product.unit} in cart.")
    elif command == "remove" and len(args) == 1:
        session.remove_from_cart(args[0])
        display_cart(session)
    elif command == "cart":
        display_cart(session)
    elif command == "checkout":
        result = session.checkout()
        click.secho(
            f"Checkout completed: bill {result.bill_id} "
            f"({result.total_amount.format(settings().currency_symbol)})",
            fg="green",
        )
        display_receipt(session)
    elif command == "print":
        if session.last_result is None:
            click.echo("No bill printed in this session yet.")
        else:
            display_receipt(session)
    elif command == "refresh":
        session.refresh()
        click.echo(f"{len(session.products)} products loaded.")
    else:
        click.echo(f"Unknown command '{' '.join([command, *args])}'. Type 'help'.")
    return True


@click.command("pos")
@click.option("--operator-id", default=None, help="Operator ID (defaults to CHAKKI_OPERATOR_ID).")
@click.option("--operator-name", default=None, help="Operator display name.")
def pos(operator_id: str | None, operator_name: str | None) -> None:
    """Start an interactive point-of-sale session."""
    try:
        session = build_session(operator_id, operator_name)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Quick Sale — {session.operator.name}. Type 'help' for commands.")
    running = True
    while running:
        line = click.prompt("pos", prompt_suffix="> ", default="", show_default=False)
        parts = line.split()
        if not parts:
            continue
        try:
            running = _run(session, parts[0].lower(), parts[1:])
        except InsufficientStock as exc:
            click.secho(f"Insufficient Stock: {exc}", fg="yellow")
        except CheckoutFailed as exc:
            click.secho(f"{exc} The cart was kept; run 'checkout' again to retry.", fg="red")
        except DomainException as exc:
            click.secho(f"Error: {exc}", fg="red")

    session.clear()
    click.echo("Session closed.")
