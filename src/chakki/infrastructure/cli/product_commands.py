"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from chakki.application.add_product import AddProductHandler
from chakki.application.catalog import ListActiveProductsHandler, ListLowStockHandler
from chakki.application.mapping import product_to_dto
from chakki.application.update_product import SetStockHandler, UpdateProductHandler
from chakki.domain.exceptions import DomainException
from chakki.infrastructure.bootstrap import product_repository, settings


def display_products(products) -> None:
    """Shared table layout for product listings."""
    symbol = settings().currency_symbol
    click.echo(
        f"{'ID':<6} {'Name':<24} {'Category':<12} {'Price':>10} {'Stock':>10} {'Status':<8}"
    )
    click.echo("-" * 75)
    for p in products:
        dto = product_to_dto(p, symbol)
        stock = f"{dto.stock} {dto.unit}".strip()
        price = f"{dto.price}/{dto.unit}" if dto.unit else dto.price
        flag = "  LOW" if dto.is_low_stock else ""
        click.echo(
            f"{dto.id:<6} {dto.name:<24} {dto.category:<12} "
            f"{price:>10} "
            f"{stock:>10} {dto.status:<8}{flag}"
        )


@click.command("list")
@click.option("--all", "show_all", is_flag=True, default=False, help="Include inactive products.")
@click.option("--search", default=None, help="Filter by name.")
@click.option("--category", default=None, help="Filter by category.")
def product_list(show_all: bool, search: str | None, category: str | None) -> None:
    """List products in the catalog."""
    repo = product_repository()
    try:
        if show_all:
            products = sorted(repo.list_all(), key=lambda p: p.name.lower())
        else:
            products = ListActiveProductsHandler(repo).handle(search=search, category=category)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return
    display_products(products)


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Unit price (e.g. 42).")
@click.option("--unit", default="Kg", show_default=True, help="Unit of measure.")
@click.option("--category", default="", help="Category.")
@click.option("--stock", default="0", show_default=True, help="Opening stock.")
@click.option("--threshold", default="0", show_default=True, help="Low-stock threshold.")
def product_add(name: str, price: str, unit: str, category: str, stock: str, threshold: str) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(
        product_repo=product_repository(), currency=settings().currency_code
    )

    try:
        product = handler.handle(
            name=name,
            price=price,
            unit=unit,
            category=category,
            stock=stock,
            low_stock_threshold=threshold,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' added at "
        f"{product.price.format(settings().currency_symbol)}/{product.unit}"
    )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", default=None, help="New unit price.")
@click.option("--status", type=click.Choice(["active", "inactive"]), default=None)
@click.option("--threshold", default=None, help="New low-stock threshold.")
def product_update(
    product_id: str, price: str | None, status: str | None, threshold: str | None
) -> None:
    """Update a product's price, status or low-stock threshold."""
    if price is None and status is None and threshold is None:
        raise click.UsageError("Nothing to update: pass --price, --status or --threshold")

    handler = UpdateProductHandler(product_repo=product_repository())
    try:
        product = handler.handle(
            product_id=product_id,
            price=price,
            status=status,
            low_stock_threshold=threshold,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' updated.")


@click.command("stock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, help="Stock on hand.")
def product_stock(product_id: str, quantity: str) -> None:
    """Set the stock level of a product."""
    handler = SetStockHandler(product_repo=product_repository())
    try:
        product = handler.handle(product_id=product_id, stock=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for '{product.name}' set to {product_to_dto(product).stock} {product.unit}".rstrip())


@click.command("low-stock")
def product_low_stock() -> None:
    """Show active products at or below their low-stock threshold."""
    try:
        products = ListLowStockHandler(product_repository()).handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("All products are above their low-stock threshold.")
        return
    display_products(products)
