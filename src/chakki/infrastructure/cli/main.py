import click

from chakki.infrastructure.cli.pos_commands import pos
from chakki.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_low_stock,
    product_stock,
    product_update,
)
from chakki.infrastructure.cli.sale_commands import (
    sale_checkout,
    sale_delete,
    sale_log,
    sale_receipt,
)
from chakki.infrastructure.config import get_settings
from chakki.infrastructure.logging_setup import setup_logging


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Echo log records to the console.")
def cli(verbose: bool) -> None:
    """Punjab Atta Chakki — point of sale"""
    setup_logging(get_settings(), console=verbose)


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def sale() -> None:
    """Record, list and reprint sales."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_low_stock)
product.add_command(product_stock)
product.add_command(product_update)
sale.add_command(sale_checkout)
sale.add_command(sale_delete)
sale.add_command(sale_log)
sale.add_command(sale_receipt)
cli.add_command(pos)
