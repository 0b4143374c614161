import logging

import click

from pharmacart.infrastructure.cli.address_commands import address_add, address_list
from pharmacart.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from pharmacart.infrastructure.cli.catalog_commands import catalog_list
from pharmacart.infrastructure.cli.checkout_commands import checkout
from pharmacart.infrastructure.cli.order_commands import order_list, order_show
from pharmacart.infrastructure.config import load_settings


@click.group()
def cli() -> None:
    """pharmacart — pharmacy cart and checkout"""
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def catalog() -> None:
    """Browse the catalog."""


@cli.group()
def cart() -> None:
    """Manage the cart."""


@cli.group()
def address() -> None:
    """Manage saved shipping addresses."""


@cli.group()
def order() -> None:
    """View placed orders."""


# Register subcommands
catalog.add_command(catalog_list)
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
address.add_command(address_add)
address.add_command(address_list)
order.add_command(order_list)
order.add_command(order_show)
cli.add_command(checkout)
