"""CLI commands for the cart."""

from __future__ import annotations

import click

from pharmacart.application.dto import CartSummaryDTO
from pharmacart.domain.exceptions import DomainException
from pharmacart.infrastructure.bootstrap import cart_service


def display_cart(summary: CartSummaryDTO) -> None:
    """Shared cart table for the cart, added-to-cart and checkout views."""
    if summary.is_empty:
        click.echo("Your cart is empty.")
        return

    click.echo(f"  {'Line':<5} {'Product':<24} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*58}")
    for line in summary.lines:
        click.echo(
            f"  {line.line_id:<5} {line.product_name:<24} {line.quantity:>5} "
            f"{line.unit_price:>10} {line.charged_total:>10}"
        )
        if line.free_units > 0:
            was = f"was {line.list_total}, " if line.is_discounted else ""
            click.echo(f"  {'':<5} {was}includes {line.free_units} free")
    click.echo(f"  {'-'*58}")
    click.echo(f"  {'Total (' + str(summary.item_count) + ' items)':<36} {summary.total:>22}")


@click.command("add")
@click.option("--item", "item_id", required=True, help="Catalog item ID.")
@click.option("--quantity", default=1, show_default=True, type=int, help="Units to add.")
def cart_add(item_id: str, quantity: int) -> None:
    """Add a catalog item to the cart."""
    try:
        summary = cart_service().add_item(item_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Added to cart.")
    click.echo()
    display_cart(summary)


@click.command("show")
def cart_show() -> None:
    """Show the cart with bundle pricing applied."""
    display_cart(cart_service().get_cart())


@click.command("update")
@click.option("--line", "line_id", required=True, type=int, help="Cart line ID.")
@click.option("--quantity", required=True, type=int, help="New quantity.")
def cart_update(line_id: int, quantity: int) -> None:
    """Change the quantity of a cart line."""
    try:
        summary = cart_service().update_quantity(line_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_cart(summary)


@click.command("remove")
@click.option("--line", "line_id", required=True, type=int, help="Cart line ID.")
def cart_remove(line_id: int) -> None:
    """Remove a line from the cart."""
    try:
        summary = cart_service().remove_line(line_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Line #{line_id} removed.")
    display_cart(summary)


@click.command("clear")
def cart_clear() -> None:
    """Empty the cart."""
    cart_service().clear()
    click.echo("Cart cleared.")
