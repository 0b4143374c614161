"""CLI commands for browsing the catalog."""

from __future__ import annotations

import click

from pharmacart.infrastructure.bootstrap import catalog_repository


@click.command("list")
def catalog_list() -> None:
    """List catalog items with price, stock and bundle offer."""
    items = catalog_repository().list_all()

    if not items:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Price':>10} {'Stock':>7}  Offer")
    click.echo("-" * 70)
    for item in items:
        click.echo(
            f"{item.id:<6} {item.name:<24} {str(item.unit_price):>10} "
            f"{item.stock_quantity:>7}  {item.describe_offer()}"
        )
