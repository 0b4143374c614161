"""CLI commands for placed orders."""

from __future__ import annotations

import click

from pharmacart.application.dto import OrderDTO
from pharmacart.application.show_order import ListOrdersHandler, ShowOrderHandler
from pharmacart.domain.exceptions import DomainException
from pharmacart.infrastructure.bootstrap import order_repository


def display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status}, payment={dto.payment_status})")
    click.echo(f"Created:  {dto.created_at}")
    click.echo(f"Ship to:  {dto.shipping_address}")
    click.echo(f"Payment:  {dto.payment_method}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Qty':>5} {'Free':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*58}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<24} {item.quantity:>5} {item.free_units:>5} "
            f"{item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*58}")
    click.echo(f"  {'Order Total':<36} {dto.total:>22}")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of a placed order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_order(dto)


@click.command("list")
def order_list() -> None:
    """List placed orders."""
    orders = ListOrdersHandler(order_repo=order_repository()).handle()

    if not orders:
        click.echo("No orders yet.")
        return

    click.echo(f"{'ID':<6} {'Created':<22} {'Status':<10} {'Payment':<8} {'Total':>10}")
    click.echo("-" * 60)
    for dto in orders:
        click.echo(
            f"{dto.id:<6} {dto.created_at:<22} {dto.status:<10} "
            f"{dto.payment_method:<8} {dto.total:>10}"
        )
