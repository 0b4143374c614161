"""Interactive checkout: cart review, shipping, payment, placement."""

from __future__ import annotations

import click

from pharmacart.application.checkout_flow import CheckoutFlow, preferred_address
from pharmacart.domain.exceptions import DomainException, ValidationError
from pharmacart.domain.model.address import AddressForm
from pharmacart.domain.model.order import PaymentMethod
from pharmacart.infrastructure.bootstrap import checkout_flow
from pharmacart.infrastructure.cli.cart_commands import display_cart
from pharmacart.infrastructure.cli.order_commands import display_order


def _prompt_new_address(flow: CheckoutFlow) -> None:
    """Ask for a new address until it validates and (if asked) saves."""
    while True:
        form = AddressForm(
            street=click.prompt("Street"),
            city=click.prompt("City"),
            state=click.prompt("State"),
            zip_code=click.prompt("Postal code"),
            country=click.prompt("Country"),
        )
        save = click.confirm("Save this address for later?", default=False)
        try:
            flow.enter_new_address(form, save=save)
            return
        except ValidationError as exc:
            click.echo(f"Error: {exc}", err=True)
        except DomainException as exc:
            click.echo(f"Could not save address: {exc}", err=True)
            if not click.confirm("Try again?", default=True):
                raise click.Abort()


def _choose_shipping(flow: CheckoutFlow, address_id: int | None) -> None:
    if address_id is not None:
        flow.select_saved_address(address_id)
        return

    addresses = flow.saved_addresses()
    if not addresses:
        _prompt_new_address(flow)
        return

    click.echo("Saved addresses:")
    for addr in addresses:
        marker = " (default)" if addr.is_default else ""
        click.echo(f"  [{addr.id}] {addr.formatted}{marker}")
    click.echo("  [new] Use a new address")

    preselected = preferred_address(addresses)
    choice = click.prompt("Ship to", default=str(preselected.id))
    if choice.strip().lower() == "new":
        _prompt_new_address(flow)
        return
    try:
        flow.select_saved_address(int(choice))
    except ValueError:
        raise click.BadParameter(f"Invalid address choice '{choice}'.")


def _place_with_retry(flow: CheckoutFlow) -> None:
    while True:
        try:
            flow.place_order()
            return
        except DomainException as exc:
            click.echo(f"Failed to place order: {exc}", err=True)
            if not click.confirm("Retry?", default=True):
                raise click.ClickException("Order not placed.")


@click.command("checkout")
@click.option("--address-id", type=int, default=None, help="Ship to this saved address.")
@click.option(
    "--payment",
    type=click.Choice([m.value for m in PaymentMethod], case_sensitive=False),
    default=None,
    help="Payment method.",
)
@click.option("--yes", is_flag=True, default=False, help="Place the order without confirming.")
def checkout(address_id: int | None, payment: str | None, yes: bool) -> None:
    """Check out the cart and place an order."""
    flow = checkout_flow()

    try:
        review = flow.start()
        click.echo("Order summary")
        display_cart(review.cart)
        click.echo()
        _choose_shipping(flow, address_id)

        if payment is None:
            payment = click.prompt(
                "Payment method",
                type=click.Choice([m.value for m in PaymentMethod], case_sensitive=False),
                default=PaymentMethod.CASH_ON_DELIVERY.value,
            )
        state = flow.select_payment(payment)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Ship to:  {state.draft.shipping_address}")
    click.echo(f"Payment:  {state.draft.payment_method.label}")
    click.echo(f"Total:    {state.cart.total}")

    if not yes and not click.confirm("Place order?", default=True):
        flow.abandon()
        click.echo("Checkout cancelled.")
        return

    _place_with_retry(flow)

    click.echo()
    click.echo(f"Order #{flow.order_id} placed. Thank you!")
    display_order(flow.state.order)
