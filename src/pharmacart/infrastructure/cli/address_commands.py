"""CLI commands for saved addresses."""

from __future__ import annotations

import click

from pharmacart.domain.exceptions import DomainException
from pharmacart.domain.model.address import AddressForm
from pharmacart.infrastructure.bootstrap import address_book


@click.command("list")
def address_list() -> None:
    """List saved shipping addresses."""
    addresses = address_book().list_addresses()

    if not addresses:
        click.echo("No saved addresses.")
        return

    for addr in addresses:
        marker = " (default)" if addr.is_default else ""
        click.echo(f"#{addr.id}  {addr.formatted}{marker}")


@click.command("add")
@click.option("--street", required=True)
@click.option("--city", required=True)
@click.option("--state", required=True)
@click.option("--zip", "zip_code", required=True, help="Postal code.")
@click.option("--country", required=True)
@click.option("--default", "make_default", is_flag=True, default=False,
              help="Make this the default address.")
def address_add(
    street: str, city: str, state: str, zip_code: str, country: str, make_default: bool
) -> None:
    """Save a new shipping address."""
    form = AddressForm(street=street, city=city, state=state, zip_code=zip_code, country=country)

    try:
        saved = address_book().save_address(form, make_default=make_default)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    marker = " (default)" if saved.is_default else ""
    click.echo(f"Address #{saved.id} saved{marker}: {saved.formatted}")
