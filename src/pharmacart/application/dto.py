"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI, the checkout flow and the application
services without exposing domain internals. Money is pre-formatted
(e.g. "$27.00") because every consumer only displays it.
"""

from __future__ import annotations

from dataclasses import dataclass

from pharmacart.domain.model.address import Address
from pharmacart.domain.model.order import Order


@dataclass(frozen=True)
class CartLineDTO:
    """A priced cart line, as shown in the cart and checkout summaries."""

    line_id: int
    item_id: str
    product_name: str
    quantity: int
    unit_price: str
    list_total: str  # before any bundle offer
    charged_total: str
    free_units: int
    is_discounted: bool
    offer: str = ""


@dataclass(frozen=True)
class CartSummaryDTO:
    lines: list[CartLineDTO]
    item_count: int
    total: str

    @property
    def is_empty(self) -> bool:
        return not self.lines


@dataclass(frozen=True)
class AddressDTO:
    id: int
    street: str
    city: str
    state: str
    zip_code: str
    country: str
    is_default: bool
    formatted: str

    @staticmethod
    def from_domain(address: Address) -> AddressDTO:
        return AddressDTO(
            id=address.id,  # type: ignore[arg-type]
            street=address.street,
            city=address.city,
            state=address.state,
            zip_code=address.zip_code,
            country=address.country,
            is_default=address.is_default,
            formatted=address.formatted(),
        )


@dataclass(frozen=True)
class OrderLineItemDTO:
    product_name: str
    quantity: int
    unit_price: str
    line_total: str
    free_units: int


@dataclass(frozen=True)
class OrderDTO:
    """Output: a placed order as displayed to the user."""

    id: int
    status: str
    payment_method: str
    payment_status: str
    shipping_address: str
    address_id: int | None
    items: list[OrderLineItemDTO]
    total: str
    created_at: str

    @staticmethod
    def from_domain(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            status=order.status.value,
            payment_method=order.payment_method.value,
            payment_status=order.payment_status.value,
            shipping_address=order.shipping_address,
            address_id=order.address_id,
            items=[
                OrderLineItemDTO(
                    product_name=item.product_name,
                    quantity=item.quantity.value,
                    unit_price=str(item.unit_price),
                    line_total=str(item.line_total),
                    free_units=item.free_units,
                )
                for item in order.items
            ],
            total=str(order.total),
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        )
