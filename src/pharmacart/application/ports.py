"""Collaborator ports used by the checkout flow.

The flow only talks to these interfaces. ``CartService``,
``AddressBook`` and ``OrderService`` implement them locally; a remote
client would implement the same methods and raise
``CollaboratorError`` when the service rejects a call or is unreachable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pharmacart.application.dto import AddressDTO, CartSummaryDTO, OrderDTO
from pharmacart.domain.model.address import AddressForm
from pharmacart.domain.model.order import PaymentMethod


class CartPort(ABC):

    @abstractmethod
    def get_cart(self) -> CartSummaryDTO:
        """Return the current cart, lines in insertion order."""

    @abstractmethod
    def add_item(self, item_id: str, quantity: int) -> CartSummaryDTO:
        """Add units of a catalog item."""

    @abstractmethod
    def update_quantity(self, line_id: int, quantity: int) -> CartSummaryDTO:
        """Set the quantity of an existing line."""

    @abstractmethod
    def remove_line(self, line_id: int) -> CartSummaryDTO:
        """Drop a line from the cart."""

    @abstractmethod
    def clear(self) -> None:
        """Empty the cart."""


class AddressPort(ABC):

    @abstractmethod
    def list_addresses(self) -> list[AddressDTO]:
        """Return the shopper's saved addresses."""

    @abstractmethod
    def save_address(self, form: AddressForm, make_default: bool = False) -> AddressDTO:
        """Save a new address and return it with its identifier."""


class OrderPort(ABC):

    @abstractmethod
    def create_order(
        self,
        shipping_address: str,
        payment_method: PaymentMethod,
        address_id: int | None = None,
    ) -> OrderDTO:
        """Turn the current cart into an order."""
