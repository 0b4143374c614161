"""Checkout flow: cart -> shipping -> payment -> placed order.

``CheckoutFlow`` is the single controller that owns the in-progress
order draft. Each stage is an immutable state value; a transition
either produces the next state or raises and leaves the current one
untouched::

    CartReview --select address--> ShippingSelected
               --select payment--> PaymentSelected
               --create order---> OrderPlaced

A failed order-creation call keeps the flow in ``PaymentSelected``
with the draft intact; the shopper retries explicitly. ``back()``
steps one stage backwards and forgets whatever the later stage held.

I/O and connection errors from a collaborator surface as
``CollaboratorError`` so they are recorded and retryable like any
other collaborator failure.

Only one collaborator call may be outstanding at a time. A second
submission while one is in flight raises ``FlowBusyError``, which is
what a disabled submit button looks like to this layer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, TypeVar, Union

from pharmacart.application.dto import AddressDTO, CartSummaryDTO, OrderDTO
from pharmacart.application.ports import AddressPort, CartPort, OrderPort
from pharmacart.domain.exceptions import (
    CollaboratorError,
    DomainException,
    EmptyCartError,
    EntityNotFoundError,
    FlowBusyError,
    InvalidTransitionError,
    ValidationError,
)
from pharmacart.domain.model.address import AddressForm
from pharmacart.domain.model.order import PaymentMethod

logger = logging.getLogger("pharmacart")

T = TypeVar("T")


@dataclass(frozen=True)
class OrderDraft:
    """Order data collected so far; nothing is persisted until placement."""

    shipping_address: str | None = None
    address_id: int | None = None
    payment_method: PaymentMethod | None = None


# --- States -------------------------------------------------------------------


@dataclass(frozen=True)
class CartReview:
    cart: CartSummaryDTO
    draft: OrderDraft = OrderDraft()


@dataclass(frozen=True)
class ShippingSelected:
    cart: CartSummaryDTO
    draft: OrderDraft


@dataclass(frozen=True)
class PaymentSelected:
    cart: CartSummaryDTO
    draft: OrderDraft


@dataclass(frozen=True)
class OrderPlaced:
    order: OrderDTO


CheckoutState = Union[CartReview, ShippingSelected, PaymentSelected, OrderPlaced]


def preferred_address(addresses: list[AddressDTO]) -> AddressDTO | None:
    """The address to preselect: the default one, else the first saved."""
    for address in addresses:
        if address.is_default:
            return address
    return addresses[0] if addresses else None


class CheckoutFlow:

    def __init__(
        self,
        cart: CartPort,
        addresses: AddressPort,
        orders: OrderPort,
    ) -> None:
        self._cart = cart
        self._addresses = addresses
        self._orders = orders
        self._state: CheckoutState | None = None
        self._busy = False
        self._session = 0
        self.last_error: str | None = None
        self.cart_item_count = 0

    # --- Introspection --------------------------------------------------------

    @property
    def state(self) -> CheckoutState | None:
        return self._state

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def draft(self) -> OrderDraft | None:
        if self._state is None or isinstance(self._state, OrderPlaced):
            return None
        return self._state.draft

    @property
    def order_id(self) -> int | None:
        if isinstance(self._state, OrderPlaced):
            return self._state.order.id
        return None

    # --- Cart -----------------------------------------------------------------

    def start(self) -> CartReview:
        """Enter checkout from the cart. An empty cart cannot proceed."""
        summary = self._call(self._cart.get_cart)
        self.cart_item_count = summary.item_count
        self.last_error = None
        if summary.is_empty:
            self._state = None
            raise EmptyCartError("Your cart is empty")
        self._state = CartReview(cart=summary)
        return self._state

    def abandon(self) -> None:
        """Leave checkout. A call still in flight is ignored when it returns."""
        self._session += 1
        self._state = None

    # --- Shipping -------------------------------------------------------------

    def saved_addresses(self) -> list[AddressDTO]:
        return self._call(self._addresses.list_addresses)

    def select_saved_address(self, address_id: int) -> ShippingSelected:
        state = self._require(CartReview)
        session = self._session
        addresses = self._call(self._addresses.list_addresses)
        self._assert_session(session)

        for address in addresses:
            if address.id == address_id:
                return self._enter_shipping(state, address.formatted, address.id)
        raise EntityNotFoundError(f"Address #{address_id} not found")

    def enter_new_address(self, form: AddressForm, save: bool = False) -> ShippingSelected:
        """Ship to a typed-in address, optionally saving it for later.

        The form is validated before any call is made. If saving fails
        the flow stays at the cart stage and the error propagates.
        """
        state = self._require(CartReview)
        self._assert_idle()
        clean = form.validate()

        if not save:
            return self._enter_shipping(state, clean.formatted(), None)

        session = self._session
        try:
            saved = self._call(self._addresses.save_address, clean)
        except DomainException as exc:
            self.last_error = str(exc)
            logger.warning("address save failed: %s", exc)
            raise
        self._assert_session(session)
        return self._enter_shipping(state, saved.formatted, saved.id)

    # --- Payment --------------------------------------------------------------

    def select_payment(self, method: PaymentMethod | str) -> PaymentSelected:
        state = self._require(ShippingSelected, PaymentSelected)
        self._assert_idle()
        chosen = PaymentMethod.parse(method)
        self._state = PaymentSelected(
            cart=state.cart,
            draft=replace(state.draft, payment_method=chosen),
        )
        return self._state

    # --- Placement ------------------------------------------------------------

    def place_order(self) -> OrderDTO:
        """Issue the single order-creation call for the current draft.

        On failure the state and draft are left as they were, the reason
        is kept in ``last_error`` and the exception propagates.
        """
        if isinstance(self._state, ShippingSelected):
            raise ValidationError("Please select a payment method")
        state = self._require(PaymentSelected)
        self._assert_idle()
        draft = state.draft

        session = self._session
        try:
            order = self._call(
                self._orders.create_order,
                draft.shipping_address,
                draft.payment_method,
                draft.address_id,
            )
        except DomainException as exc:
            self.last_error = str(exc)
            logger.warning("order creation failed: %s", exc)
            raise

        if session != self._session:
            logger.info("order %s placed after checkout was abandoned", order.id)
            return order

        self._state = OrderPlaced(order=order)
        self.cart_item_count = 0
        self.last_error = None
        return order

    # --- Navigation -----------------------------------------------------------

    def back(self) -> CheckoutState:
        """Step back one stage, discarding the data of the stage left."""
        self._assert_idle()
        state = self._state
        if isinstance(state, PaymentSelected):
            self._state = ShippingSelected(
                cart=state.cart,
                draft=replace(state.draft, payment_method=None),
            )
        elif isinstance(state, ShippingSelected):
            self._state = CartReview(cart=state.cart)
        else:
            raise InvalidTransitionError(f"Cannot go back from {_stage_name(state)}")
        self.last_error = None
        return self._state

    # --- Internal helpers -----------------------------------------------------

    def _enter_shipping(
        self, state: CartReview, shipping_address: str, address_id: int | None
    ) -> ShippingSelected:
        self._state = ShippingSelected(
            cart=state.cart,
            draft=OrderDraft(shipping_address=shipping_address, address_id=address_id),
        )
        self.last_error = None
        return self._state

    def _require(self, *allowed: type):
        if not isinstance(self._state, allowed):
            expected = " or ".join(cls.__name__ for cls in allowed)
            raise InvalidTransitionError(
                f"Checkout is at {_stage_name(self._state)}, expected {expected}"
            )
        return self._state

    def _assert_session(self, session: int) -> None:
        if session != self._session:
            raise InvalidTransitionError("Checkout was abandoned")

    def _assert_idle(self) -> None:
        if self._busy:
            raise FlowBusyError("A checkout request is already in progress")

    def _call(self, fn: Callable[..., T], *args) -> T:
        self._assert_idle()
        self._busy = True
        try:
            return fn(*args)
        except OSError as exc:
            raise CollaboratorError(f"Service unavailable: {exc}") from exc
        finally:
            self._busy = False


def _stage_name(state: CheckoutState | None) -> str:
    return "no active checkout" if state is None else type(state).__name__
