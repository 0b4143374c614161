"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions. Repositories are
built fresh per call so a changed ``PHARMACART_DATA_DIR`` is honoured.
"""

from __future__ import annotations

from pharmacart.application.address_book import AddressBook
from pharmacart.application.cart_service import CartService
from pharmacart.application.checkout_flow import CheckoutFlow
from pharmacart.application.order_service import OrderService
from pharmacart.infrastructure.config import load_settings
from pharmacart.infrastructure.persistence.json_address_repository import (
    JsonAddressRepository,
)
from pharmacart.infrastructure.persistence.json_cart_repository import (
    JsonCartRepository,
)
from pharmacart.infrastructure.persistence.json_catalog_repository import (
    JsonCatalogRepository,
)
from pharmacart.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)


def catalog_repository() -> JsonCatalogRepository:
    return JsonCatalogRepository(load_settings().data_dir / "catalog.json")


def cart_repository() -> JsonCartRepository:
    return JsonCartRepository(
        load_settings().data_dir / "cart.json", catalog_repository()
    )


def address_repository() -> JsonAddressRepository:
    return JsonAddressRepository(load_settings().data_dir / "addresses.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(load_settings().data_dir / "orders.json")


def cart_service() -> CartService:
    return CartService(cart_repo=cart_repository(), catalog_repo=catalog_repository())


def address_book() -> AddressBook:
    return AddressBook(address_repo=address_repository())


def order_service() -> OrderService:
    return OrderService(
        order_repo=order_repository(),
        cart_repo=cart_repository(),
        catalog_repo=catalog_repository(),
    )


def checkout_flow() -> CheckoutFlow:
    return CheckoutFlow(
        cart=cart_service(),
        addresses=address_book(),
        orders=order_service(),
    )
