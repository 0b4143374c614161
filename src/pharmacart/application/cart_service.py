"""Application service: the shopper's cart.

Every read returns a priced ``CartSummaryDTO`` built through the
bundle pricing engine. The cart page, the added-to-cart summary and
the checkout summary all render this same object.
"""

from __future__ import annotations

import logging

from pharmacart.application.dto import CartLineDTO, CartSummaryDTO
from pharmacart.application.ports import CartPort
from pharmacart.domain.exceptions import EntityNotFoundError
from pharmacart.domain.model.cart import Cart
from pharmacart.domain.repository.cart_repository import CartRepository
from pharmacart.domain.repository.catalog_repository import CatalogRepository
from pharmacart.domain.service import bundle_pricing

logger = logging.getLogger("pharmacart")


class CartService(CartPort):

    def __init__(
        self,
        cart_repo: CartRepository,
        catalog_repo: CatalogRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._catalog_repo = catalog_repo

    def get_cart(self) -> CartSummaryDTO:
        return self.summarize(self._cart_repo.get())

    def add_item(self, item_id: str, quantity: int) -> CartSummaryDTO:
        item = self._catalog_repo.get_by_id(item_id)
        if item is None:
            raise EntityNotFoundError(f"Product with ID '{item_id}' not found")

        cart = self._cart_repo.get()
        line = cart.add_item(item, quantity)
        self._cart_repo.save(cart)
        logger.info("cart add item=%s qty=%s line=%s", item_id, quantity, line.id)
        return self.summarize(cart)

    def update_quantity(self, line_id: int, quantity: int) -> CartSummaryDTO:
        cart = self._cart_repo.get()
        cart.update_quantity(line_id, quantity)
        self._cart_repo.save(cart)
        return self.summarize(cart)

    def remove_line(self, line_id: int) -> CartSummaryDTO:
        cart = self._cart_repo.get()
        cart.remove_line(line_id)
        self._cart_repo.save(cart)
        return self.summarize(cart)

    def clear(self) -> None:
        cart = self._cart_repo.get()
        cart.clear()
        self._cart_repo.save(cart)

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def summarize(cart: Cart) -> CartSummaryDTO:
        lines: list[CartLineDTO] = []
        for line in cart.lines:
            priced = bundle_pricing.price_line(line.item, line.quantity)
            lines.append(
                CartLineDTO(
                    line_id=line.id,
                    item_id=line.item.id,
                    product_name=line.item.name,
                    quantity=line.quantity,
                    unit_price=str(line.item.unit_price),
                    list_total=str(priced.list_total),
                    charged_total=str(priced.charged_total),
                    free_units=priced.free_units,
                    is_discounted=priced.is_discounted,
                    offer=line.item.describe_offer(),
                )
            )
        return CartSummaryDTO(
            lines=lines,
            item_count=cart.item_count,
            total=str(cart.total),
        )
