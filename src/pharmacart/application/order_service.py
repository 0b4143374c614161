"""Application service: Place Order use case.

Turns the current cart into an order in one call. Either the whole
thing happens (stock deducted, order stored, cart cleared) or nothing
does: every check runs before the first write, and a failed write
undoes the writes before it.
"""

from __future__ import annotations

import logging

from pharmacart.application.dto import OrderDTO
from pharmacart.application.ports import OrderPort
from pharmacart.domain.model.cart import Cart
from pharmacart.domain.model.order import Order, OrderLineItem, PaymentMethod
from pharmacart.domain.repository.cart_repository import CartRepository
from pharmacart.domain.repository.catalog_repository import CatalogRepository
from pharmacart.domain.repository.order_repository import OrderRepository
from pharmacart.domain.service.stock_service import StockService

logger = logging.getLogger("pharmacart")


class OrderService(OrderPort):

    def __init__(
        self,
        order_repo: OrderRepository,
        cart_repo: CartRepository,
        catalog_repo: CatalogRepository,
    ) -> None:
        self._order_repo = order_repo
        self._cart_repo = cart_repo
        self._catalog_repo = catalog_repo

    def create_order(
        self,
        shipping_address: str,
        payment_method: PaymentMethod,
        address_id: int | None = None,
    ) -> OrderDTO:
        """Place an order for everything in the cart.

        Steps:
        1. Check stock for every line against fresh catalog data.
        2. Snapshot each line's bundle pricing into an OrderLineItem.
        3. Let the Order aggregate validate address, payment and lines.
        4. Deduct stock, persist the order, clear the cart. A failure in
           any of these undoes the writes already made.
        """
        cart = self._cart_repo.get()
        stock = StockService(self._catalog_repo)
        checked = stock.check_cart(cart)

        line_items = [OrderLineItem.snapshot(item, qty) for item, qty in checked]
        order = Order.create(
            items=line_items,
            shipping_address=shipping_address,
            payment_method=payment_method,
            address_id=address_id,
        )

        stock.deduct(checked)
        try:
            self._order_repo.save(order)
            try:
                self._cart_repo.save(Cart())
            except Exception:
                self._order_repo.delete(order.id)
                raise
        except Exception:
            stock.restore(checked)
            logger.error("order placement rolled back: could not persist")
            raise

        logger.info(
            "order placed id=%s total=%s payment=%s",
            order.id, order.total, order.payment_method.value,
        )
        return OrderDTO.from_domain(order)
