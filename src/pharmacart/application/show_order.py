"""Application service: order history queries."""

from __future__ import annotations

from pharmacart.application.dto import OrderDTO
from pharmacart.domain.exceptions import EntityNotFoundError
from pharmacart.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return OrderDTO.from_domain(order)


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self) -> list[OrderDTO]:
        return [OrderDTO.from_domain(o) for o in self._order_repo.list_all()]
