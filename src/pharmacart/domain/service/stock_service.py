"""Domain service: stock deduction at order placement.

Placing an order touches every catalog item in the cart. The
two-phase approach (validate-then-mutate) means a shortage on the last
line leaves the stock of the earlier lines untouched.
"""

from __future__ import annotations

from pharmacart.domain.exceptions import EntityNotFoundError, ValidationError
from pharmacart.domain.model.cart import Cart
from pharmacart.domain.model.catalog_item import CatalogItem
from pharmacart.domain.repository.catalog_repository import CatalogRepository


class StockService:

    def __init__(self, catalog_repo: CatalogRepository) -> None:
        self._catalog_repo = catalog_repo

    def check_cart(self, cart: Cart) -> list[tuple[CatalogItem, int]]:
        """Phase 1: reload every item and verify stock covers the cart.

        Returns the fresh items paired with the quantity to deduct.
        """
        checked: list[tuple[CatalogItem, int]] = []
        for line in cart.lines:
            item = self._catalog_repo.get_by_id(line.item.id)
            if item is None:
                raise EntityNotFoundError(
                    f"Product '{line.item.name}' is no longer in the catalog"
                )
            if not item.in_stock_for(line.quantity):
                raise ValidationError(f"Insufficient stock for product: {item.name}")
            checked.append((item, line.quantity))
        return checked

    def deduct(self, checked: list[tuple[CatalogItem, int]]) -> None:
        """Phase 2: reduce stock and persist.

        If a save fails part way, the items already saved are put back
        before the error propagates.
        """
        done: list[tuple[CatalogItem, int]] = []
        try:
            for item, qty in checked:
                item.stock_quantity -= qty
                done.append((item, qty))
                self._catalog_repo.save(item)
        except Exception:
            self.restore(done)
            raise

    def restore(self, deducted: list[tuple[CatalogItem, int]]) -> None:
        """Undo a deduction."""
        for item, qty in deducted:
            item.stock_quantity += qty
            self._catalog_repo.save(item)
