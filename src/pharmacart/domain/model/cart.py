"""Cart aggregate — the shopper's lines before checkout.

The cart keeps exactly one line per catalog item: adding an item that
is already in the cart tops up its existing line. Stock is checked
against the resulting line quantity, not just the increment.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pharmacart.domain.exceptions import EntityNotFoundError, ValidationError
from pharmacart.domain.model.catalog_item import CatalogItem
from pharmacart.domain.model.value_objects import Money, Quantity
from pharmacart.domain.service import bundle_pricing


@dataclass
class CartLine:
    id: int
    item: CatalogItem
    quantity: int

    @property
    def charged_total(self) -> Money:
        return bundle_pricing.charged_total(self.item, self.quantity)


@dataclass
class Cart:
    """Aggregate root for the shopping cart.

    Invariants:
    - at most one line per catalog item id
    - every line quantity is a positive integer within the item's stock
    """

    lines: list[CartLine] = field(default_factory=list)

    # --- Mutations ------------------------------------------------------------

    def add_item(self, item: CatalogItem, quantity: int) -> CartLine:
        """Add *quantity* units of *item*, merging into an existing line."""
        qty = Quantity(quantity).value

        existing = self._find_by_item(item.id)
        new_quantity = qty if existing is None else existing.quantity + qty
        self._assert_stock(item, new_quantity)

        if existing is not None:
            existing.quantity = new_quantity
            return existing

        line = CartLine(id=self._next_line_id(), item=item, quantity=qty)
        self.lines.append(line)
        return line

    def update_quantity(self, line_id: int, quantity: int) -> CartLine:
        qty = Quantity(quantity).value
        line = self.get_line(line_id)
        self._assert_stock(line.item, qty)
        line.quantity = qty
        return line

    def remove_line(self, line_id: int) -> None:
        line = self.get_line(line_id)
        self.lines.remove(line)

    def clear(self) -> None:
        self.lines.clear()

    # --- Queries --------------------------------------------------------------

    def get_line(self, line_id: int) -> CartLine:
        for line in self.lines:
            if line.id == line_id:
                return line
        raise EntityNotFoundError(f"Cart line #{line_id} not found")

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def item_count(self) -> int:
        """Total units across all lines (the cart badge number)."""
        return sum(line.quantity for line in self.lines)

    @property
    def total(self) -> Money:
        return bundle_pricing.cart_total(self.lines)

    # --- Internal helpers -----------------------------------------------------

    def _find_by_item(self, item_id: str) -> CartLine | None:
        for line in self.lines:
            if line.item.id == item_id:
                return line
        return None

    def _next_line_id(self) -> int:
        return max((line.id for line in self.lines), default=0) + 1

    @staticmethod
    def _assert_stock(item: CatalogItem, quantity: int) -> None:
        if not item.in_stock_for(quantity):
            raise ValidationError(f"Insufficient stock for product: {item.name}")
