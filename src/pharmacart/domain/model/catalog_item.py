"""CatalogItem — a product as the cart and checkout see it.

Catalog items are owned by the catalog collaborator. The ordering core
only reads them: price, stock and the optional "buy N get M free"
bundle offer that feeds the pricing engine.
"""

from __future__ import annotations

from dataclasses import dataclass

from pharmacart.domain.model.value_objects import Money


@dataclass
class CatalogItem:
    """A product in the pharmacy catalog.

    A bundle offer is charged as one flat ``bundle_price`` per complete
    group of ``bundle_buy_quantity + bundle_free_quantity`` units. The
    offer only counts when the flag is set *and* every bundle field is
    present and usable; otherwise the item is priced per unit.
    """

    id: str
    name: str
    unit_price: Money
    stock_quantity: int = 0
    has_bundle_offer: bool = False
    bundle_buy_quantity: int | None = None
    bundle_free_quantity: int | None = None
    bundle_price: Money | None = None

    @property
    def bundle_unit_size(self) -> int | None:
        """Units in one complete bundle group, or None if no usable offer."""
        if not self.has_bundle_offer:
            return None
        if self.bundle_price is None or self.bundle_price.amount <= 0:
            return None
        buy, free = self.bundle_buy_quantity, self.bundle_free_quantity
        if not buy or not free or buy < 0 or free < 0:
            return None
        return buy + free

    @property
    def has_active_bundle(self) -> bool:
        return self.bundle_unit_size is not None

    def in_stock_for(self, quantity: int) -> bool:
        return self.stock_quantity >= quantity

    def describe_offer(self) -> str:
        """Short label such as 'Buy 3 get 1 free for $27.00'."""
        if not self.has_active_bundle:
            return ""
        return (
            f"Buy {self.bundle_buy_quantity} get {self.bundle_free_quantity} free "
            f"for {self.bundle_price}"
        )
