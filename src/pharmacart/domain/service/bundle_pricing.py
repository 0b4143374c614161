"""Domain service: bundle-promotion pricing.

Pure functions that price one cart or order line for a catalog item
that may carry a "buy N get M free" offer. The cart view, the
added-to-cart summary, the checkout summary and order creation all
price lines through this module, so the charged total and the free-unit
count shown to the customer can never disagree.

Rules:
  - No usable offer (flag off, or a bundle field missing) -> linear
    pricing. Bad promo data never blocks checkout.
  - Quantity below one full group -> linear pricing; the offer never
    applies partially.
  - Otherwise every complete group costs ``bundle_price`` and the
    leftover units are charged at the unit price.

Thresholds are evaluated per line. Quantities of the same item are
never pooled across lines; the cart keeps one line per item.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol

from pharmacart.domain.model.catalog_item import CatalogItem
from pharmacart.domain.model.value_objects import Money, Quantity


class PricedLine(Protocol):
    item: CatalogItem
    quantity: int


@dataclass(frozen=True)
class LinePrice:
    """Breakdown of one priced line."""

    quantity: int
    list_total: Money  # unit price * quantity, before any offer
    charged_total: Money
    free_units: int
    bundle_count: int
    remainder: int

    @property
    def savings(self) -> Money:
        # A mispriced bundle can cost more than list; report no saving then.
        if not self.is_discounted:
            return Money.zero(self.list_total.currency)
        return self.list_total - self.charged_total

    @property
    def is_discounted(self) -> bool:
        return self.charged_total < self.list_total


def _bundle_split(item: CatalogItem, quantity: int) -> tuple[int, int] | None:
    """Return (bundle_count, remainder), or None when the offer does not apply."""
    unit_size = item.bundle_unit_size
    if unit_size is None or quantity < unit_size:
        return None
    return divmod(quantity, unit_size)


def price_line(item: CatalogItem, quantity: int) -> LinePrice:
    """Price *quantity* units of *item*.

    Raises ValidationError if *quantity* is not a positive integer.
    """
    qty = Quantity(quantity).value
    list_total = item.unit_price * qty

    split = _bundle_split(item, qty)
    if split is None:
        return LinePrice(
            quantity=qty,
            list_total=list_total,
            charged_total=list_total,
            free_units=0,
            bundle_count=0,
            remainder=qty,
        )

    bundle_count, remainder = split
    charged = item.bundle_price * bundle_count + item.unit_price * remainder
    return LinePrice(
        quantity=qty,
        list_total=list_total,
        charged_total=charged,
        free_units=bundle_count * item.bundle_free_quantity,
        bundle_count=bundle_count,
        remainder=remainder,
    )


def charged_total(item: CatalogItem, quantity: int) -> Money:
    """Amount to charge for *quantity* units of *item*."""
    return price_line(item, quantity).charged_total


def free_units(item: CatalogItem, quantity: int) -> int:
    """Number of units included free for display ("includes N free")."""
    return price_line(item, quantity).free_units


def cart_total(lines: Iterable[PricedLine]) -> Money:
    """Sum of charged totals over independent lines."""
    return Money.total(charged_total(line.item, line.quantity) for line in lines)
