"""Order aggregate — what a completed checkout turns into.

The Order is an aggregate root that owns its line items. Each line
carries a snapshot of the price it was sold at, including any bundle
discount, so the stored total always matches what the customer saw
at checkout.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from pharmacart.domain.exceptions import EmptyCartError, ValidationError
from pharmacart.domain.model.catalog_item import CatalogItem
from pharmacart.domain.model.value_objects import Money, Quantity
from pharmacart.domain.service import bundle_pricing


class OrderStatus(Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class PaymentStatus(Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


class PaymentMethod(Enum):
    CASH_ON_DELIVERY = "COD"
    ONLINE = "ONLINE"

    @property
    def label(self) -> str:
        return "Cash on Delivery" if self is PaymentMethod.CASH_ON_DELIVERY else "Online Payment"

    @staticmethod
    def parse(raw: PaymentMethod | str | None) -> PaymentMethod:
        """Accept an enum member, its value ('COD') or its name."""
        if isinstance(raw, PaymentMethod):
            return raw
        if raw:
            key = raw.strip().upper()
            for method in PaymentMethod:
                if key in (method.value, method.name):
                    return method
        raise ValidationError(f"Please select a payment method (got {raw!r})")


@dataclass
class OrderLineItem:
    """Price snapshot of one cart line at order-creation time.

    ``charged_total`` and ``free_units`` are locked in when the order is
    created; later price or promotion changes never touch them.
    """

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money
    charged_total: Money
    free_units: int = 0

    @staticmethod
    def snapshot(item: CatalogItem, quantity: int) -> OrderLineItem:
        priced = bundle_pricing.price_line(item, quantity)
        return OrderLineItem(
            product_id=item.id,
            product_name=item.name,
            quantity=Quantity(priced.quantity),
            unit_price=item.unit_price,
            charged_total=priced.charged_total,
            free_units=priced.free_units,
        )

    @property
    def line_total(self) -> Money:
        return self.charged_total


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders; it enforces all
    business rules. The ``__init__`` is kept simple so the repository
    can reconstitute persisted orders without re-validating.
    """

    id: int | None
    items: list[OrderLineItem]
    shipping_address: str
    payment_method: PaymentMethod
    address_id: int | None = None
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        items: list[OrderLineItem],
        shipping_address: str,
        payment_method: PaymentMethod,
        address_id: int | None = None,
    ) -> Order:
        """Create a new order, enforcing all invariants."""
        if not items:
            raise EmptyCartError("Cart is empty")

        if not shipping_address or not shipping_address.strip():
            raise ValidationError("Shipping address is required")

        return Order(
            id=None,
            items=list(items),
            shipping_address=shipping_address.strip(),
            payment_method=PaymentMethod.parse(payment_method),
            address_id=address_id,
        )

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Money:
        return Money.total(item.line_total for item in self.items)

    @property
    def free_units(self) -> int:
        return sum(item.free_units for item in self.items)
