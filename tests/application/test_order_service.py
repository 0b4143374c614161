"""Integration tests for the PlaceOrder use case."""

import pytest

from pharmacart.application.cart_service import CartService
from pharmacart.application.order_service import OrderService
from pharmacart.application.show_order import ListOrdersHandler, ShowOrderHandler
from pharmacart.domain.exceptions import EmptyCartError, EntityNotFoundError, ValidationError
from pharmacart.domain.model.catalog_item import CatalogItem
from pharmacart.domain.model.order import OrderStatus, PaymentMethod
from pharmacart.domain.model.value_objects import Money
from tests.fakes import FakeCartRepository, FakeCatalogRepository, FakeOrderRepository

ADDRESS = "12 Main St, Springfield, IL 62701, USA"


def _setup():
    catalog = FakeCatalogRepository([
        CatalogItem(
            id="1",
            name="Paracetamol",
            unit_price=Money.of("10.00"),
            stock_quantity=20,
            has_bundle_offer=True,
            bundle_buy_quantity=3,
            bundle_free_quantity=1,
            bundle_price=Money.of("27.00"),
        ),
        CatalogItem(id="2", name="Vitamin C", unit_price=Money.of("8.50"), stock_quantity=5),
    ])
    cart_repo = FakeCartRepository()
    order_repo = FakeOrderRepository()
    cart = CartService(cart_repo, catalog)
    orders = OrderService(order_repo, cart_repo, catalog)
    return cart, orders, order_repo, catalog


class TestPlaceOrderHappyPath:

    def test_total_matches_cart_total(self):
        cart, orders, _, _ = _setup()
        cart.add_item("1", 7)
        cart.add_item("2", 2)
        shown = cart.get_cart().total

        dto = orders.create_order(ADDRESS, PaymentMethod.CASH_ON_DELIVERY)

        assert dto.total == shown == "$74.00"
        assert dto.items[0].free_units == 1
        assert dto.status == OrderStatus.PENDING.value
        assert dto.payment_method == "COD"

    def test_assigns_sequential_ids(self):
        cart, orders, _, _ = _setup()
        cart.add_item("1", 1)
        first = orders.create_order(ADDRESS, PaymentMethod.ONLINE)
        cart.add_item("1", 1)
        second = orders.create_order(ADDRESS, PaymentMethod.ONLINE)
        assert second.id == first.id + 1

    def test_clears_cart_and_deducts_stock(self):
        cart, orders, _, catalog = _setup()
        cart.add_item("1", 4)
        orders.create_order(ADDRESS, PaymentMethod.CASH_ON_DELIVERY)
        assert cart.get_cart().is_empty
        assert catalog.get_by_id("1").stock_quantity == 16

    def test_keeps_address_reference(self):
        cart, orders, order_repo, _ = _setup()
        cart.add_item("2", 1)
        dto = orders.create_order(ADDRESS, PaymentMethod.CASH_ON_DELIVERY, address_id=3)
        assert order_repo.get_by_id(dto.id).address_id == 3

    def test_order_history(self):
        cart, orders, order_repo, _ = _setup()
        cart.add_item("2", 1)
        dto = orders.create_order(ADDRESS, PaymentMethod.CASH_ON_DELIVERY)
        assert ShowOrderHandler(order_repo).handle(dto.id) == dto
        assert [o.id for o in ListOrdersHandler(order_repo).handle()] == [dto.id]


class TestPlaceOrderFailures:

    def test_empty_cart_rejected(self):
        _, orders, _, _ = _setup()
        with pytest.raises(EmptyCartError):
            orders.create_order(ADDRESS, PaymentMethod.CASH_ON_DELIVERY)

    def test_stock_shortage_leaves_everything_untouched(self):
        cart, orders, order_repo, catalog = _setup()
        cart.add_item("1", 4)
        cart.add_item("2", 5)
        catalog.get_by_id("2").stock_quantity = 1

        with pytest.raises(ValidationError, match="Insufficient stock for product: Vitamin C"):
            orders.create_order(ADDRESS, PaymentMethod.CASH_ON_DELIVERY)

        assert catalog.get_by_id("1").stock_quantity == 20
        assert cart.get_cart().item_count == 9
        assert order_repo.list_all() == []

    def test_blank_address_rejected_before_any_write(self):
        cart, orders, order_repo, catalog = _setup()
        cart.add_item("1", 1)
        with pytest.raises(ValidationError, match="Shipping address is required"):
            orders.create_order("  ", PaymentMethod.CASH_ON_DELIVERY)
        assert catalog.get_by_id("1").stock_quantity == 20
        assert order_repo.list_all() == []

    def test_show_unknown_order(self):
        with pytest.raises(EntityNotFoundError, match="Order #42 not found"):
            ShowOrderHandler(FakeOrderRepository()).handle(42)


class _UnwritableOrderRepository(FakeOrderRepository):

    def save(self, order):
        raise OSError("disk full")


class _UnwritableCartRepository(FakeCartRepository):

    def __init__(self) -> None:
        super().__init__()
        self.broken = False

    def save(self, cart):
        if self.broken:
            raise OSError("disk full")
        super().save(cart)


class TestPlaceOrderRollback:

    def test_failed_order_save_restores_stock(self):
        catalog = FakeCatalogRepository([
            CatalogItem(id="1", name="Paracetamol", unit_price=Money.of("10.00"), stock_quantity=50),
        ])
        cart_repo = FakeCartRepository()
        order_repo = _UnwritableOrderRepository()
        CartService(cart_repo, catalog).add_item("1", 4)

        with pytest.raises(OSError):
            OrderService(order_repo, cart_repo, catalog).create_order(
                ADDRESS, PaymentMethod.CASH_ON_DELIVERY
            )

        assert catalog.get_by_id("1").stock_quantity == 50
        assert cart_repo.get().item_count == 4

    def test_failed_cart_clear_removes_the_order(self):
        catalog = FakeCatalogRepository([
            CatalogItem(id="1", name="Paracetamol", unit_price=Money.of("10.00"), stock_quantity=50),
        ])
        cart_repo = _UnwritableCartRepository()
        order_repo = FakeOrderRepository()
        orders = OrderService(order_repo, cart_repo, catalog)
        CartService(cart_repo, catalog).add_item("1", 4)
        cart_repo.broken = True

        with pytest.raises(OSError):
            orders.create_order(ADDRESS, PaymentMethod.CASH_ON_DELIVERY)

        assert order_repo.list_all() == []
        assert catalog.get_by_id("1").stock_quantity == 50
        assert cart_repo.get().item_count == 4

        cart_repo.broken = False
        orders.create_order(ADDRESS, PaymentMethod.CASH_ON_DELIVERY)
        assert len(order_repo.list_all()) == 1
