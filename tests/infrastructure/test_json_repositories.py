"""Tests for the JSON-file repositories, using pytest's tmp_path."""

import json
from decimal import Decimal

from pharmacart.domain.model.address import Address
from pharmacart.domain.model.cart import Cart
from pharmacart.domain.model.order import Order, OrderLineItem, PaymentMethod
from pharmacart.domain.model.value_objects import Money
from pharmacart.infrastructure.persistence.json_address_repository import JsonAddressRepository
from pharmacart.infrastructure.persistence.json_cart_repository import JsonCartRepository
from pharmacart.infrastructure.persistence.json_catalog_repository import JsonCatalogRepository
from pharmacart.infrastructure.persistence.json_order_repository import JsonOrderRepository

CATALOG = [
    {
        "id": "1",
        "name": "Paracetamol 500mg",
        "price": "10.00",
        "stock_quantity": 120,
        "is_bundle_offer": True,
        "bundle_buy_quantity": 3,
        "bundle_free_quantity": 1,
        "bundle_price": "27.00",
    },
    {"id": "2", "name": "Vitamin C 1000mg", "price": "8.50", "stock_quantity": 60},
]


def _catalog(tmp_path) -> JsonCatalogRepository:
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(CATALOG), encoding="utf-8")
    return JsonCatalogRepository(path)


class TestCatalogRepository:

    def test_reads_bundle_fields(self, tmp_path):
        item = _catalog(tmp_path).get_by_id("1")
        assert item.has_active_bundle
        assert item.bundle_price == Money.of("27.00")
        assert item.unit_price.amount == Decimal("10.00")

    def test_missing_bundle_fields_default_to_none(self, tmp_path):
        item = _catalog(tmp_path).get_by_id("2")
        assert not item.has_bundle_offer
        assert item.bundle_price is None

    def test_save_persists_stock(self, tmp_path):
        repo = _catalog(tmp_path)
        item = repo.get_by_id("1")
        item.stock_quantity = 100
        repo.save(item)
        assert JsonCatalogRepository(tmp_path / "catalog.json").get_by_id("1").stock_quantity == 100

    def test_creates_missing_file(self, tmp_path):
        repo = JsonCatalogRepository(tmp_path / "nested" / "catalog.json")
        assert repo.list_all() == []


class TestCartRepository:

    def test_round_trip_rehydrates_items(self, tmp_path):
        catalog = _catalog(tmp_path)
        repo = JsonCartRepository(tmp_path / "cart.json", catalog)
        cart = Cart()
        cart.add_item(catalog.get_by_id("1"), 4)
        repo.save(cart)

        loaded = repo.get()
        assert loaded.lines[0].item.name == "Paracetamol 500mg"
        assert loaded.total == Money.of("27.00")

    def test_drops_lines_for_items_gone_from_catalog(self, tmp_path):
        catalog = _catalog(tmp_path)
        path = tmp_path / "cart.json"
        path.write_text(json.dumps([{"line_id": 1, "item_id": "99", "quantity": 2}]), encoding="utf-8")
        assert JsonCartRepository(path, catalog).get().is_empty


class TestAddressRepository:

    def test_assigns_ids_and_updates_in_place(self, tmp_path):
        repo = JsonAddressRepository(tmp_path / "addresses.json")
        first = Address(None, "12 Main St", "Springfield", "IL", "62701", "USA", is_default=True)
        repo.save(first)
        second = Address(None, "1 Plant Rd", "Shelbyville", "IL", "62565", "USA")
        repo.save(second)
        assert (first.id, second.id) == (1, 2)

        first.is_default = False
        repo.save(first)
        assert [a.is_default for a in repo.list_all()] == [False, False]


class TestOrderRepository:

    def test_persists_price_snapshot(self, tmp_path):
        catalog = _catalog(tmp_path)
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = Order.create(
            items=[OrderLineItem.snapshot(catalog.get_by_id("1"), 7)],
            shipping_address="12 Main St, Springfield, IL 62701, USA",
            payment_method=PaymentMethod.CASH_ON_DELIVERY,
            address_id=1,
        )
        repo.save(order)

        loaded = repo.get_by_id(order.id)
        assert loaded.total == Money.of("57.00")
        assert loaded.items[0].free_units == 1
        assert loaded.payment_method is PaymentMethod.CASH_ON_DELIVERY
        assert loaded.address_id == 1
        assert repo.next_id() == order.id + 1
