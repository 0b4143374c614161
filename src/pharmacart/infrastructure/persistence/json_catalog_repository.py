"""JSON-file-backed implementation of CatalogRepository."""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

from pharmacart.domain.model.catalog_item import CatalogItem
from pharmacart.domain.model.value_objects import DEFAULT_CURRENCY, Money
from pharmacart.domain.repository.catalog_repository import CatalogRepository


class JsonCatalogRepository(CatalogRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- CatalogRepository interface ------------------------------------------

    def get_by_id(self, item_id: str) -> CatalogItem | None:
        return self._load().get(str(item_id))

    def list_all(self) -> list[CatalogItem]:
        return list(self._load().values())

    def save(self, item: CatalogItem) -> None:
        items = self._load()
        items[item.id] = item
        self._persist(items)

    # --- Serialization helpers ------------------------------------------------

    @staticmethod
    def _to_domain(raw: dict) -> CatalogItem:
        currency = raw.get("currency", DEFAULT_CURRENCY)
        bundle_price = raw.get("bundle_price")
        return CatalogItem(
            id=str(raw["id"]),
            name=raw["name"],
            unit_price=Money(Decimal(raw["price"]), currency),
            stock_quantity=raw.get("stock_quantity", 0),
            has_bundle_offer=raw.get("is_bundle_offer", False),
            bundle_buy_quantity=raw.get("bundle_buy_quantity"),
            bundle_free_quantity=raw.get("bundle_free_quantity"),
            bundle_price=(
                Money(Decimal(bundle_price), currency) if bundle_price is not None else None
            ),
        )

    @staticmethod
    def _to_raw(item: CatalogItem) -> dict:
        return {
            "id": item.id,
            "name": item.name,
            "price": str(item.unit_price.amount),
            "currency": item.unit_price.currency,
            "stock_quantity": item.stock_quantity,
            "is_bundle_offer": item.has_bundle_offer,
            "bundle_buy_quantity": item.bundle_buy_quantity,
            "bundle_free_quantity": item.bundle_free_quantity,
            "bundle_price": (
                str(item.bundle_price.amount) if item.bundle_price is not None else None
            ),
        }

    def _load(self) -> dict[str, CatalogItem]:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        return {str(entry["id"]): self._to_domain(entry) for entry in raw}

    def _persist(self, items: dict[str, CatalogItem]) -> None:
        raw = [self._to_raw(item) for item in items.values()]
        self._file_path.write_text(
            json.dumps(raw, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
