"""JSON-file-backed implementation of CartRepository.

Only line ids, item ids and quantities are stored. Items are re-read
from the catalog on load so prices and offers are always current.
Lines whose item has left the catalog are dropped.
"""

from __future__ import annotations

import json
from pathlib import Path

from pharmacart.domain.model.cart import Cart, CartLine
from pharmacart.domain.repository.cart_repository import CartRepository
from pharmacart.domain.repository.catalog_repository import CatalogRepository


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path, catalog_repo: CatalogRepository) -> None:
        self._file_path = file_path
        self._catalog_repo = catalog_repo
        self._ensure_file()

    # --- CartRepository interface ---------------------------------------------

    def get(self) -> Cart:
        lines: list[CartLine] = []
        for raw in self._load_raw():
            item = self._catalog_repo.get_by_id(raw["item_id"])
            if item is None:
                continue
            lines.append(CartLine(id=raw["line_id"], item=item, quantity=raw["quantity"]))
        return Cart(lines=lines)

    def save(self, cart: Cart) -> None:
        self._persist_raw(
            [
                {
                    "line_id": line.id,
                    "item_id": line.item.id,
                    "quantity": line.quantity,
                }
                for line in cart.lines
            ]
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(records, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
