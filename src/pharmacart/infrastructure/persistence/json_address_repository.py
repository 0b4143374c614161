"""JSON-file-backed implementation of AddressRepository."""

from __future__ import annotations

import json
from pathlib import Path

from pharmacart.domain.model.address import Address
from pharmacart.domain.repository.address_repository import AddressRepository


class JsonAddressRepository(AddressRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- AddressRepository interface ------------------------------------------

    def get_by_id(self, address_id: int) -> Address | None:
        for raw in self._load_raw():
            if raw["id"] == address_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Address]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, address: Address) -> None:
        records = self._load_raw()

        if address.id is None:
            address.id = max((r["id"] for r in records), default=0) + 1

        replaced = False
        for i, raw in enumerate(records):
            if raw["id"] == address.id:
                records[i] = self._to_raw(address)
                replaced = True
                break
        if not replaced:
            records.append(self._to_raw(address))
        self._persist_raw(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(address: Address) -> dict:
        return {
            "id": address.id,
            "street": address.street,
            "city": address.city,
            "state": address.state,
            "zip_code": address.zip_code,
            "country": address.country,
            "default": address.is_default,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Address:
        return Address(
            id=raw["id"],
            street=raw["street"],
            city=raw["city"],
            state=raw["state"],
            zip_code=raw["zip_code"],
            country=raw["country"],
            is_default=raw.get("default", False),
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
