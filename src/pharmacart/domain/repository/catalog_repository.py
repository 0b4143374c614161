"""Abstract repository for CatalogItem records.

Defined in the domain layer so the domain never depends on
infrastructure. The catalog is owned elsewhere; the ordering core only
reads items and, when an order is placed, writes back reduced stock.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pharmacart.domain.model.catalog_item import CatalogItem


class CatalogRepository(ABC):

    @abstractmethod
    def get_by_id(self, item_id: str) -> CatalogItem | None:
        """Return a catalog item by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[CatalogItem]:
        """Return every item in the catalog."""

    @abstractmethod
    def save(self, item: CatalogItem) -> None:
        """Persist an updated catalog item (stock changes)."""
