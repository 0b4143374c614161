"""Abstract repository for saved addresses."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pharmacart.domain.model.address import Address


class AddressRepository(ABC):

    @abstractmethod
    def get_by_id(self, address_id: int) -> Address | None:
        """Return an address by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Address]:
        """Return saved addresses in the order they were created."""

    @abstractmethod
    def save(self, address: Address) -> None:
        """Persist a new or updated address, assigning an ID if needed."""
