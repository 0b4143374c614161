"""Abstract repository for the Cart aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pharmacart.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def get(self) -> Cart:
        """Return the current cart, empty if none was saved yet."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist the cart lines."""
