"""Application service: saved shipping addresses.

The first address a shopper ever saves becomes the default. Saving a
later address as default moves the flag; otherwise it stays where it
is.
"""

from __future__ import annotations

import logging

from pharmacart.application.dto import AddressDTO
from pharmacart.application.ports import AddressPort
from pharmacart.domain.exceptions import EntityNotFoundError
from pharmacart.domain.model.address import Address, AddressForm
from pharmacart.domain.repository.address_repository import AddressRepository

logger = logging.getLogger("pharmacart")


class AddressBook(AddressPort):

    def __init__(self, address_repo: AddressRepository) -> None:
        self._address_repo = address_repo

    def list_addresses(self) -> list[AddressDTO]:
        return [AddressDTO.from_domain(a) for a in self._address_repo.list_all()]

    def get_address(self, address_id: int) -> AddressDTO:
        address = self._address_repo.get_by_id(address_id)
        if address is None:
            raise EntityNotFoundError(f"Address #{address_id} not found")
        return AddressDTO.from_domain(address)

    def save_address(self, form: AddressForm, make_default: bool = False) -> AddressDTO:
        existing = self._address_repo.list_all()

        if not existing:
            make_default = True

        address = Address.from_form(form, is_default=make_default)
        self._address_repo.save(address)
        if make_default:
            self._unset_defaults(existing)
        logger.info("address saved id=%s default=%s", address.id, address.is_default)
        return AddressDTO.from_domain(address)

    def _unset_defaults(self, addresses: list[Address]) -> None:
        for address in addresses:
            if address.is_default:
                address.is_default = False
                self._address_repo.save(address)
