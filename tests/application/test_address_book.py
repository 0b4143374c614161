"""Integration tests for the address book."""

import pytest

from pharmacart.application.address_book import AddressBook
from pharmacart.domain.exceptions import EntityNotFoundError, ValidationError
from pharmacart.domain.model.address import AddressForm
from tests.fakes import FakeAddressRepository


def _form(street: str = "12 Main St") -> AddressForm:
    return AddressForm(street=street, city="Springfield", state="IL", zip_code="62701", country="USA")


class TestDefaultAddress:

    def test_first_saved_address_becomes_default(self):
        book = AddressBook(FakeAddressRepository())
        saved = book.save_address(_form())
        assert saved.is_default

    def test_second_address_is_not_default(self):
        book = AddressBook(FakeAddressRepository())
        book.save_address(_form("1 First Ave"))
        second = book.save_address(_form("2 Second Ave"))
        assert not second.is_default
        assert [a.is_default for a in book.list_addresses()] == [True, False]

    def test_explicit_default_moves_the_flag(self):
        book = AddressBook(FakeAddressRepository())
        book.save_address(_form("1 First Ave"))
        book.save_address(_form("2 Second Ave"), make_default=True)
        assert [a.is_default for a in book.list_addresses()] == [False, True]

    def test_failed_save_keeps_the_old_default(self):
        repo = _FailingOnNewAddressRepository()
        book = AddressBook(repo)
        book.save_address(_form("1 First Ave"))
        repo.refuse_new = True

        with pytest.raises(OSError):
            book.save_address(_form("2 Second Ave"), make_default=True)

        assert [a.is_default for a in book.list_addresses()] == [True]


class _FailingOnNewAddressRepository(FakeAddressRepository):

    def __init__(self) -> None:
        super().__init__()
        self.refuse_new = False

    def save(self, address):
        if self.refuse_new and address.id is None:
            raise OSError("disk full")
        super().save(address)


class TestSaveAddress:

    def test_assigns_id_and_formats(self):
        book = AddressBook(FakeAddressRepository())
        saved = book.save_address(_form())
        assert saved.id == 1
        assert saved.formatted == "12 Main St, Springfield, IL 62701, USA"

    def test_incomplete_form_rejected(self):
        book = AddressBook(FakeAddressRepository())
        with pytest.raises(ValidationError, match="zip_code"):
            book.save_address(AddressForm("12 Main St", "Springfield", "IL", "", "USA"))
        assert book.list_addresses() == []

    def test_get_unknown_address(self):
        with pytest.raises(EntityNotFoundError, match="Address #4"):
            AddressBook(FakeAddressRepository()).get_address(4)
