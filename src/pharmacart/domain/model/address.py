"""Saved shipping addresses."""

from __future__ import annotations

from dataclasses import dataclass, fields

from pharmacart.domain.exceptions import ValidationError


@dataclass(frozen=True)
class AddressForm:
    """A postal address as typed in by the shopper, not yet saved."""

    street: str
    city: str
    state: str
    zip_code: str
    country: str

    def validate(self) -> AddressForm:
        """Return a stripped copy, or raise if any field is blank."""
        missing = [
            f.name for f in fields(self)
            if not (getattr(self, f.name) or "").strip()
        ]
        if missing:
            raise ValidationError(
                "Address is incomplete, missing: " + ", ".join(missing)
            )
        return AddressForm(
            **{f.name: getattr(self, f.name).strip() for f in fields(self)}
        )

    def formatted(self) -> str:
        return f"{self.street}, {self.city}, {self.state} {self.zip_code}, {self.country}"


@dataclass
class Address:
    id: int | None
    street: str
    city: str
    state: str
    zip_code: str
    country: str
    is_default: bool = False

    @staticmethod
    def from_form(form: AddressForm, is_default: bool = False) -> Address:
        clean = form.validate()
        return Address(
            id=None,
            street=clean.street,
            city=clean.city,
            state=clean.state,
            zip_code=clean.zip_code,
            country=clean.country,
            is_default=is_default,
        )

    def formatted(self) -> str:
        """Resolved postal string sent with the order."""
        return f"{self.street}, {self.city}, {self.state} {self.zip_code}, {self.country}"
