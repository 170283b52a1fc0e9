"""Pydantic models for contact card data."""

import re
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    field_validator,
)

DEFAULT_COUNTRY = "USA"

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

_HTTP_URL = TypeAdapter(HttpUrl)


class ParsedName(BaseModel):
    """Name components split out of a display name."""

    model_config = ConfigDict(frozen=True)

    first_name: str = Field(default="", description="First/given name")
    middle_name: str = Field(default="", description="Middle name(s), space separated")
    last_name: str = Field(default="", description="Last/family name")
    suffix: str = Field(default="", description="Name suffix such as Jr. or Esq.")


class ParsedAddress(BaseModel):
    """Address components split out of a free-text address block."""

    model_config = ConfigDict(frozen=True)

    street: str = Field(default="", description="Street address")
    city: str = Field(default="", description="City name")
    state: str = Field(default="", description="Two-letter state code")
    zip: str = Field(default="", description="ZIP or ZIP+4 code")
    country: str = Field(default=DEFAULT_COUNTRY, description="Country name")


class ContactRecord(BaseModel):
    """Structured fields of one contact, every one of them optional."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    first_name: str | None = Field(default=None, description="First/given name")
    middle_name: str | None = Field(default=None, description="Middle name(s)")
    last_name: str | None = Field(default=None, description="Last/family name")
    suffix: str | None = Field(default=None, description="Name suffix")
    display_name: str | None = Field(
        default=None, description="Full name as displayed"
    )
    title: str | None = Field(default=None, description="Job title or position")
    company: str | None = Field(default=None, description="Organization name")
    email1: str | None = Field(default=None, description="Email address")
    cell_tel: str | None = Field(default=None, description="Normalized cell phone")
    work_address: str | None = Field(default=None, description="Street address")
    work_city: str | None = Field(default=None, description="City")
    work_state: str | None = Field(default=None, description="State or province")
    work_postal_code: str | None = Field(default=None, description="Postal code")
    work_country: str | None = Field(default=None, description="Country")
    url: str | None = Field(default=None, description="Web URL")
    photo: str | None = Field(default=None, description="Photo image URL")
    note: str | None = Field(default=None, description="Free-text note")

    @field_validator("email1")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        """Trim the address; anything that is not a plain address becomes None."""
        if v is None:
            return None
        v = v.strip()
        if not EMAIL_PATTERN.match(v):
            return None
        return v

    @field_validator("url", "photo")
    @classmethod
    def validate_http_url(cls, v: str | None) -> str | None:
        """Keep only absolute http(s) URLs, unchanged apart from trimming."""
        if v is None:
            return None
        v = v.strip()
        if not v or any(ch.isspace() for ch in v):
            return None
        try:
            _HTTP_URL.validate_python(v)
        except ValidationError:
            return None
        return v

    def __getitem__(self, key: str) -> str | None:
        if key not in type(self).model_fields:
            raise KeyError(key)
        return getattr(self, key)

    def __setitem__(self, key: str, value: str | None) -> None:
        if key not in type(self).model_fields:
            raise KeyError(key)
        setattr(self, key, value)

    def __contains__(self, key: object) -> bool:
        return key in type(self).model_fields and bool(getattr(self, key))

    def get(self, key: str, default: Any = None) -> Any:
        """Return a field value, or ``default`` when unset or unknown."""
        if key not in type(self).model_fields:
            return default
        value = getattr(self, key)
        return default if value is None else value

    def as_dict(self) -> dict[str, str]:
        """Return only the populated, non-empty fields."""
        return {
            key: value
            for key, value in self.model_dump().items()
            if value
        }

    @property
    def composed_name(self) -> str:
        """First and last name joined by a space."""
        parts = [self.first_name or "", self.last_name or ""]
        return " ".join(part for part in parts if part)

    @property
    def filename_stem(self) -> str:
        """
        Desired (unsanitized) download filename stem.

        Falls back from the display name to the composed name, then to "contact".
        """
        stem = (self.display_name or "").strip()
        return stem or self.composed_name or "contact"
