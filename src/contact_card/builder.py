"""Assemble contact records from raw field values and render them."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from contact_card.exceptions import UnknownFieldError
from contact_card.models.contact import ContactRecord
from contact_card.parsers.address import AddressParser
from contact_card.parsers.name import NameParser
from contact_card.parsers.phone import normalize_phone
from contact_card.serializer import CardSerializer

logger = logging.getLogger(__name__)

INPUT_FIELDS = frozenset(
    {
        "name",
        "fallback_label",
        "title",
        "company",
        "email",
        "phone",
        "address",
        "url",
        "photo",
        "profile_url",
        "note",
    }
)

MEDIA_TYPE = "text/vcard"
FILE_EXTENSION = "vcf"


@dataclass(frozen=True)
class CardFile:
    """A rendered card ready to be handed to a download/transport layer."""

    filename_stem: str
    """Desired filename stem; sanitizing it is the caller's job."""

    content: bytes
    """UTF-8 encoded vCard document."""

    media_type: str = MEDIA_TYPE
    """Content type for the download response."""

    extension: str = FILE_EXTENSION
    """File extension, without the dot."""


def _text(value: Any) -> str:
    """Coerce an optional raw value to trimmed text."""
    if value is None:
        return ""
    return str(value).strip()


def _photo_url(value: Any) -> str:
    """Accept either a plain URL or an image-field mapping with a "url" key."""
    if isinstance(value, Mapping):
        return _text(value.get("url"))
    return _text(value)


class CardBuilder:
    """Controller that turns raw profile fields into a ContactRecord."""

    def __init__(
        self,
        name_parser: NameParser | None = None,
        address_parser: AddressParser | None = None,
        serializer: CardSerializer | None = None,
    ):
        """
        Initialize the builder.

        Args:
            name_parser: Parser for the display name.
            address_parser: Parser for the address block.
            serializer: Serializer used by ``build_card``.
        """
        self._name_parser = name_parser or NameParser()
        self._address_parser = address_parser or AddressParser()
        self._serializer = serializer or CardSerializer()

    def build(self, fields: Mapping[str, Any]) -> ContactRecord:
        """
        Build a ContactRecord from raw field values.

        Args:
            fields: Raw values keyed by input field name. Every key is optional;
                None and blank values count as absent.

        Returns:
            ContactRecord holding only the fields that resolved to a value.

        Raises:
            UnknownFieldError: If ``fields`` contains an unrecognized key.
        """
        unknown = set(fields) - INPUT_FIELDS
        if unknown:
            raise UnknownFieldError(list(unknown))

        record = ContactRecord()

        full_name = _text(fields.get("name")) or _text(fields.get("fallback_label"))
        if full_name:
            parsed_name = self._name_parser.parse(full_name)
            record.display_name = full_name
            for key, value in parsed_name.model_dump().items():
                if value:
                    record[key] = value

        for source, target in (("title", "title"), ("company", "company"), ("url", "url")):
            value = _text(fields.get(source))
            if value:
                record[target] = value

        email = _text(fields.get("email"))
        if email:
            record.email1 = email

        phone = normalize_phone(_text(fields.get("phone")))
        if phone:
            record.cell_tel = phone

        address = _text(fields.get("address"))
        parsed_address = self._address_parser.parse(address) if address else None
        # A default country on its own is not an address.
        if parsed_address and any(
            (parsed_address.street, parsed_address.city, parsed_address.state, parsed_address.zip)
        ):
            for key, value in (
                ("work_address", parsed_address.street),
                ("work_city", parsed_address.city),
                ("work_state", parsed_address.state),
                ("work_postal_code", parsed_address.zip),
                ("work_country", parsed_address.country),
            ):
                if value:
                    record[key] = value

        photo = _photo_url(fields.get("photo"))
        if photo:
            record.photo = photo

        note = _text(fields.get("note"))
        profile_url = _text(fields.get("profile_url"))
        if note:
            record.note = note
        elif profile_url:
            record.note = f"Profile: {profile_url}"

        logger.debug("Built contact record with fields: %s", sorted(record.as_dict()))
        return record

    def build_card(self, fields: Mapping[str, Any]) -> CardFile:
        """Build a record and serialize it into a downloadable CardFile."""
        record = self.build(fields)
        return CardFile(
            filename_stem=record.filename_stem,
            content=self._serializer.serialize(record),
        )


def build_record(fields: Mapping[str, Any]) -> ContactRecord:
    """Build a ContactRecord with the default parsers."""
    return CardBuilder().build(fields)


def build_card(fields: Mapping[str, Any]) -> CardFile:
    """Build and serialize a card with the default parsers and serializer."""
    return CardBuilder().build_card(fields)
