"""Contact card generator: profile text in, vCard out."""

from contact_card.builder import CardBuilder, CardFile, build_card, build_record
from contact_card.models.contact import ContactRecord, ParsedAddress, ParsedName
from contact_card.parsers.address import AddressParser, parse_address
from contact_card.parsers.name import NameParser, parse_name
from contact_card.parsers.phone import normalize_phone
from contact_card.serializer import CardSerializer, serialize

__version__ = "0.1.0"
__all__ = [
    "AddressParser",
    "CardBuilder",
    "CardFile",
    "CardSerializer",
    "ContactRecord",
    "NameParser",
    "ParsedAddress",
    "ParsedName",
    "build_card",
    "build_record",
    "normalize_phone",
    "parse_address",
    "parse_name",
    "serialize",
]
