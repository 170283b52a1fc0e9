"""Heuristic parsers turning raw profile text into structured fields."""

from contact_card.parsers.address import AddressParser, parse_address, strip_markup
from contact_card.parsers.name import NameParser, parse_name
from contact_card.parsers.phone import normalize_phone

__all__ = [
    "AddressParser",
    "NameParser",
    "normalize_phone",
    "parse_address",
    "parse_name",
    "strip_markup",
]
