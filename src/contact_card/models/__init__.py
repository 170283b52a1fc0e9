"""Data models for contact card information."""

from contact_card.models.contact import (
    DEFAULT_COUNTRY,
    ContactRecord,
    ParsedAddress,
    ParsedName,
)

__all__ = [
    "DEFAULT_COUNTRY",
    "ContactRecord",
    "ParsedAddress",
    "ParsedName",
]
