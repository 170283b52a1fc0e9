"""Render a ContactRecord as a vCard 3.0 document."""

import re
from typing import Iterator

from contact_card.exceptions import CardContractError
from contact_card.models.contact import ContactRecord

VCARD_VERSION = "3.0"
CRLF = "\r\n"
FOLD_WIDTH = 75  # octets per physical line, continuation space included
MIN_FOLD_WIDTH = 5

# An escape pair or a single character; folding never splits either.
_FOLD_UNIT = re.compile(r"\\.|.", re.DOTALL)


def escape_text(value: str) -> str:
    """
    Escape a text value for vCard.

    Backslash, semicolon and comma get a preceding backslash; line breaks
    become the two characters ``\\n``.
    """
    return (
        value.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r\n", "\\n")
        .replace("\r", "\\n")
        .replace("\n", "\\n")
    )


def fold_line(line: str, width: int = FOLD_WIDTH) -> list[str]:
    """
    Fold a logical content line into physical lines of at most ``width`` octets.

    Continuation lines start with a single space, which counts toward the width.

    Args:
        line: Logical line without its terminator.
        width: Maximum UTF-8 octets per physical line.

    Returns:
        Physical lines, without terminators.
    """
    if len(line.encode("utf-8")) <= width:
        return [line]

    segments: list[str] = []
    current = ""
    size = 0
    limit = width
    for unit in _FOLD_UNIT.findall(line):
        unit_size = len(unit.encode("utf-8"))
        if current and size + unit_size > limit:
            segments.append(current)
            current, size = "", 0
            limit = width - 1
        current += unit
        size += unit_size
    segments.append(current)

    return segments[:1] + [" " + segment for segment in segments[1:]]


def _has_text(value: str | None) -> bool:
    return bool(value and value.strip())


def _structured(components: list[str | None]) -> str:
    return ";".join(escape_text(component or "") for component in components)


class CardSerializer:
    """Serializer producing vCard 3.0 text from a ContactRecord."""

    def __init__(self, fold_width: int = FOLD_WIDTH):
        """
        Initialize the serializer.

        Args:
            fold_width: Maximum octets per physical line before folding.

        Raises:
            ValueError: If fold_width is too small to hold any character.
        """
        if fold_width < MIN_FOLD_WIDTH:
            raise ValueError(
                f"fold_width must be at least {MIN_FOLD_WIDTH}, got {fold_width}"
            )
        self._fold_width = fold_width

    def render(self, record: ContactRecord) -> str:
        """
        Render a record as vCard text with CRLF line endings.

        Raises:
            CardContractError: If ``record`` is not a ContactRecord.
        """
        if not isinstance(record, ContactRecord):
            raise CardContractError(
                f"Expected ContactRecord, got {type(record).__name__}"
            )

        lines = ["BEGIN:VCARD", f"VERSION:{VCARD_VERSION}"]
        lines.extend(self._content_lines(record))
        lines.append("END:VCARD")

        return "".join(
            physical + CRLF
            for line in lines
            for physical in fold_line(line, self._fold_width)
        )

    def serialize(self, record: ContactRecord) -> bytes:
        """Render a record as UTF-8 encoded vCard bytes."""
        return self.render(record).encode("utf-8")

    def _content_lines(self, record: ContactRecord) -> Iterator[str]:
        """Yield unfolded content lines for every populated field."""
        # N: family;given;additional;prefix;suffix
        name = [
            record.last_name,
            record.first_name,
            record.middle_name,
            None,
            record.suffix,
        ]
        if any(_has_text(part) for part in name):
            yield "N:" + _structured(name)

        formatted_name = record.display_name
        if not _has_text(formatted_name):
            formatted_name = record.composed_name

        simple = [
            ("FN", formatted_name),
            ("ORG", record.company),
            ("TITLE", record.title),
            ("EMAIL;TYPE=INTERNET,WORK,PREF", record.email1),
            ("TEL;TYPE=CELL,VOICE", record.cell_tel),
        ]
        for prop, value in simple:
            if _has_text(value):
                yield f"{prop}:{escape_text(value)}"

        # ADR: po-box;extended;street;city;region;postal-code;country
        address = [
            None,
            None,
            record.work_address,
            record.work_city,
            record.work_state,
            record.work_postal_code,
            record.work_country,
        ]
        if any(_has_text(part) for part in address):
            yield "ADR;TYPE=WORK:" + _structured(address)

        if _has_text(record.url):
            yield f"URL;TYPE=WORK:{escape_text(record.url)}"
        # A URI value is written as-is.
        if _has_text(record.photo):
            yield f"PHOTO;VALUE=URI:{record.photo.strip()}"
        if _has_text(record.note):
            yield f"NOTE:{escape_text(record.note)}"


def serialize(record: ContactRecord) -> bytes:
    """Serialize a record with the default settings."""
    return CardSerializer().serialize(record)
