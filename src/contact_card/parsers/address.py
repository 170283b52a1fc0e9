"""Split a free-text (possibly HTML) US-style address into its parts."""

import logging
import re

from bs4 import BeautifulSoup

from contact_card.models.contact import DEFAULT_COUNTRY, ParsedAddress
from contact_card.parsers.base import Rule, first_match

logger = logging.getLogger(__name__)

# "City, ST 12345" / "City ST 12345-6789" at the very end of the text.
STATE_ZIP_PATTERN = re.compile(
    r",?\s*\b([A-Za-z]{2})\s+(\d{5}(?:-\d{4})?)$"
)

# A street token matching any of these ends the city word-walk.
CITY_BOUNDARY_RULES = (
    Rule(tag="street-number", pattern=re.compile(r"^\d+$")),
    Rule(
        tag="directional",
        pattern=re.compile(
            r"^(?:N|S|E|W|NE|NW|SE|SW|North|South|East|West)\.?$", re.IGNORECASE
        ),
    ),
    Rule(
        tag="street-suffix",
        pattern=re.compile(
            r"^(?:St|Ave|Blvd|Dr|Rd|Ln|Ct|Way|Pkwy|Hwy|Suite|Ste|Floor|Fl)\.?$",
            re.IGNORECASE,
        ),
    ),
)

MAX_CITY_WORDS = 2

_BLOCK_TAGS = ["p", "div", "li", "address", "tr", "h1", "h2", "h3", "h4", "h5", "h6"]
_WHITESPACE = re.compile(r"\s+")


def strip_markup(markup: str | None) -> str:
    """
    Reduce rich-text markup to a single line of plain text.

    Tags are removed, entities decoded, and every whitespace run (line breaks
    and non-breaking spaces included) collapsed to one space.
    """
    if not markup:
        return ""

    soup = BeautifulSoup(markup, "html.parser")
    for element in soup(["script", "style"]):
        element.decompose()
    for br in soup.find_all("br"):
        br.replace_with("\n")
    for block in soup.find_all(_BLOCK_TAGS):
        block.append("\n")

    return _WHITESPACE.sub(" ", soup.get_text()).strip()


class AddressParser:
    """Heuristic parser anchored on the trailing state and ZIP code."""

    def __init__(self, default_country: str = DEFAULT_COUNTRY):
        """
        Initialize the address parser.

        Args:
            default_country: Country assigned to every parsed address.
        """
        self._default_country = default_country

    def parse(self, address_markup: str | None) -> ParsedAddress:
        """
        Parse an address block into street/city/state/zip/country.

        Args:
            address_markup: Address text, optionally wrapped in HTML.

        Returns:
            ParsedAddress. Text without a trailing "ST 12345" is returned
            whole as the street.
        """
        text = strip_markup(address_markup)
        if not text:
            return ParsedAddress(country=self._default_country)

        anchor = STATE_ZIP_PATTERN.search(text)
        if not anchor:
            logger.debug("No state/ZIP anchor, using whole address as street: %r", text)
            return ParsedAddress(street=text, country=self._default_country)

        state = anchor.group(1).upper()
        zip_code = anchor.group(2)
        street, city = self._split_street_city(text[: anchor.start()].strip())

        return ParsedAddress(
            street=street,
            city=city,
            state=state,
            zip=zip_code,
            country=self._default_country,
        )

    def _split_street_city(self, remainder: str) -> tuple[str, str]:
        """Split what precedes the state/ZIP into (street, city)."""
        remainder = remainder.rstrip(", ")
        if "," in remainder:
            street, _, city = remainder.rpartition(",")
            return street.strip(), city.strip()

        street_words = remainder.split()
        if len(street_words) <= 1:
            return remainder, ""

        city_words: list[str] = []
        while len(street_words) > 1:
            city_words.insert(0, street_words.pop())
            if len(city_words) >= MAX_CITY_WORDS:
                break
            boundary = first_match(CITY_BOUNDARY_RULES, street_words[-1])
            if boundary:
                logger.debug(
                    "City word-walk stopped at %r (%s)",
                    street_words[-1],
                    boundary[0].tag,
                )
                break

        return " ".join(street_words), " ".join(city_words)


def parse_address(
    address_markup: str | None, default_country: str = DEFAULT_COUNTRY
) -> ParsedAddress:
    """Parse an address block with the default heuristics."""
    return AddressParser(default_country=default_country).parse(address_markup)
