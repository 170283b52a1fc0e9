"""Split a display name into first/middle/last/suffix."""

import re

from contact_card.models.contact import ParsedName
from contact_card.parsers.base import Rule, first_match

# Order matters: the first rule that matches wins, not the longest one.
SUFFIX_TOKENS = ("Jr.", "Jr", "Sr.", "Sr", "II", "III", "IV", "Esq.", "Esq")


def _suffix_rule(token: str) -> Rule:
    # Token must start a word: at start of string, or after whitespace/comma.
    pattern = re.compile(
        r"(?:^|\s*,\s*|\s+)" + re.escape(token) + r"\.?$",
        re.IGNORECASE,
    )
    return Rule(tag=f"suffix:{token}", pattern=pattern, value=token)


SUFFIX_RULES = tuple(_suffix_rule(token) for token in SUFFIX_TOKENS)

_WHITESPACE = re.compile(r"\s+")


class NameParser:
    """Heuristic parser for western-style full names."""

    def __init__(self, suffix_rules: tuple[Rule, ...] = SUFFIX_RULES):
        """
        Initialize the name parser.

        Args:
            suffix_rules: Ordered suffix rules tested against the end of the name.
        """
        self._suffix_rules = suffix_rules

    def parse(self, full_name: str | None) -> ParsedName:
        """
        Parse a full name into its components.

        Args:
            full_name: Name as displayed, e.g. "John Q. Public, Jr.".

        Returns:
            ParsedName; all fields are empty for blank input.
        """
        text = (full_name or "").strip()
        if not text:
            return ParsedName()

        suffix = ""
        hit = first_match(self._suffix_rules, text)
        if hit:
            rule, match = hit
            suffix = rule.value
            text = text[: match.start()].strip()

        words = _WHITESPACE.split(text) if text else []

        if not words:
            return ParsedName(suffix=suffix)
        if len(words) == 1:
            return ParsedName(first_name=words[0], suffix=suffix)
        return ParsedName(
            first_name=words[0],
            middle_name=" ".join(words[1:-1]),
            last_name=words[-1],
            suffix=suffix,
        )


def parse_name(full_name: str | None) -> ParsedName:
    """Parse a full name with the default suffix rules."""
    return NameParser().parse(full_name)
