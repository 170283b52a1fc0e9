"""Ordered, tagged rule lists shared by the text parsers."""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class Rule:
    """A single tagged pattern in an ordered rule list."""

    tag: str
    """Short identifier used in logs and tests."""

    pattern: re.Pattern[str]
    """Compiled pattern tested against the input."""

    value: str = ""
    """Value produced when the rule wins (e.g. the canonical suffix token)."""


def first_match(
    rules: tuple[Rule, ...], text: str
) -> tuple[Rule, re.Match[str]] | None:
    """
    Return the first rule in list order whose pattern matches ``text``.

    Args:
        rules: Ordered rules; earlier rules win ties.
        text: Text to test.

    Returns:
        ``(rule, match)`` for the winning rule, or None if nothing matched.
    """
    for rule in rules:
        match = rule.pattern.search(text)
        if match:
            return rule, match
    return None
