"""Phone number normalization."""

import re

_NON_PHONE_CHARS = re.compile(r"[^0-9+]")

# "ext. 9", "extension 12", "x204", "#3" directly after the number's last digit.
_EXTENSION = re.compile(
    r"(?<=\d)\s*(?:ext(?:ension)?\.?|x|#)\s*\d+\s*$", re.IGNORECASE
)


def normalize_phone(raw: str | None) -> str:
    """
    Strip everything except ASCII digits and ``+`` from a phone string.

    A trailing extension after the number is dropped first so its digits are
    not glued onto the number. No validation is done: a ``+`` is kept wherever
    it appears and the digit count is not checked.

    Args:
        raw: Phone number as entered, e.g. "(555) 123-4567".

    Returns:
        Normalized phone string, or "" for empty input.
    """
    if not raw:
        return ""
    return _NON_PHONE_CHARS.sub("", _EXTENSION.sub("", raw))
