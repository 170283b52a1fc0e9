"""Write rendered cards to disk under safe filenames."""

import logging
import re
import unicodedata
from pathlib import Path

from contact_card.builder import CardFile

logger = logging.getLogger(__name__)

DEFAULT_STEM = "contact"

_UNSAFE_CHARS = re.compile(r"[^\w\s.-]")
_SEPARATORS = re.compile(r"[\s-]+")


def sanitize_filename(stem: str) -> str:
    """
    Turn a desired filename stem into one that is safe on common filesystems.

    Accents are folded to ASCII, characters other than letters, digits,
    ``_``, ``.`` and ``-`` are dropped, and whitespace runs become ``-``.

    Args:
        stem: Desired stem, e.g. a display name.

    Returns:
        Sanitized stem, or "contact" when nothing usable remains.
    """
    text = unicodedata.normalize("NFKD", stem or "")
    text = text.encode("ascii", "ignore").decode("ascii")
    text = _UNSAFE_CHARS.sub("", text)
    text = _SEPARATORS.sub("-", text.strip())
    text = text.strip("._-")
    return text or DEFAULT_STEM


def card_path(card: CardFile, directory: Path) -> Path:
    """Return a path for ``card`` in ``directory`` that does not exist yet."""
    stem = sanitize_filename(card.filename_stem)
    path = directory / f"{stem}.{card.extension}"
    counter = 2
    while path.exists():
        path = directory / f"{stem}-{counter}.{card.extension}"
        counter += 1
    return path


def write_card(card: CardFile, directory: Path) -> Path:
    """
    Write a card into ``directory``, creating it if needed.

    Existing files are never overwritten; a numeric suffix is added instead.

    Returns:
        Path of the written file.
    """
    directory.mkdir(parents=True, exist_ok=True)
    path = card_path(card, directory)
    path.write_bytes(card.content)
    logger.info("Wrote %s (%d bytes)", path, len(card.content))
    return path
