"""Tests for writing cards to disk."""

import pytest

from contact_card.builder import CardFile
from contact_card.files import card_path, sanitize_filename, write_card


class TestSanitizeFilename:
    """Test sanitize_filename."""

    @pytest.mark.parametrize(
        "stem,expected",
        [
            ("John Smith", "John-Smith"),
            ("John Q. Public, Jr.", "John-Q.-Public-Jr"),
            ("José Álvarez", "Jose-Alvarez"),
            ("../../etc/passwd", "etcpasswd"),
            ("  spaced   out  ", "spaced-out"),
            ("O'Brien & Sons", "OBrien-Sons"),
        ],
    )
    def test_sanitize(self, stem, expected):
        """Test unsafe characters are removed and spaces become dashes."""
        assert sanitize_filename(stem) == expected

    @pytest.mark.parametrize("stem", ["", "!!!", "...", "李"])
    def test_fallback(self, stem):
        """Test stems with nothing usable fall back to 'contact'."""
        assert sanitize_filename(stem) == "contact"


class TestWriteCard:
    """Test write_card."""

    def test_writes_bytes(self, tmp_path):
        """Test the card content is written under a sanitized name."""
        card = CardFile(filename_stem="Ann Lee", content=b"BEGIN:VCARD\r\n")
        path = write_card(card, tmp_path)
        assert path == tmp_path / "Ann-Lee.vcf"
        assert path.read_bytes() == b"BEGIN:VCARD\r\n"

    def test_creates_directory(self, tmp_path):
        """Test a missing output directory is created."""
        card = CardFile(filename_stem="Ann Lee", content=b"x")
        path = write_card(card, tmp_path / "out" / "cards")
        assert path.exists()

    def test_does_not_overwrite(self, tmp_path):
        """Test name collisions get a numeric suffix."""
        first = write_card(CardFile(filename_stem="Ann Lee", content=b"1"), tmp_path)
        second = write_card(CardFile(filename_stem="Ann Lee", content=b"2"), tmp_path)
        third = write_card(CardFile(filename_stem="Ann Lee", content=b"3"), tmp_path)
        assert first.name == "Ann-Lee.vcf"
        assert second.name == "Ann-Lee-2.vcf"
        assert third.name == "Ann-Lee-3.vcf"
        assert first.read_bytes() == b"1"

    def test_card_path(self, tmp_path):
        """Test card_path does not touch the filesystem."""
        path = card_path(CardFile(filename_stem="Ann", content=b""), tmp_path)
        assert path == tmp_path / "Ann.vcf"
        assert not path.exists()
