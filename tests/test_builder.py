"""Tests for the card builder."""

from unittest.mock import Mock

import pytest

from contact_card.builder import CardBuilder, CardFile, build_card, build_record
from contact_card.exceptions import UnknownFieldError
from contact_card.models.contact import ContactRecord, ParsedAddress, ParsedName


ATTORNEY_FIELDS = {
    "name": "John Q. Public, Jr.",
    "title": "Partner",
    "company": "Acme Law",
    "email": "  jqp@acme.example ",
    "phone": "+1 (555) 123-4567",
    "address": "<p>123 Main St<br/>Springfield, IL 62704</p>",
    "url": "https://www.linkedin.com/in/jqp",
    "photo": {"url": "https://acme.example/jqp.jpg", "width": 300},
    "profile_url": "https://acme.example/people/jqp",
}


class TestBuildRecord:
    """Test build_record."""

    def test_full_profile(self):
        """Test every raw field is parsed or copied into the record."""
        record = build_record(ATTORNEY_FIELDS)
        assert record.as_dict() == {
            "first_name": "John",
            "middle_name": "Q.",
            "last_name": "Public",
            "suffix": "Jr.",
            "display_name": "John Q. Public, Jr.",
            "title": "Partner",
            "company": "Acme Law",
            "email1": "jqp@acme.example",
            "cell_tel": "+15551234567",
            "work_address": "123 Main St",
            "work_city": "Springfield",
            "work_state": "IL",
            "work_postal_code": "62704",
            "work_country": "USA",
            "url": "https://www.linkedin.com/in/jqp",
            "photo": "https://acme.example/jqp.jpg",
            "note": "Profile: https://acme.example/people/jqp",
        }

    def test_empty_fields(self):
        """Test an empty mapping builds an empty record."""
        record = build_record({})
        assert isinstance(record, ContactRecord)
        assert record.as_dict() == {}

    def test_blank_values_are_absent(self):
        """Test None and whitespace values are treated as missing."""
        record = build_record({"name": "  ", "title": None, "email": "", "phone": "   "})
        assert record.as_dict() == {}

    def test_fallback_label(self):
        """Test the fallback label stands in for a missing name."""
        record = build_record({"name": "", "fallback_label": "Jane Doe"})
        assert record.display_name == "Jane Doe"
        assert record.first_name == "Jane"
        assert record.last_name == "Doe"

    def test_name_beats_fallback_label(self):
        """Test an explicit name wins over the fallback label."""
        record = build_record({"name": "Ann Lee", "fallback_label": "Post Title"})
        assert record.display_name == "Ann Lee"

    def test_single_word_name(self):
        """Test empty name components are left unset."""
        record = build_record({"name": "Cher"})
        assert record.first_name == "Cher"
        assert record.last_name is None
        assert record.middle_name is None
        assert record.suffix is None

    def test_phone_without_digits_omitted(self):
        """Test a phone that normalizes to nothing is not stored."""
        record = build_record({"phone": "n/a"})
        assert record.cell_tel is None

    def test_unparseable_address(self):
        """Test an address without state/ZIP lands in the street field."""
        record = build_record({"address": "Some Unparseable Blob"})
        assert record.work_address == "Some Unparseable Blob"
        assert record.work_city is None
        assert record.work_state is None
        assert record.work_postal_code is None
        assert record.work_country == "USA"

    def test_empty_address_omitted(self):
        """Test markup with no address text sets no address fields, not even country."""
        record = build_record({"address": "<br>"})
        assert record.as_dict() == {}
        assert b"ADR" not in build_card({"address": "<br>"}).content

    def test_invalid_email_and_url_dropped(self):
        """Test an unusable email or non-http URL is left out of the record."""
        record = build_record(
            {"name": "Ann Lee", "email": "not an email <x@y>", "url": "javascript:alert(1)"}
        )
        assert record.email1 is None
        assert record.url is None
        assert record.display_name == "Ann Lee"

    def test_photo_as_string(self):
        """Test a plain photo URL is accepted."""
        record = build_record({"photo": "https://acme.example/a.jpg"})
        assert record.photo == "https://acme.example/a.jpg"

    def test_photo_mapping_without_url(self):
        """Test an image mapping lacking a url is ignored."""
        record = build_record({"photo": {"id": 7}})
        assert record.photo is None

    def test_explicit_note_wins(self):
        """Test an explicit note is not replaced by the profile URL."""
        record = build_record({"note": "Call first", "profile_url": "https://x.example"})
        assert record.note == "Call first"

    def test_unknown_field(self):
        """Test unknown input keys are rejected."""
        with pytest.raises(UnknownFieldError, match="fax"):
            build_record({"name": "Ann", "fax": "123"})

    def test_unknown_field_is_value_error(self):
        """Test the unknown-field error can be caught as ValueError."""
        with pytest.raises(ValueError):
            build_record({"linkedin": "x"})


class TestCardBuilder:
    """Test CardBuilder with injected collaborators."""

    def test_uses_injected_parsers(self):
        """Test the builder delegates to its parsers."""
        name_parser = Mock()
        name_parser.parse.return_value = ParsedName(first_name="A", last_name="B")
        address_parser = Mock()
        address_parser.parse.return_value = ParsedAddress(street="1 Road", country="Canada")

        builder = CardBuilder(name_parser=name_parser, address_parser=address_parser)
        record = builder.build({"name": " Raw Name ", "address": "<p>1 Road</p>"})

        name_parser.parse.assert_called_once_with("Raw Name")
        address_parser.parse.assert_called_once_with("<p>1 Road</p>")
        assert record.first_name == "A"
        assert record.last_name == "B"
        assert record.display_name == "Raw Name"
        assert record.work_address == "1 Road"
        assert record.work_country == "Canada"

    def test_name_parser_not_called_without_name(self):
        """Test no parsing happens for absent fields."""
        name_parser = Mock()
        address_parser = Mock()
        builder = CardBuilder(name_parser=name_parser, address_parser=address_parser)

        builder.build({"title": "Partner"})

        name_parser.parse.assert_not_called()
        address_parser.parse.assert_not_called()

    def test_build_card_uses_serializer(self):
        """Test build_card passes the record to the serializer."""
        serializer = Mock()
        serializer.serialize.return_value = b"CARD"
        builder = CardBuilder(serializer=serializer)

        card = builder.build_card({"name": "Ann Lee"})

        assert card.content == b"CARD"
        record = serializer.serialize.call_args.args[0]
        assert record.display_name == "Ann Lee"


class TestBuildCard:
    """Test build_card."""

    def test_card_file(self):
        """Test the rendered card carries content and download metadata."""
        card = build_card(ATTORNEY_FIELDS)
        assert isinstance(card, CardFile)
        assert card.filename_stem == "John Q. Public, Jr."
        assert card.media_type == "text/vcard"
        assert card.extension == "vcf"
        assert card.content.startswith(b"BEGIN:VCARD\r\nVERSION:3.0\r\n")
        assert card.content.endswith(b"END:VCARD\r\n")
        assert b"ADR;TYPE=WORK:;;123 Main St;Springfield;IL;62704;USA\r\n" in card.content
        assert b"TEL;TYPE=CELL,VOICE:+15551234567\r\n" in card.content
        assert b"NOTE:Profile: https://acme.example/people/jqp\r\n" in card.content

    def test_default_stem(self):
        """Test a nameless card gets the default stem."""
        card = build_card({"title": "Receptionist"})
        assert card.filename_stem == "contact"
