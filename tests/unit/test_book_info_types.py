# ABOUTME: Unit tests for the BookInfo dataclass.
# ABOUTME: Validates zero-value defaults, the JSON wire form, and price display.

import pytest

from bookinfo.errors import ValidationError
from bookinfo.metadata.types import BookInfo


class TestBookInfoDefaults:
    """Tests for BookInfo zero values."""

    def test_all_fields_default_to_zero_values(self) -> None:
        """An empty BookInfo has empty strings, zeros, and no tags."""
        info = BookInfo()
        assert info.title == ""
        assert info.price == 0
        assert info.tags == []
        assert info.publish_date == ""
        assert info.pages == 0
        assert info.word_count == 0
        assert info.unique_code == ""
        assert info.volume == 0

    def test_tags_default_is_not_shared(self) -> None:
        """Each instance gets its own tags list."""
        first = BookInfo()
        second = BookInfo()
        first.tags.append("fiction")
        assert second.tags == []


class TestBookInfoWireForm:
    """Tests for to_dict/from_dict."""

    def test_to_dict_uses_camel_case_keys(self) -> None:
        """Multi-word fields serialize with camelCase keys."""
        data = BookInfo(isbn="9787544258609", publish_date="2013-01-01", word_count=5).to_dict()
        assert data["publishDate"] == "2013-01-01"
        assert data["wordCount"] == 5
        assert data["contentIntro"] == ""
        assert data["authorIntro"] == ""
        assert data["uniqueCode"] == ""
        assert "publish_date" not in data

    def test_to_dict_copies_tags(self) -> None:
        """Mutating the serialized tags does not touch the record."""
        info = BookInfo(tags=["fiction"])
        info.to_dict()["tags"].append("extra")
        assert info.tags == ["fiction"]

    def test_from_dict_missing_keys_take_zero_values(self) -> None:
        """Keys absent from the wire form become zero values."""
        info = BookInfo.from_dict({"isbn": "9787544258609", "title": "白夜行"})
        assert info.isbn == "9787544258609"
        assert info.title == "白夜行"
        assert info.price == 0
        assert info.tags == []

    def test_from_dict_null_values_take_zero_values(self) -> None:
        """JSON nulls are treated like missing keys."""
        info = BookInfo.from_dict({"author": None, "pages": None})
        assert info.author == ""
        assert info.pages == 0

    def test_from_dict_reads_copy_fields(self) -> None:
        """uniqueCode and volume map onto the write-path fields."""
        info = BookInfo.from_dict({"uniqueCode": "LIB-1", "volume": 2})
        assert info.unique_code == "LIB-1"
        assert info.volume == 2

    def test_from_dict_rejects_non_integer_price(self) -> None:
        """A string price is rejected rather than coerced."""
        with pytest.raises(ValidationError, match="price"):
            BookInfo.from_dict({"price": "39.80"})

    def test_from_dict_rejects_boolean_integer(self) -> None:
        """Booleans are not accepted for integer fields."""
        with pytest.raises(ValidationError, match="pages"):
            BookInfo.from_dict({"pages": True})

    def test_from_dict_rejects_non_list_tags(self) -> None:
        """Tags must be a list of strings."""
        with pytest.raises(ValidationError, match="tags"):
            BookInfo.from_dict({"tags": "fiction,mystery"})

    def test_from_dict_rejects_non_string_text(self) -> None:
        """Text fields must be strings."""
        with pytest.raises(ValidationError, match="title"):
            BookInfo.from_dict({"title": 42})

    def test_wire_form_round_trip(self, sample_book: BookInfo) -> None:
        """from_dict(to_dict()) reproduces the record."""
        assert BookInfo.from_dict(sample_book.to_dict()) == sample_book


class TestPriceDisplay:
    """Tests for the price_display property."""

    def test_formats_minor_units(self) -> None:
        assert BookInfo(price=3980).price_display == "39.80"

    def test_pads_single_digit_cents(self) -> None:
        assert BookInfo(price=1205).price_display == "12.05"

    def test_zero_price(self) -> None:
        assert BookInfo().price_display == "0.00"

    @pytest.mark.parametrize(("price", "expected"), [(-50, "-0.50"), (-3980, "-39.80")])
    def test_negative_price_keeps_sign_outside(self, price: int, expected: str) -> None:
        assert BookInfo(price=price).price_display == expected
