"""
Unit tests for text cleaning and validation helpers.
"""
import pytest

from pagesift.utils.text_cleaning import (
    br_to_newlines,
    collapse_lines,
    dedupe_preserving_order,
    normalize_label,
    normalize_whitespace,
)
from pagesift.utils.validators import clean_and_validate_url, is_valid_url, parse_price


class TestTextCleaning:

    def test_normalize_whitespace(self):
        assert normalize_whitespace("  a \n\t b  ") == "a b"
        assert normalize_whitespace(None) == ""

    def test_br_to_newlines(self):
        assert br_to_newlines("a<br>b<BR />c") == "a\nb\nc"

    def test_collapse_lines(self):
        assert collapse_lines(" a   b \n \n\n c") == "a b\nc"

    def test_normalize_label(self):
        assert normalize_label("  Tips and Advice: ") == "tips and advice"
        assert normalize_label("+ Features -") == "features"

    def test_dedupe(self):
        assert dedupe_preserving_order(["b", "a", "", "b", None, "c"]) == ["b", "a", "c"]


class TestUrlValidation:

    def test_is_valid_url(self):
        assert is_valid_url("https://www.superdrug.com/p/1")
        assert not is_valid_url("ftp://example.com/x")
        assert not is_valid_url("/relative")

    @pytest.mark.parametrize("value", [
        "data:image/png;base64,AAA",
        "blob:https://x/1",
        "javascript:void(0)",
        "#",
        "",
        None,
    ])
    def test_rejects_non_navigable(self, value):
        assert clean_and_validate_url(value, "https://www.superdrug.com/p/1") is None

    def test_strips_at_prefix(self):
        assert clean_and_validate_url("@https://cdn.example.com/a.jpg") == "https://cdn.example.com/a.jpg"

    def test_protocol_relative(self):
        assert clean_and_validate_url("//cdn.example.com/a.jpg") == "https://cdn.example.com/a.jpg"

    def test_relative_needs_base(self):
        assert clean_and_validate_url("/a.jpg") is None
        assert clean_and_validate_url("/a.jpg", "https://www.superdrug.com/p/1") == "https://www.superdrug.com/a.jpg"


class TestPriceParsing:

    @pytest.mark.parametrize("text,expected", [
        ("£4.99", "£4.99"),
        ("Now £1,299.00", "£1299.00"),
        ("£3", "£3"),
        ("4.99", "4.99"),
        ("Â£2.50", "£2.50"),
        ("£0.00", None),
        ("Free", None),
        (None, None),
    ])
    def test_parse_price(self, text, expected):
        assert parse_price(text) == expected

    def test_was_now_pair_uses_current_price(self):
        """Should return the amount after "Now", not the earlier was-price."""
        assert parse_price("Was £5.99 Now £4.99") == "£4.99"
        assert parse_price("was £12.00 now £9.00 (£4.50 per 100ml)") == "£9.00"
