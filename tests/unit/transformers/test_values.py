"""Tests for value parsing and text cleanup."""

from __future__ import annotations

import pytest

from pipelines.transformers.values import clean_text, parse_int, parse_number


class TestCleanText:
    """Tests for clean_text."""

    def test_decodes_entities_and_collapses_whitespace(self) -> None:
        """Entities decode and whitespace runs collapse to single spaces."""
        assert clean_text("  St.&nbsp;Louis \n\t Cardinals ") == "St. Louis Cardinals"

    def test_none_is_empty(self) -> None:
        assert clean_text(None) == ""


class TestParseNumber:
    """Tests for parse_number."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("4.5", 4.5),
            ("1,234.5", 1234.5),
            ("52.3%", 52.3),
            (" .978 ", 0.978),
            ("-2.6", -2.6),
            (162, 162.0),
            (1.23, 1.23),
        ],
    )
    def test_parses_numbers(self, raw: object, expected: float) -> None:
        """Percent signs and thousands separators are ignored."""
        assert parse_number(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "   ", "--", "N/A", "1_000", "nan", "inf", True])
    def test_malformed_is_absent(self, raw: object) -> None:
        """Malformed input yields None instead of raising."""
        assert parse_number(raw) is None

    def test_never_uses_comma_decimal(self) -> None:
        """A comma is a thousands separator, never a decimal point."""
        assert parse_number("4,5") == 45.0


class TestParseInt:
    """Tests for parse_int."""

    def test_whole_numbers(self) -> None:
        assert parse_int("150") == 150
        assert parse_int(150.0) == 150

    def test_fractional_is_absent(self) -> None:
        assert parse_int("4.5") is None
