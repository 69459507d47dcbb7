"""Tests for color, date, string and sub-element helpers."""

from datetime import date, datetime

import pytest

from minutebook.helpers import (
    current_date_plus_delta_days,
    erase_substring,
    extract_date_from_string,
    extract_email_addresses,
    find_index_by_id,
    format_date_iso8601,
    format_datetime_iso8601_time,
    get_element_by_id,
    hex_to_rgb,
    is_dark_color,
    is_valid_hex_color_string,
)
from minutebook.models.label import LabelDoc


class TestColor:
    """Tests for hex color helpers."""

    @pytest.mark.parametrize("value", ["#fff", "#FFF", "#a1b2c3", "#000000", "#e6e6e6"])
    def test_accepts_short_and_long_forms(self, value: str) -> None:
        """#RGB and #RRGGBB are valid."""
        assert is_valid_hex_color_string(value)

    @pytest.mark.parametrize("value", [None, "", "#", "#ff", "#ggg", "#abcd", "red"])
    def test_rejects_invalid(self, value: str | None) -> None:
        """None, empty, a bare # and malformed values are rejected."""
        assert not is_valid_hex_color_string(value)

    def test_hex_to_rgb_expands_shorthand(self) -> None:
        """#abc is the same color as #aabbcc."""
        assert hex_to_rgb("#abc") == (0xAA, 0xBB, 0xCC)
        assert hex_to_rgb("#aabbcc") == (0xAA, 0xBB, 0xCC)

    def test_hex_to_rgb_returns_none_for_garbage(self) -> None:
        assert hex_to_rgb("nope") is None

    def test_is_dark_color(self) -> None:
        """Black is dark, white and the default label grey are not."""
        assert is_dark_color("#000")
        assert not is_dark_color("#ffffff")
        assert not is_dark_color("#e6e6e6")
        assert is_dark_color((0, 0, 128))

    def test_is_dark_color_rejects_invalid(self) -> None:
        with pytest.raises(ValueError):
            is_dark_color("not-a-color")


class TestDates:
    """Tests for date helpers."""

    def test_format_date(self) -> None:
        assert format_date_iso8601(date(2024, 3, 5)) == "2024-03-05"
        assert format_date_iso8601(datetime(2024, 3, 5, 23, 59)) == "2024-03-05"

    def test_format_datetime_with_time(self) -> None:
        assert format_datetime_iso8601_time(datetime(2024, 3, 5, 7, 8, 9)) == (
            "2024-03-05 07:08:09"
        )

    def test_current_date_plus_delta(self) -> None:
        """Adds days across month boundaries."""
        assert current_date_plus_delta_days(7, current=date(2024, 1, 28)) == "2024-02-04"
        assert current_date_plus_delta_days(current=date(2024, 1, 28)) == "2024-01-28"

    def test_extract_date_from_string(self) -> None:
        assert extract_date_from_string("due on 2024-12-31 please") == "2024-12-31"
        assert extract_date_from_string("2024-13-01") is None
        assert extract_date_from_string("no date") is None


class TestStrings:
    """Tests for string helpers."""

    def test_erase_substring_with_adjacent_space(self) -> None:
        assert erase_substring("hello is:open world", "is:open") == "hello world"

    def test_erase_substring_at_end(self) -> None:
        assert erase_substring("hello world", "world") == "hello"

    def test_extract_email_addresses(self) -> None:
        text = "Guests: Jane <jane@example.com>, bob.smith@corp.example.org"
        assert extract_email_addresses(text) == [
            "jane@example.com",
            "bob.smith@corp.example.org",
        ]
        assert extract_email_addresses("") == []


class TestSubElements:
    """Tests for id lookups in sub-document lists."""

    def test_find_index_on_dicts(self) -> None:
        elements = [{"id": "a"}, {"id": "b"}]
        assert find_index_by_id("b", elements) == 1
        assert find_index_by_id("x", elements) is None

    def test_get_element_on_models(self) -> None:
        labels = [LabelDoc(name="Urgent"), LabelDoc(name="Later")]
        assert get_element_by_id(labels[1].id, labels) is labels[1]
        assert get_element_by_id("missing", labels) is None

    def test_lookup_by_other_attribute(self) -> None:
        labels = [LabelDoc(name="Urgent"), LabelDoc(name="Later")]
        assert get_element_by_id("Later", labels, attr="name") is labels[1]
