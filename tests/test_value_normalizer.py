"""Tests for the value normalizer."""

import pytest

from portal_qa.executor.value_normalizer import (
    NAMED_COLORS,
    normalize,
    parse_color,
    values_match,
)


class TestNormalizeColors:
    """Color inputs canonicalize to rgb(r, g, b)."""

    @pytest.mark.parametrize("value", [
        "yellow",
        "YELLOW",
        "  Yellow  ",
        "#FFFF00",
        "#ffff00",
        "#ff0",
        "#FF0",
        "rgb(255,255,0)",
        "rgb(255, 255, 0)",
        "RGB( 255 , 255 , 0 )",
        "rgba(255,255,0,0.5)",
        "rgba(255, 255, 0, 1)",
        "rgb(255 255 0)",
        "rgb(255 255 0 / 50%)",
    ])
    def test_yellow_equivalence_class(self, value):
        assert normalize(value) == "rgb(255, 255, 0)"

    def test_named_table_has_fourteen_entries(self):
        assert len(NAMED_COLORS) == 14
        assert normalize("grey") == normalize("gray") == "rgb(128, 128, 128)"

    def test_green_is_css_green_not_lime(self):
        assert normalize("green") == "rgb(0, 128, 0)"

    def test_alpha_is_discarded(self):
        assert normalize("rgba(0, 0, 0, 0)") == "rgb(0, 0, 0)"

    def test_three_digit_hex_expands_each_digit(self):
        assert normalize("#abc") == "rgb(170, 187, 204)"


class TestNormalizePassThrough:
    """Anything that is not a recognized color is trimmed and lowercased."""

    @pytest.mark.parametrize("value,expected", [
        ("  Bold ", "bold"),
        ("16PX", "16px"),
        ("transparent", "transparent"),
        ("#12345", "#12345"),
        ("#ggg", "#ggg"),
        ("rgb(300, 0, 0)", "rgb(300, 0, 0)"),
        ("hsl(60, 100%, 50%)", "hsl(60, 100%, 50%)"),
        ("", ""),
    ])
    def test_non_colors(self, value, expected):
        assert normalize(value) == expected

    def test_parse_color_rejects_non_colors(self):
        assert parse_color("block") is None
        assert parse_color("") is None


class TestIdempotence:
    @pytest.mark.parametrize("value", [
        "yellow", "#FFFF00", "#ff0", "rgba(1, 2, 3, 0.4)", "rgb(10,20,30)",
        "Bold", "  16PX ", "rgb(300, 0, 0)", "magenta",
    ])
    def test_normalize_twice_equals_once(self, value):
        once = normalize(value)
        assert normalize(once) == once


class TestValuesMatch:
    def test_named_against_computed(self):
        assert values_match("rgb(255, 255, 0)", "yellow")

    def test_mismatch(self):
        assert not values_match("rgb(0, 0, 255)", "yellow")

    def test_non_color_exact_fallback(self):
        assert values_match("700", " 700 ")
        assert not values_match("700", "bold")
